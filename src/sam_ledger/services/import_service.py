"""Import service for bulk allocation imports from CSV exports.

Each valid row resolves (or creates) its vendor, product, person and pool by
natural key, then becomes one ACTIVE allocation unless the person already
holds a non-HISTORY allocation on that pool. Everything a run would create is
staged first; a dry run evaluates the same staging and discards it.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.exceptions import ImportParseError
from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation, StatusHistory
from sam_ledger.models.domain.person import Person, PersonStatus
from sam_ledger.models.domain.pool import LicensePool, PoolStatus
from sam_ledger.models.domain.product import CostPeriod, SoftwareProduct
from sam_ledger.models.domain.vendor import Vendor
from sam_ledger.models.dto.import_dto import (
    ImportIssue,
    ImportResult,
    RowValidationFailure,
    ValidatedRow,
)
from sam_ledger.models.dto.notification import NotificationType
from sam_ledger.repositories.allocation_repository import AllocationRepository, allocation_key
from sam_ledger.repositories.person_repository import PersonRepository
from sam_ledger.repositories.pool_repository import PoolRepository
from sam_ledger.repositories.product_repository import ProductRepository
from sam_ledger.repositories.vendor_repository import VendorRepository
from sam_ledger.services.audit_service import AuditAction, AuditService, ResourceType
from sam_ledger.services.notification_service import NotificationService
from sam_ledger.utils.file_parser import (
    IMPORT_COLUMNS,
    apply_column_mapping,
    decode_content,
    parse_csv_text,
    row_to_dict,
)
from sam_ledger.utils.ids import generate_id, utc_now
from sam_ledger.utils.secure_logging import log_warning
from sam_ledger.utils.validation import validate_row

logger = logging.getLogger(__name__)

IMPORT_AUDIT_ID = "CSV"


@dataclass
class ImportBatch:
    """Entities staged by one import run, in creation order."""

    vendors: list[Vendor] = field(default_factory=list)
    products: list[SoftwareProduct] = field(default_factory=list)
    people: list[Person] = field(default_factory=list)
    pools: list[LicensePool] = field(default_factory=list)
    allocations: list[LicenseAllocation] = field(default_factory=list)
    allocation_keys: set[str] = field(default_factory=set)

    def find_vendor(self, name: str) -> Vendor | None:
        key = name.lower()
        return next((v for v in self.vendors if v.name.lower() == key), None)

    def find_product(self, name: str) -> SoftwareProduct | None:
        key = name.lower()
        return next((p for p in self.products if p.name.lower() == key), None)

    def find_person(self, email: str) -> Person | None:
        key = email.lower()
        return next((p for p in self.people if p.email.lower() == key), None)

    def find_pool(self, product_id: str) -> LicensePool | None:
        return next((p for p in self.pools if p.product_id == product_id), None)


class ImportService:
    """Service for importing allocations from CSV files."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()
        self.vendor_repo = VendorRepository(store)
        self.product_repo = ProductRepository(store)
        self.person_repo = PersonRepository(store)
        self.pool_repo = PoolRepository(store)
        self.allocation_repo = AllocationRepository(store)
        self.audit_service = AuditService(store, self.settings)
        self.notification_service = NotificationService(store, self.settings)

    async def import_file(
        self,
        source: bytes | Path,
        column_mapping: dict[str, str],
        dry_run: bool = False,
    ) -> ImportResult:
        """Read an uploaded or on-disk file and import it.

        Args:
            source: Raw file bytes, or a path to read
            column_mapping: Logical field id -> header name
            dry_run: Validate and report without changing the store

        Returns:
            ImportResult

        Raises:
            ImportParseError: If the file is empty, too large or undecodable
        """
        if isinstance(source, Path):
            try:
                size = source.stat().st_size
            except OSError as e:
                raise ImportParseError("File could not be read", {"reason": type(e).__name__}) from e
            self._check_file_size(size)
            content = await asyncio.to_thread(source.read_bytes)
        else:
            content = source

        self._check_file_size(len(content))
        if not content:
            raise ImportParseError("File is empty")

        return await self.import_data_from_csv(decode_content(content), column_mapping, dry_run)

    async def import_data_from_csv(
        self,
        file_contents: str | bytes,
        column_mapping: dict[str, str],
        dry_run: bool = False,
    ) -> ImportResult:
        """Import allocations from CSV text.

        Per-row problems are collected in the result and never abort the run.
        With ``dry_run`` the counts are exactly those a real run would report,
        and the store is left untouched.

        Args:
            file_contents: CSV text (bytes are decoded first)
            column_mapping: Logical field id -> header name
            dry_run: Validate and report without changing the store

        Returns:
            ImportResult with ok count, errors, warnings and duplicates

        Raises:
            ImportParseError: If the content is empty, or exceeds a configured row cap
        """
        text = decode_content(file_contents) if isinstance(file_contents, bytes) else file_contents

        try:
            parsed = parse_csv_text(text)
        except ImportParseError as e:
            log_warning(logger, "Import rejected", e)
            raise

        max_rows = self.settings.import_max_rows
        if max_rows is not None and parsed["total_rows"] > max_rows:
            raise ImportParseError(
                f"File has too many rows ({parsed['total_rows']}). "
                f"Maximum is {max_rows}",
                {"total_rows": parsed["total_rows"]},
            )

        async with self.store.transaction():
            result, batch = self._evaluate(parsed["columns"], parsed["rows"], column_mapping)

            if dry_run:
                logger.info(
                    "Import dry run: %d ok, %d errors, %d warnings, %d duplicates",
                    result.ok,
                    len(result.errors),
                    len(result.warnings),
                    len(result.duplicates),
                )
                return result

            if result.ok == 0:
                self.notification_service.notify(
                    "No valid records to import.",
                    NotificationType.WARNING,
                )
                logger.info("Import found no valid records (%d errors)", len(result.errors))
                return result

            self._commit(batch, result)

        logger.info(
            "Import committed: %d allocations, %d new people, %d new products, %d new pools",
            len(batch.allocations),
            len(batch.people),
            len(batch.products),
            len(batch.pools),
        )
        return result

    def generate_template(self, include_examples: bool = True) -> str:
        """Generate a CSV template for imports.

        Args:
            include_examples: Whether to include example rows

        Returns:
            CSV content as string
        """
        lines = [",".join(column.name for column in IMPORT_COLUMNS)]
        if include_examples:
            lines.append("Adobe Photoshop,jane.doe@example.com,Jane Doe,Adobe,105.00")
            lines.append("Miro Business,john.roe@example.com,John Roe,Miro,")
            lines.append("Internal Wiki,john.roe@example.com,John Roe,,")
        return "\n".join(lines)

    def _check_file_size(self, size: int) -> None:
        if size > self.settings.import_max_file_size:
            raise ImportParseError(
                f"File too large. Maximum size is {self.settings.import_max_file_size // (1024 * 1024)} MB",
                {"file_size": size},
            )

    def _evaluate(
        self,
        columns: list[str],
        rows: list[list[str]],
        column_mapping: dict[str, str],
    ) -> tuple[ImportResult, ImportBatch]:
        """Validate and resolve every row against the store plus staged entities."""
        result = ImportResult()
        batch = ImportBatch()
        holding_keys = self.allocation_repo.get_holding_keys()

        for i, row in enumerate(rows):
            # +1 for the header line, +1 for 1-based numbering
            row_index = i + 2
            row_data = row_to_dict(columns, row)

            validation = validate_row(apply_column_mapping(columns, row, column_mapping))
            if isinstance(validation, RowValidationFailure):
                result.errors.append(
                    ImportIssue(row_index=row_index, row_data=row_data, message=validation.error)
                )
                continue
            data = validation.data

            # A new product takes the row cost as its unit cost, which cannot be negative
            if data.cost is not None and data.cost < 0 and self._find_product(data, batch) is None:
                result.errors.append(
                    ImportIssue(
                        row_index=row_index,
                        row_data=row_data,
                        message=f"Cost '{data.cost}' cannot be negative for new product '{data.product_name}'.",
                    )
                )
                continue

            vendor = self._resolve_vendor(data, batch)
            product, created = self._resolve_product(data, vendor, batch)
            if not created and data.cost is not None and product.unit_cost != data.cost:
                result.warnings.append(
                    ImportIssue(
                        row_index=row_index,
                        row_data=row_data,
                        message=(
                            f"Existing cost of product '{product.name}' ({product.unit_cost}) "
                            f"differs from imported cost ({data.cost}). The existing cost is kept."
                        ),
                    )
                )
            person = self._resolve_person(data, batch)
            pool = self._resolve_pool(product, batch)

            key = allocation_key(person.id, pool.id)
            if key in holding_keys or key in batch.allocation_keys:
                result.duplicates.append(
                    ImportIssue(
                        row_index=row_index,
                        row_data=row_data,
                        message=(
                            f"Allocation of '{person.display_name}' to product '{product.name}' "
                            "already exists and is active (or is repeated in the file)."
                        ),
                    )
                )
                continue

            now = utc_now()
            batch.allocations.append(
                LicenseAllocation(
                    id=generate_id("alloc"),
                    pool_id=pool.id,
                    person_id=person.id,
                    status=AllocStatus.ACTIVE,
                    unit_cost=product.unit_cost,
                    third_party=False,
                    history=[
                        StatusHistory(
                            id=generate_id("hist"),
                            to_status=AllocStatus.ACTIVE,
                            reason=self.settings.import_history_reason,
                            created_at=now,
                        )
                    ],
                    created_at=now,
                    updated_at=now,
                )
            )
            batch.allocation_keys.add(key)
            result.ok += 1

        return result, batch

    def _resolve_vendor(self, data: ValidatedRow, batch: ImportBatch) -> Vendor | None:
        if not data.vendor_name:
            return None
        vendor = self.vendor_repo.get_by_name(data.vendor_name) or batch.find_vendor(data.vendor_name)
        if vendor is None:
            vendor = Vendor(id=generate_id("vendor"), name=data.vendor_name)
            batch.vendors.append(vendor)
        return vendor

    def _find_product(self, data: ValidatedRow, batch: ImportBatch) -> SoftwareProduct | None:
        return self.product_repo.get_by_name(data.product_name) or batch.find_product(data.product_name)

    def _resolve_product(
        self,
        data: ValidatedRow,
        vendor: Vendor | None,
        batch: ImportBatch,
    ) -> tuple[SoftwareProduct, bool]:
        """Return the matched or new product, and whether it was created."""
        product = self._find_product(data, batch)
        if product is not None:
            return product, False

        product = SoftwareProduct(
            id=generate_id("prod"),
            name=data.product_name,
            vendor_id=vendor.id if vendor else None,
            unit_cost=data.cost if data.cost is not None else 0,
            cost_period=CostPeriod.UNKNOWN if data.cost is not None else CostPeriod.FREE,
            tags=set(),
        )
        batch.products.append(product)
        return product, True

    def _resolve_person(self, data: ValidatedRow, batch: ImportBatch) -> Person:
        person = self.person_repo.get_by_email(data.person_email) or batch.find_person(data.person_email)
        if person is None:
            person = Person(
                id=generate_id("person"),
                email=data.person_email,
                display_name=data.person_name,
                status=PersonStatus.ACTIVE,
            )
            batch.people.append(person)
        return person

    def _resolve_pool(self, product: SoftwareProduct, batch: ImportBatch) -> LicensePool:
        pool = self.pool_repo.get_first_by_product(product.id) or batch.find_pool(product.id)
        if pool is None:
            pool = LicensePool(
                id=generate_id("pool"),
                product_id=product.id,
                total_quantity=0,
                available_qty=0,
                status=PoolStatus.ACTIVE,
            )
            batch.pools.append(pool)
        return pool

    def _commit(self, batch: ImportBatch, result: ImportResult) -> None:
        """Apply a staged batch. Must run inside the store transaction."""
        self.vendor_repo.add_many(batch.vendors)
        self.product_repo.add_many(batch.products)
        self.person_repo.add_many(batch.people)
        self.pool_repo.add_many(batch.pools)

        added = Counter(a.pool_id for a in batch.allocations)
        for pool in self.pool_repo.get_all():
            pool.total_quantity += added.get(pool.id, 0)

        self.allocation_repo.add_many(batch.allocations)
        # Recomputed from scratch so drifted counters are repaired too
        self.store.recompute_available()

        self.audit_service.log(
            action=AuditAction.CREATE_BULK,
            entity=ResourceType.IMPORT,
            entity_id=IMPORT_AUDIT_ID,
            details=(
                f"Import completed. {result.ok} succeeded, {len(result.errors)} errors, "
                f"{len(result.duplicates)} duplicates."
            ),
            actor_name=self.settings.admin_actor_name,
        )
        self.notification_service.notify(
            f"Import completed: {result.ok} succeeded, {len(result.errors)} errors.",
            NotificationType.WARNING if result.errors else NotificationType.SUCCESS,
        )
