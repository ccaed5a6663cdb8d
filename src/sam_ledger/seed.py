"""Deterministic reference data used to initialize a ledger store.

This is a fixture, not part of the engine: tests and scripts inject their own
data through ``LedgerStore`` directly whenever they need something specific.
"""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any

from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation, StatusHistory
from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person, PersonStatus
from sam_ledger.models.domain.pool import LicensePool, PoolStatus
from sam_ledger.models.domain.product import CostPeriod, SoftwareProduct
from sam_ledger.models.domain.vendor import Contract, Vendor

SEED_EPOCH = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

# Statuses handed out in rotation to active holders
STATUS_ROTATION = (
    AllocStatus.ACTIVE,
    AllocStatus.ACTIVE,
    AllocStatus.ACTIVE,
    AllocStatus.AWAITING_INACT,
    AllocStatus.HISTORY,
)

# name, vendor id, unit cost, period, pool size
PRODUCT_TABLE = [
    ("MS Project Plan 3", "1", "145", CostPeriod.MONTH, 12),
    ("MS Visio Plan 2", "1", "72", CostPeriod.MONTH, 10),
    ("Adobe Acrobat Pro", "2", "96", CostPeriod.MONTH, 15),
    ("Adobe Photoshop", "2", "105", CostPeriod.MONTH, 10),
    ("Autocad", "3", "8500", CostPeriod.YEAR, 8),
    ("Figma Enterprise", "4", "360", CostPeriod.YEAR, 5),
    ("Miro Business", "5", "192", CostPeriod.YEAR, 6),
]


def _tags_for(name: str) -> set[str]:
    if name.startswith("Adobe"):
        return {"Design", "Creative"}
    if name.startswith("MS"):
        return {"Productivity", "Microsoft"}
    return {"Engineering"}


def load_reference_data() -> dict[str, list[Any]]:
    """Build the reference collections.

    Returns:
        Dict of collection name -> entities, accepted as ``LedgerStore`` kwargs
    """
    vendors = [
        Vendor(id="1", name="Microsoft"),
        Vendor(id="2", name="Adobe"),
        Vendor(id="3", name="Autodesk"),
        Vendor(id="4", name="Figma"),
        Vendor(id="5", name="Miro"),
        Vendor(id="6", name="Other"),
    ]
    contracts = [
        Contract(id="C1", number="MS-EA-2024", vendor_id="1", start_date=date(2024, 1, 1), end_date=date(2026, 12, 31)),
        Contract(id="C2", number="ADOBE-VIP-2024", vendor_id="2", start_date=date(2024, 3, 1), end_date=date(2025, 2, 28)),
    ]
    departments = [
        Department(id="D1", name="Development", directorate="Technology"),
        Department(id="D2", name="Digital Marketing", directorate="Marketing"),
        Department(id="D3", name="HR", directorate="Human Resources"),
    ]
    cost_centers = [
        CostCenter(id="CC100", code="CC100", name="Internal Projects", department_id="D1"),
        CostCenter(id="CC200", code="CC200", name="Campaigns", department_id="D2"),
        CostCenter(id="CC300", code="CC300", name="Recruiting", department_id="D3"),
    ]
    people = [
        Person(id="P101", email="ana.silva@company.com", matricula="M12345", display_name="Ana Silva",
               manager_upn="carlos.pereira@company.com", department_id="D1", status=PersonStatus.ACTIVE),
        Person(id="P102", email="bruno.costa@company.com", matricula="M12346", display_name="Bruno Costa",
               manager_upn="carlos.pereira@company.com", department_id="D1", status=PersonStatus.ACTIVE),
        Person(id="P103", email="carla.dias@company.com", matricula="M12347", display_name="Carla Dias",
               manager_upn="sofia.lima@company.com", department_id="D2", status=PersonStatus.ACTIVE),
        Person(id="P104", email="daniel.alves@company.com", matricula="M12348", display_name="Daniel Alves",
               manager_upn="sofia.lima@company.com", department_id="D2", status=PersonStatus.INACTIVE),
        Person(id="P105", email="eduarda.rocha@company.com", matricula="M12349", display_name="Eduarda Rocha",
               manager_upn="roberto.mendes@company.com", department_id="D3", status=PersonStatus.ACTIVE),
        Person(id="P106", email="fabio.martins@company.com", matricula="M12350", display_name="Fabio Martins",
               manager_upn="roberto.mendes@company.com", department_id="D3", status=PersonStatus.ACTIVE),
    ]
    cost_center_by_department = {cc.department_id: cc.id for cc in cost_centers}
    contract_by_vendor = {c.vendor_id: c.id for c in contracts}

    products = []
    pools = []
    for i, (name, vendor_id, cost, period, size) in enumerate(PRODUCT_TABLE, start=1):
        product = SoftwareProduct(
            id=f"PROD{i}",
            name=name,
            vendor_id=vendor_id,
            unit_cost=Decimal(cost),
            cost_period=period,
            tags=_tags_for(name),
        )
        products.append(product)
        pools.append(
            LicensePool(
                id=f"POOL-{product.id}",
                product_id=product.id,
                contract_id=contract_by_vendor.get(vendor_id),
                total_quantity=size,
                status=PoolStatus.ACTIVE,
            )
        )

    allocations = []
    for i, (product, pool) in enumerate(zip(products, pools)):
        for j, person in enumerate(people):
            if (i + j) % 3 == 0:
                continue
            if person.status == PersonStatus.INACTIVE:
                status = AllocStatus.AWAITING_INACT
            else:
                status = STATUS_ROTATION[(i + j) % len(STATUS_ROTATION)]
            created_at = SEED_EPOCH + timedelta(days=7 * i + j)
            allocations.append(
                LicenseAllocation(
                    id=f"ALLOC{len(allocations) + 1}",
                    pool_id=pool.id,
                    person_id=person.id,
                    cost_center_id=cost_center_by_department.get(person.department_id),
                    status=status,
                    access_key=f"KEY-{i + 1:02d}{j + 1:02d}",
                    unit_cost=product.unit_cost,
                    history=[
                        StatusHistory(
                            id=f"HIST{len(allocations) + 1}",
                            to_status=status,
                            reason="Initial load",
                            created_at=created_at,
                        )
                    ],
                    created_at=created_at,
                    updated_at=created_at,
                )
            )

    audit_log = [
        AuditLog(
            id="LOG1",
            actor_id="SYSTEM",
            actor_name="System",
            entity="Import",
            entity_id="SEED",
            action="create_bulk",
            details=f"Reference data loaded with {len(allocations)} allocations.",
            created_at=SEED_EPOCH,
        )
    ]

    return {
        "vendors": vendors,
        "contracts": contracts,
        "departments": departments,
        "cost_centers": cost_centers,
        "people": people,
        "products": products,
        "pools": pools,
        "allocations": allocations,
        "audit_log": audit_log,
    }


def build_reference_store() -> LedgerStore:
    """Create a ledger store seeded with the reference data."""
    store = LedgerStore(**load_reference_data())
    store.recompute_available()
    return store
