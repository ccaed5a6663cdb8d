"""Operation surface consumed by presentation collaborators.

``SamConsole`` wires every service to one injected ``LedgerStore`` and
exposes read snapshots, derived views and the mutating operations. Nothing
it returns is a live store object.
"""

from pathlib import Path

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation
from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person
from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.models.domain.product import SoftwareProduct
from sam_ledger.models.domain.software_request import SoftwareRequest
from sam_ledger.models.domain.vendor import Contract, Vendor
from sam_ledger.models.dto.audit import AuditLogCreate
from sam_ledger.models.dto.dashboard import DashboardResponse
from sam_ledger.models.dto.details import (
    LicenseAllocationWithDetails,
    LicensePoolWithDetails,
    SoftwareProductWithDetails,
    SoftwareRequestWithDetails,
)
from sam_ledger.models.dto.import_dto import ImportResult
from sam_ledger.models.dto.notification import Notification, NotificationCreate
from sam_ledger.models.dto.reharvest import ReclaimableAllocation, ReharvestResult
from sam_ledger.services.allocation_service import AllocationService, coerce_status
from sam_ledger.services.audit_service import AuditAction, AuditService, ResourceType
from sam_ledger.services.dashboard_service import DashboardService
from sam_ledger.services.import_service import ImportService
from sam_ledger.services.notification_service import NotificationService
from sam_ledger.services.reharvesting_service import ReharvestingService
from sam_ledger.services.request_service import RequestService
from sam_ledger.services.view_service import ViewService


class SamConsole:
    """Facade over the ledger services for one store."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize every service against the given store."""
        self.store = store
        self.settings = settings or get_settings()
        self.audit_service = AuditService(store, self.settings)
        self.notification_service = NotificationService(store, self.settings)
        self.view_service = ViewService(store)
        self.allocation_service = AllocationService(store, self.settings)
        self.reharvesting_service = ReharvestingService(store, self.settings)
        self.import_service = ImportService(store, self.settings)
        self.dashboard_service = DashboardService(store, self.settings)
        self.request_service = RequestService(store, self.settings)

    # ------------------------------------------------------------------
    # Read snapshots (deep copies; mutating them does not touch the store)
    # ------------------------------------------------------------------

    @property
    def vendors(self) -> list[Vendor]:
        return [v.model_copy(deep=True) for v in self.store.vendors]

    @property
    def contracts(self) -> list[Contract]:
        return [c.model_copy(deep=True) for c in self.store.contracts]

    @property
    def products(self) -> list[SoftwareProduct]:
        return [p.model_copy(deep=True) for p in self.store.products]

    @property
    def pools(self) -> list[LicensePool]:
        return [p.model_copy(deep=True) for p in self.store.pools]

    @property
    def departments(self) -> list[Department]:
        return [d.model_copy(deep=True) for d in self.store.departments]

    @property
    def cost_centers(self) -> list[CostCenter]:
        return [c.model_copy(deep=True) for c in self.store.cost_centers]

    @property
    def people(self) -> list[Person]:
        return [p.model_copy(deep=True) for p in self.store.people]

    @property
    def allocations(self) -> list[LicenseAllocation]:
        return [a.model_copy(deep=True) for a in self.store.allocations]

    @property
    def requests(self) -> list[SoftwareRequest]:
        return [r.model_copy(deep=True) for r in self.store.requests]

    @property
    def audit_log(self) -> list[AuditLog]:
        """Audit entries, newest first."""
        return [e.model_copy(deep=True) for e in self.audit_service.list_entries()]

    @property
    def notifications(self) -> list[Notification]:
        """Queued notifications, newest first."""
        return [n.model_copy(deep=True) for n in self.notification_service.list_notifications()]

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def products_with_details(self) -> list[SoftwareProductWithDetails]:
        return self.view_service.products_with_details()

    @property
    def pools_with_details(self) -> list[LicensePoolWithDetails]:
        return self.view_service.pools_with_details()

    @property
    def allocations_with_details(self) -> list[LicenseAllocationWithDetails]:
        return self.view_service.allocations_with_details()

    @property
    def requests_with_details(self) -> list[SoftwareRequestWithDetails]:
        return self.view_service.requests_with_details()

    def get_dashboard(self) -> DashboardResponse:
        return self.dashboard_service.get_dashboard()

    def get_reclaimable(self) -> list[ReclaimableAllocation]:
        return self.reharvesting_service.get_reclaimable()

    # ------------------------------------------------------------------
    # Side-channel sinks
    # ------------------------------------------------------------------

    async def add_audit(self, entry: AuditLogCreate) -> AuditLog:
        """Append an audit entry."""
        async with self.store.transaction():
            log = self.audit_service.add(entry)
        return log.model_copy(deep=True)

    async def add_notification(self, notification: NotificationCreate) -> Notification:
        """Queue a notification (the queue keeps only the most recent ones)."""
        async with self.store.transaction():
            queued = self.notification_service.add(notification)
        return queued.model_copy(deep=True)

    async def remove_notification(self, notification_id: int) -> bool:
        """Dismiss a notification."""
        async with self.store.transaction():
            return self.notification_service.remove(notification_id)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def update_allocation_status(
        self,
        allocation_id: str,
        new_status: AllocStatus | str,
        reason: str | None,
    ) -> LicenseAllocation:
        """Move an allocation to any status, keeping pool capacity in step."""
        return await self.allocation_service.update_allocation_status(allocation_id, new_status, reason)

    async def change_allocation_status(
        self,
        allocation_id: str,
        new_status: AllocStatus | str,
        reason: str | None = None,
    ) -> LicenseAllocation:
        """Manual status change from the allocation screen, with an audit entry."""
        target = coerce_status(new_status)
        async with self.store.transaction():
            allocation = self.allocation_service.apply_status_change(
                allocation_id,
                target,
                reason or self.settings.manual_change_reason,
            )
            self.audit_service.log(
                action=AuditAction.UPDATE_STATUS,
                entity=ResourceType.LICENSE_ALLOCATION,
                entity_id=allocation.id,
                details=f"Status changed to {allocation.status}.",
                actor_id=self.settings.admin_actor_id,
                actor_name=self.settings.admin_actor_name,
            )
        return allocation.model_copy(deep=True)

    async def run_reharvesting_job(self) -> ReharvestResult:
        """Reclaim every allocation awaiting inactivation."""
        return await self.reharvesting_service.run_reharvesting_job()

    async def import_data_from_csv(
        self,
        file_contents: str | bytes | Path,
        column_mapping: dict[str, str],
        dry_run: bool = False,
    ) -> ImportResult:
        """Import allocations from CSV text, raw bytes or a file path."""
        if isinstance(file_contents, Path):
            return await self.import_service.import_file(file_contents, column_mapping, dry_run)
        return await self.import_service.import_data_from_csv(file_contents, column_mapping, dry_run)

    async def create_request(self, requester_id: str, product_id: str, justification: str) -> SoftwareRequest:
        return await self.request_service.create_request(requester_id, product_id, justification)

    async def approve_request(self, request_id: str) -> SoftwareRequest:
        return await self.request_service.approve_request(request_id)

    async def deny_request(self, request_id: str) -> SoftwareRequest:
        return await self.request_service.deny_request(request_id)
