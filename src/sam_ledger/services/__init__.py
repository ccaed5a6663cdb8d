"""Services package."""

from sam_ledger.services.allocation_service import AllocationService
from sam_ledger.services.audit_service import AuditService
from sam_ledger.services.dashboard_service import DashboardService
from sam_ledger.services.import_service import ImportService
from sam_ledger.services.notification_service import NotificationService
from sam_ledger.services.reharvesting_service import ReharvestingService
from sam_ledger.services.request_service import RequestService
from sam_ledger.services.view_service import ViewService

__all__ = [
    "AllocationService",
    "AuditService",
    "DashboardService",
    "ImportService",
    "NotificationService",
    "ReharvestingService",
    "RequestService",
    "ViewService",
]
