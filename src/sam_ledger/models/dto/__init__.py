"""Data Transfer Objects package."""

from sam_ledger.models.dto.audit import AuditLogCreate
from sam_ledger.models.dto.dashboard import DashboardResponse
from sam_ledger.models.dto.details import (
    LicenseAllocationWithDetails,
    LicensePoolWithDetails,
    SoftwareProductWithDetails,
    SoftwareRequestWithDetails,
)
from sam_ledger.models.dto.import_dto import ImportIssue, ImportResult, ValidatedRow
from sam_ledger.models.dto.notification import Notification, NotificationCreate, NotificationType
from sam_ledger.models.dto.reharvest import ReclaimableAllocation, ReharvestResult

__all__ = [
    "AuditLogCreate",
    "DashboardResponse",
    "ImportIssue",
    "ImportResult",
    "LicenseAllocationWithDetails",
    "LicensePoolWithDetails",
    "Notification",
    "NotificationCreate",
    "NotificationType",
    "ReclaimableAllocation",
    "ReharvestResult",
    "SoftwareProductWithDetails",
    "SoftwareRequestWithDetails",
    "ValidatedRow",
]
