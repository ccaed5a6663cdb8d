"""Domain models package."""

from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation, StatusHistory
from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person, PersonStatus
from sam_ledger.models.domain.pool import LicensePool, PoolStatus
from sam_ledger.models.domain.product import CostPeriod, SoftwareProduct
from sam_ledger.models.domain.software_request import RequestStatus, SoftwareRequest
from sam_ledger.models.domain.vendor import Contract, Vendor

__all__ = [
    "AllocStatus",
    "AuditLog",
    "Contract",
    "CostCenter",
    "CostPeriod",
    "Department",
    "LicenseAllocation",
    "LicensePool",
    "Person",
    "PersonStatus",
    "PoolStatus",
    "RequestStatus",
    "SoftwareProduct",
    "SoftwareRequest",
    "StatusHistory",
    "Vendor",
]
