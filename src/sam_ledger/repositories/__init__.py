"""Repository package for in-memory collection access."""

from sam_ledger.repositories.allocation_repository import AllocationRepository
from sam_ledger.repositories.audit_repository import AuditRepository
from sam_ledger.repositories.base import BaseRepository
from sam_ledger.repositories.contract_repository import ContractRepository
from sam_ledger.repositories.cost_center_repository import CostCenterRepository
from sam_ledger.repositories.department_repository import DepartmentRepository
from sam_ledger.repositories.person_repository import PersonRepository
from sam_ledger.repositories.pool_repository import PoolRepository
from sam_ledger.repositories.product_repository import ProductRepository
from sam_ledger.repositories.request_repository import RequestRepository
from sam_ledger.repositories.vendor_repository import VendorRepository

__all__ = [
    "AllocationRepository",
    "AuditRepository",
    "BaseRepository",
    "ContractRepository",
    "CostCenterRepository",
    "DepartmentRepository",
    "PersonRepository",
    "PoolRepository",
    "ProductRepository",
    "RequestRepository",
    "VendorRepository",
]
