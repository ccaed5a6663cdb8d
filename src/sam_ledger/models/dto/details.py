"""Denormalized read projections joining entities for display."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from sam_ledger.models.domain.allocation import AllocStatus, StatusHistory
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person
from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.models.domain.product import SoftwareProduct
from sam_ledger.models.domain.software_request import SoftwareRequest
from sam_ledger.models.domain.vendor import Contract, Vendor


class SoftwareProductWithDetails(SoftwareProduct):
    """Product joined with its vendor."""

    vendor: Vendor | None = None


class LicensePoolWithDetails(LicensePool):
    """Pool joined with its product and contract."""

    product: SoftwareProductWithDetails
    contract: Contract | None = None


class LicenseAllocationWithDetails(BaseModel):
    """Allocation with pool, person, cost center and department resolved."""

    id: str
    status: AllocStatus
    access_key: str | None = None
    observation: str | None = None
    third_party: bool = False
    unit_cost: Decimal
    history: list[StatusHistory]
    created_at: datetime
    updated_at: datetime
    pool: LicensePoolWithDetails
    person: Person
    cost_center: CostCenter | None = None
    department: Department | None = None


class SoftwareRequestWithDetails(SoftwareRequest):
    """Software request joined with requester and product."""

    requester: Person
    product: SoftwareProduct
