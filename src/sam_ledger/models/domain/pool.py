"""License pool domain model."""

from enum import StrEnum

from pydantic import BaseModel, Field


class PoolStatus(StrEnum):
    """License pool status enum."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXHAUSTED = "exhausted"


class LicensePool(BaseModel):
    """Capacity bucket of interchangeable licenses for one product.

    ``available_qty`` always equals ``total_quantity`` minus the number of
    allocations on the pool whose status is not HISTORY.
    """

    id: str
    product_id: str
    contract_id: str | None = None
    total_quantity: int = Field(default=0, ge=0)
    available_qty: int = 0
    status: PoolStatus = PoolStatus.ACTIVE
