"""Reharvesting DTOs."""

from enum import StrEnum

from pydantic import BaseModel, Field

from sam_ledger.models.dto.details import LicenseAllocationWithDetails


class ReclaimReason(StrEnum):
    """Why an allocation is a reharvesting candidate."""

    AWAITING_INACTIVATION = "awaiting_inactivation"
    INACTIVE_PERSON = "inactive_person"


class ReclaimableAllocation(BaseModel):
    """Allocation that could be returned to its pool."""

    allocation: LicenseAllocationWithDetails
    reason: ReclaimReason


class ReharvestResult(BaseModel):
    """Outcome of one reharvesting run."""

    reharvested: int = 0
    released_by_pool: dict[str, int] = Field(default_factory=dict)


class PoolConsistencyIssue(BaseModel):
    """Pool whose available quantity disagrees with its allocations."""

    pool_id: str
    total_quantity: int
    available_qty: int
    expected_available_qty: int
