"""License allocation domain model."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AllocStatus(StrEnum):
    """Stored allocation status.

    A free seat is the absence of an allocation, so there is no AVAILABLE
    member.
    """

    ACTIVE = "active"
    AWAITING_INACT = "awaiting_inactivation"
    HISTORY = "history"


class StatusHistory(BaseModel):
    """Immutable record of one allocation status transition."""

    model_config = ConfigDict(frozen=True)

    id: str
    from_status: AllocStatus | None = None
    to_status: AllocStatus
    reason: str | None = None
    created_by_id: str | None = None
    created_at: datetime


class LicenseAllocation(BaseModel):
    """Assignment of one license unit from a pool to one person.

    ``unit_cost`` is a snapshot of the product cost at allocation time and is
    never recomputed from the product.
    """

    id: str
    pool_id: str
    person_id: str
    cost_center_id: str | None = None
    status: AllocStatus = AllocStatus.ACTIVE
    access_key: str | None = None
    observation: str | None = None
    third_party: bool = False
    unit_cost: Decimal = Decimal("0")
    history: list[StatusHistory] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @property
    def holds_capacity(self) -> bool:
        """Whether this allocation consumes a unit of its pool."""
        return self.status != AllocStatus.HISTORY
