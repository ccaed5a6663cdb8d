"""Software product domain model."""

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class CostPeriod(StrEnum):
    """Billing period of a product's unit cost."""

    MONTH = "month"
    YEAR = "year"
    ONE_TIME = "one_time"
    FREE = "free"
    UNKNOWN = "unknown"


class SoftwareProduct(BaseModel):
    """Catalog entry for a licensable software product."""

    id: str
    name: str
    vendor_id: str | None = None
    unit_cost: Decimal = Field(default=Decimal("0"), ge=0)
    cost_period: CostPeriod = CostPeriod.UNKNOWN
    tags: set[str] = Field(default_factory=set)
