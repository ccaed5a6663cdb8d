"""Dashboard DTOs."""

from decimal import Decimal

from pydantic import BaseModel

from sam_ledger.models.dto.details import LicensePoolWithDetails


class NamedCount(BaseModel):
    """Label with a count, used for chart series."""

    name: str
    value: int


class NamedAmount(BaseModel):
    """Label with an annualized amount, used for chart series."""

    name: str
    value: Decimal


class DashboardResponse(BaseModel):
    """Dashboard response DTO."""

    active_allocations: int
    awaiting_inactivation: int
    total_products: int
    total_annual_cost: Decimal
    allocations_by_vendor: list[NamedCount]
    top_products_by_cost: list[NamedAmount]
    cost_by_cost_center: list[NamedAmount]
    low_availability_pools: list[LicensePoolWithDetails]
