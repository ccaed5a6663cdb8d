"""Dashboard service for allocation and cost overviews."""

from collections import Counter
from decimal import Decimal

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus
from sam_ledger.models.domain.product import CostPeriod
from sam_ledger.models.dto.dashboard import DashboardResponse, NamedAmount, NamedCount
from sam_ledger.models.dto.details import LicenseAllocationWithDetails, LicensePoolWithDetails
from sam_ledger.repositories.allocation_repository import AllocationRepository
from sam_ledger.repositories.product_repository import ProductRepository
from sam_ledger.services.view_service import ViewService

UNKNOWN_VENDOR = "Other"
UNKNOWN_COST_CENTER = "N/A"


def annual_cost(allocation: LicenseAllocationWithDetails) -> Decimal:
    """Annualize an allocation's snapshot cost; monthly costs are multiplied by 12."""
    if allocation.pool.product.cost_period == CostPeriod.MONTH:
        return allocation.unit_cost * 12
    return allocation.unit_cost


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()
        self.allocation_repo = AllocationRepository(store)
        self.product_repo = ProductRepository(store)
        self.view_service = ViewService(store)

    def get_dashboard(self) -> DashboardResponse:
        """Compute dashboard statistics over ACTIVE allocations.

        Returns:
            DashboardResponse
        """
        allocations = self.view_service.allocations_with_details()
        active = [a for a in allocations if a.status == AllocStatus.ACTIVE]
        awaiting = sum(1 for a in allocations if a.status == AllocStatus.AWAITING_INACT)
        top_n = self.settings.dashboard_top_n

        by_vendor: Counter[str] = Counter()
        by_product: dict[str, NamedAmount] = {}
        by_cost_center: dict[str, NamedAmount] = {}
        total = Decimal("0")

        for alloc in active:
            cost = annual_cost(alloc)
            total += cost

            vendor = alloc.pool.product.vendor
            by_vendor[vendor.name if vendor else UNKNOWN_VENDOR] += 1

            product = alloc.pool.product
            entry = by_product.setdefault(product.id, NamedAmount(name=product.name, value=Decimal("0")))
            entry.value += cost

            cc = alloc.cost_center
            entry = by_cost_center.setdefault(
                cc.id if cc else "",
                NamedAmount(name=cc.code if cc else UNKNOWN_COST_CENTER, value=Decimal("0")),
            )
            entry.value += cost

        return DashboardResponse(
            active_allocations=len(active),
            awaiting_inactivation=awaiting,
            total_products=self.product_repo.count(),
            total_annual_cost=total,
            allocations_by_vendor=[
                NamedCount(name=name, value=count) for name, count in by_vendor.most_common()
            ],
            top_products_by_cost=sorted(by_product.values(), key=lambda x: x.value, reverse=True)[:top_n],
            cost_by_cost_center=sorted(by_cost_center.values(), key=lambda x: x.value, reverse=True)[:top_n],
            low_availability_pools=self.get_low_availability_pools(),
        )

    def get_low_availability_pools(self) -> list[LicensePoolWithDetails]:
        """Pools whose free share is under the configured threshold, scarcest first."""
        threshold = self.settings.low_availability_threshold
        pools = [
            p
            for p in self.view_service.pools_with_details()
            if p.total_quantity > 0 and p.available_qty / p.total_quantity < threshold
        ]
        pools.sort(key=lambda p: p.available_qty / p.total_quantity)
        return pools[: self.settings.low_availability_limit]

    def get_allocation_counts_by_status(self) -> dict[AllocStatus, int]:
        """Count allocations per stored status (every status present, zero if unused)."""
        counts = {status: 0 for status in AllocStatus}
        for alloc in self.allocation_repo.get_all():
            counts[alloc.status] += 1
        return counts
