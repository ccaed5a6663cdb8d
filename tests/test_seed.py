"""Tests for the reference data set."""

from sam_ledger.config import Settings
from sam_ledger.models.domain.allocation import AllocStatus
from sam_ledger.models.domain.person import PersonStatus
from sam_ledger.seed import build_reference_store, load_reference_data
from sam_ledger.services.allocation_service import AllocationService
from sam_ledger.services.reharvesting_service import ReharvestingService
from sam_ledger.services.view_service import ViewService
from tests.conftest import assert_pools_consistent


class TestReferenceData:
    """Test that the seeded ledger is internally consistent."""

    def test_deterministic(self) -> None:
        assert build_reference_store().dump() == build_reference_store().dump()

    def test_pools_consistent(self, settings: Settings) -> None:
        store = build_reference_store()

        assert_pools_consistent(store)
        assert AllocationService(store, settings).check_pool_consistency() == []

    def test_references_resolve(self) -> None:
        store = build_reference_store()

        views = ViewService(store).allocations_with_details()

        assert len(views) == len(store.allocations)

    def test_unique_ids(self) -> None:
        data = load_reference_data()

        for name, items in data.items():
            ids = [item.id for item in items]
            assert len(ids) == len(set(ids)), name

    def test_inactive_people_await_inactivation(self) -> None:
        store = build_reference_store()
        inactive = {p.id for p in store.people if p.status == PersonStatus.INACTIVE}

        held = [a for a in store.allocations if a.person_id in inactive]

        assert held
        assert all(a.status == AllocStatus.AWAITING_INACT for a in held)

    def test_allocation_cost_matches_product(self) -> None:
        store = build_reference_store()
        products = {p.id: p for p in store.products}
        pools = {p.id: p for p in store.pools}

        for allocation in store.allocations:
            assert allocation.unit_cost == products[pools[allocation.pool_id].product_id].unit_cost

    async def test_reharvest_reference_store(self, settings: Settings) -> None:
        store = build_reference_store()
        awaiting = sum(1 for a in store.allocations if a.status == AllocStatus.AWAITING_INACT)
        result = await ReharvestingService(store, settings).run_reharvesting_job()

        assert result.reharvested == awaiting
        assert_pools_consistent(store)
