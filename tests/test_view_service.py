"""Tests for the joined read views."""

import pytest

from sam_ledger.database import LedgerStore
from sam_ledger.exceptions import IntegrityError
from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.services.view_service import ViewService
from tests.conftest import make_allocation


class TestViews:
    """Test reference resolution."""

    def test_products_with_details(self, store: LedgerStore) -> None:
        views = {p.id: p for p in ViewService(store).products_with_details()}

        assert views["PR1"].vendor.name == "Autodesk"
        assert views["PR3"].vendor is None

    def test_pools_with_details(self, store: LedgerStore) -> None:
        views = {p.id: p for p in ViewService(store).pools_with_details()}

        assert views["P1"].product.name == "Autocad"
        assert views["P1"].product.vendor.name == "Autodesk"
        assert views["P1"].contract.number == "AD-2025"
        assert views["P2"].contract is None

    def test_allocations_with_details(self, store: LedgerStore) -> None:
        views = {a.id: a for a in ViewService(store).allocations_with_details()}

        assert len(views) == len(store.allocations)
        assert views["A1"].person.display_name == "Ana"
        assert views["A1"].cost_center.code == "CC100"
        assert views["A1"].department.name == "Engineering"
        assert views["A1"].pool.product.name == "Autocad"
        assert views["A2"].cost_center is None
        assert views["A2"].department is None

    def test_allocations_subset(self, store: LedgerStore) -> None:
        subset = [a for a in store.allocations if a.pool_id == "P2"]

        views = ViewService(store).allocations_with_details(subset)

        assert [v.id for v in views] == ["A5", "A6", "A7"]

    def test_views_are_detached(self, store: LedgerStore) -> None:
        view = ViewService(store).pools_with_details()[0]
        view.available_qty = 99

        assert store.pools[0].available_qty == 1

    def test_joined_entities_are_copies(self, store: LedgerStore) -> None:
        view = ViewService(store).allocations_with_details()[0]
        view.person.display_name = "Changed"

        assert store.people[0].display_name == "Ana"

    def test_recomputed_after_mutation(self, store: LedgerStore) -> None:
        service = ViewService(store)
        store.vendors[0].name = "Autodesk Inc."

        assert service.pools_with_details()[0].product.vendor.name == "Autodesk Inc."


class TestIntegrityErrors:
    """Test that dangling required references fail loudly."""

    def test_pool_without_product(self, store: LedgerStore) -> None:
        store.pools.append(LicensePool(id="PX", product_id="NOPE", total_quantity=1))

        with pytest.raises(IntegrityError) as exc_info:
            ViewService(store).pools_with_details()

        assert exc_info.value.details["reference_id"] == "NOPE"

    def test_allocation_without_pool(self, store: LedgerStore) -> None:
        store.allocations.append(make_allocation("AX", "NOPE", "U1"))

        with pytest.raises(IntegrityError):
            ViewService(store).allocations_with_details()

    def test_allocation_without_person(self, store: LedgerStore) -> None:
        store.allocations.append(make_allocation("AX", "P1", "NOBODY"))

        with pytest.raises(IntegrityError, match="Person NOBODY"):
            ViewService(store).allocations_with_details()
