"""Shared fixtures: a small hand-built ledger with two busy pools.

Pool P1 (Autocad, 5 seats): A1 active, A2/A3/A4 awaiting inactivation.
Pool P2 (Miro Business, 3 seats): A5 awaiting inactivation, A6 history,
A7 active for an inactive person. Pool P3 (Internal Wiki, 10 seats) is empty.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from sam_ledger.config import Settings
from sam_ledger.console import SamConsole
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation, StatusHistory
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person, PersonStatus
from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.models.domain.product import CostPeriod, SoftwareProduct
from sam_ledger.models.domain.vendor import Contract, Vendor

CREATED_AT = datetime(2025, 1, 10, 8, 30, tzinfo=UTC)


def make_allocation(
    allocation_id: str,
    pool_id: str,
    person_id: str,
    status: AllocStatus = AllocStatus.ACTIVE,
    unit_cost: str = "0",
    cost_center_id: str | None = None,
) -> LicenseAllocation:
    """Build an allocation with a single initial history entry."""
    return LicenseAllocation(
        id=allocation_id,
        pool_id=pool_id,
        person_id=person_id,
        cost_center_id=cost_center_id,
        status=status,
        unit_cost=Decimal(unit_cost),
        history=[
            StatusHistory(
                id=f"H-{allocation_id}",
                to_status=status,
                reason="Initial load",
                created_at=CREATED_AT,
            )
        ],
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


def pool_by_id(store: LedgerStore, pool_id: str) -> LicensePool:
    return next(p for p in store.pools if p.id == pool_id)


def allocation_by_id(store: LedgerStore, allocation_id: str) -> LicenseAllocation:
    return next(a for a in store.allocations if a.id == allocation_id)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def store() -> LedgerStore:
    ledger = LedgerStore(
        vendors=[Vendor(id="V1", name="Autodesk"), Vendor(id="V2", name="Miro")],
        contracts=[Contract(id="C1", number="AD-2025", vendor_id="V1")],
        products=[
            SoftwareProduct(
                id="PR1", name="Autocad", vendor_id="V1",
                unit_cost=Decimal("8500"), cost_period=CostPeriod.YEAR, tags={"Engineering"},
            ),
            SoftwareProduct(
                id="PR2", name="Miro Business", vendor_id="V2",
                unit_cost=Decimal("16"), cost_period=CostPeriod.MONTH,
            ),
            SoftwareProduct(id="PR3", name="Internal Wiki", cost_period=CostPeriod.FREE),
        ],
        pools=[
            LicensePool(id="P1", product_id="PR1", contract_id="C1", total_quantity=5),
            LicensePool(id="P2", product_id="PR2", total_quantity=3),
            LicensePool(id="P3", product_id="PR3", total_quantity=10),
        ],
        departments=[Department(id="D1", name="Engineering", directorate="Technology")],
        cost_centers=[CostCenter(id="CC1", code="CC100", name="Internal Projects", department_id="D1")],
        people=[
            Person(id="U1", email="ana@example.com", display_name="Ana", department_id="D1"),
            Person(id="U2", email="Bruno@Example.com", display_name="Bruno"),
            Person(id="U3", email="carla@example.com", display_name="Carla", status=PersonStatus.INACTIVE),
            Person(id="U4", email="dan@example.com", display_name="Dan"),
        ],
        allocations=[
            make_allocation("A1", "P1", "U1", AllocStatus.ACTIVE, "8500", cost_center_id="CC1"),
            make_allocation("A2", "P1", "U2", AllocStatus.AWAITING_INACT, "8500"),
            make_allocation("A3", "P1", "U3", AllocStatus.AWAITING_INACT, "8500"),
            make_allocation("A4", "P1", "U4", AllocStatus.AWAITING_INACT, "8500"),
            make_allocation("A5", "P2", "U1", AllocStatus.AWAITING_INACT, "16"),
            make_allocation("A6", "P2", "U2", AllocStatus.HISTORY, "16"),
            make_allocation("A7", "P2", "U3", AllocStatus.ACTIVE, "16"),
        ],
    )
    ledger.recompute_available()
    return ledger


@pytest.fixture
def console(store: LedgerStore, settings: Settings) -> SamConsole:
    return SamConsole(store, settings)


def assert_pools_consistent(store: LedgerStore) -> None:
    """Every pool satisfies 0 <= available <= total and matches its allocations."""
    counts = store.holding_counts()
    for pool in store.pools:
        assert 0 <= pool.available_qty <= pool.total_quantity, pool.id
        assert pool.available_qty == pool.total_quantity - counts.get(pool.id, 0), pool.id
