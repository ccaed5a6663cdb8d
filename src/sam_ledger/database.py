"""In-memory ledger store and transaction management.

The store is the single source of truth for every collection. It is built
once from reference data and handed to services explicitly; nothing in the
package holds it as a module global.
"""

import asyncio
import copy
import logging
from collections import Counter
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from sam_ledger.models.domain.allocation import LicenseAllocation
from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.models.domain.organization import CostCenter, Department
from sam_ledger.models.domain.person import Person
from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.models.domain.product import SoftwareProduct
from sam_ledger.models.domain.software_request import SoftwareRequest
from sam_ledger.models.domain.vendor import Contract, Vendor
from sam_ledger.models.dto.notification import Notification

logger = logging.getLogger(__name__)

# Collections restored when a transaction fails
COLLECTIONS = (
    "vendors",
    "contracts",
    "products",
    "pools",
    "departments",
    "cost_centers",
    "people",
    "allocations",
    "audit_log",
    "requests",
    "notifications",
)


class LedgerStore:
    """Process-lifetime container for all ledger collections.

    ``audit_log`` is kept in write order; readers list it newest first.
    ``notifications`` is kept newest first.
    """

    def __init__(
        self,
        vendors: Iterable[Vendor] = (),
        contracts: Iterable[Contract] = (),
        products: Iterable[SoftwareProduct] = (),
        pools: Iterable[LicensePool] = (),
        departments: Iterable[Department] = (),
        cost_centers: Iterable[CostCenter] = (),
        people: Iterable[Person] = (),
        allocations: Iterable[LicenseAllocation] = (),
        audit_log: Iterable[AuditLog] = (),
        requests: Iterable[SoftwareRequest] = (),
    ) -> None:
        self.vendors: list[Vendor] = list(vendors)
        self.contracts: list[Contract] = list(contracts)
        self.products: list[SoftwareProduct] = list(products)
        self.pools: list[LicensePool] = list(pools)
        self.departments: list[Department] = list(departments)
        self.cost_centers: list[CostCenter] = list(cost_centers)
        self.people: list[Person] = list(people)
        self.allocations: list[LicenseAllocation] = list(allocations)
        self.audit_log: list[AuditLog] = list(audit_log)
        self.requests: list[SoftwareRequest] = list(requests)
        self.notifications: list[Notification] = []
        self._notification_seq = 0
        self._lock = asyncio.Lock()

    def next_notification_id(self) -> int:
        """Return a new, strictly increasing notification id."""
        self._notification_seq += 1
        return self._notification_seq

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["LedgerStore"]:
        """Run a block as one all-or-nothing critical section.

        Operations are serialized on the store lock. If the block raises,
        every collection is restored to its state on entry.
        """
        async with self._lock:
            snapshot = self._snapshot()
            try:
                yield self
            except BaseException:
                if self._changed_since(snapshot):
                    self._restore(snapshot)
                    logger.debug("Ledger transaction rolled back")
                raise

    def _snapshot(self) -> dict[str, Any]:
        state = {name: copy.deepcopy(getattr(self, name)) for name in COLLECTIONS}
        state["_notification_seq"] = self._notification_seq
        return state

    def _changed_since(self, snapshot: dict[str, Any]) -> bool:
        return any(getattr(self, name) != value for name, value in snapshot.items())

    def _restore(self, snapshot: dict[str, Any]) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)

    def dump(self) -> dict[str, list[dict[str, Any]]]:
        """Serialize every collection to plain data, for comparison and debugging."""
        return {
            name: [item.model_dump(mode="json") for item in getattr(self, name)]
            for name in COLLECTIONS
        }

    def holding_counts(self) -> Counter[str]:
        """Count allocations holding capacity (status not HISTORY) per pool id."""
        return Counter(a.pool_id for a in self.allocations if a.holds_capacity)

    def recompute_available(self) -> None:
        """Recompute every pool's available quantity from its allocations."""
        counts = self.holding_counts()
        for pool in self.pools:
            pool.available_qty = pool.total_quantity - counts.get(pool.id, 0)
