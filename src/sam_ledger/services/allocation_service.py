"""Allocation lifecycle service.

Any status may move to any other status. Capacity accounting only depends on
whether the allocation enters or leaves HISTORY:

- non-HISTORY -> HISTORY releases one unit on the pool
- HISTORY -> non-HISTORY consumes one unit on the pool
- every other transition, including same-status, leaves the pool untouched
"""

import logging

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.exceptions import AllocationNotFoundError, IntegrityError, InvalidStatusError
from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation, StatusHistory
from sam_ledger.models.dto.reharvest import PoolConsistencyIssue
from sam_ledger.repositories.allocation_repository import AllocationRepository
from sam_ledger.repositories.pool_repository import PoolRepository
from sam_ledger.utils.ids import generate_id, utc_now

logger = logging.getLogger(__name__)


def capacity_delta(current: AllocStatus, new: AllocStatus) -> int:
    """Change in pool available quantity caused by a status transition."""
    if current != AllocStatus.HISTORY and new == AllocStatus.HISTORY:
        return 1
    if current == AllocStatus.HISTORY and new != AllocStatus.HISTORY:
        return -1
    return 0


def coerce_status(value: AllocStatus | str) -> AllocStatus:
    """Convert a raw value to an AllocStatus.

    Raises:
        InvalidStatusError: If the value is not a stored allocation status
    """
    try:
        return AllocStatus(value)
    except ValueError as e:
        raise InvalidStatusError(str(value)) from e


class AllocationService:
    """Service for allocation status transitions and capacity accounting."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()
        self.allocation_repo = AllocationRepository(store)
        self.pool_repo = PoolRepository(store)

    def get_allocation(self, allocation_id: str) -> LicenseAllocation:
        """Get an allocation by ID.

        Raises:
            AllocationNotFoundError: If the allocation does not exist
        """
        allocation = self.allocation_repo.get_by_id(allocation_id)
        if allocation is None:
            raise AllocationNotFoundError(allocation_id)
        return allocation

    async def update_allocation_status(
        self,
        allocation_id: str,
        new_status: AllocStatus | str,
        reason: str | None,
        actor_id: str | None = None,
    ) -> LicenseAllocation:
        """Move an allocation to a new status.

        Appends a history entry even when the status does not change. The
        allocation and its pool are updated together or not at all.

        Args:
            allocation_id: Allocation ID
            new_status: Target status; any stored status is accepted
            reason: Free-text reason recorded on the history entry
            actor_id: Acting person (defaults to the configured admin actor)

        Returns:
            Snapshot of the updated allocation

        Raises:
            AllocationNotFoundError: If the allocation does not exist
            InvalidStatusError: If new_status is not a known status
        """
        target = coerce_status(new_status)
        async with self.store.transaction():
            allocation = self.apply_status_change(allocation_id, target, reason, actor_id)
        return allocation.model_copy(deep=True)

    def apply_status_change(
        self,
        allocation_id: str,
        new_status: AllocStatus,
        reason: str | None,
        actor_id: str | None = None,
    ) -> LicenseAllocation:
        """Apply a status transition. Must run inside a store transaction."""
        allocation = self.get_allocation(allocation_id)
        current = allocation.status
        delta = capacity_delta(current, new_status)
        now = utc_now()

        allocation.history.append(
            StatusHistory(
                id=generate_id("hist"),
                from_status=current,
                to_status=new_status,
                reason=reason,
                created_by_id=actor_id or self.settings.admin_actor_id,
                created_at=now,
            )
        )
        allocation.status = new_status
        allocation.updated_at = now

        if delta:
            pool = self.pool_repo.get_by_id(allocation.pool_id)
            if pool is None:
                raise IntegrityError("LicenseAllocation", allocation.id, "LicensePool", allocation.pool_id)
            pool.available_qty += delta
            if pool.available_qty < 0:
                logger.warning(
                    "Pool %s is over-allocated after reactivating %s (available=%d)",
                    pool.id,
                    allocation.id,
                    pool.available_qty,
                )

        logger.debug(
            "Allocation %s: %s -> %s (capacity delta %+d)",
            allocation.id,
            current,
            new_status,
            delta,
        )
        return allocation

    def check_pool_consistency(self) -> list[PoolConsistencyIssue]:
        """List pools whose available quantity disagrees with their allocations.

        Returns:
            One issue per inconsistent pool; empty when the ledger is consistent
        """
        counts = self.store.holding_counts()
        issues = []
        for pool in self.pool_repo.get_all():
            expected = pool.total_quantity - counts.get(pool.id, 0)
            if pool.available_qty != expected:
                issues.append(
                    PoolConsistencyIssue(
                        pool_id=pool.id,
                        total_quantity=pool.total_quantity,
                        available_qty=pool.available_qty,
                        expected_available_qty=expected,
                    )
                )
        return issues
