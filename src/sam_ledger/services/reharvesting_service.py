"""Reharvesting service: batch reclamation of licenses awaiting inactivation."""

import logging
from collections import Counter

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus, StatusHistory
from sam_ledger.models.domain.person import PersonStatus
from sam_ledger.models.dto.notification import NotificationType
from sam_ledger.models.dto.reharvest import ReclaimableAllocation, ReclaimReason, ReharvestResult
from sam_ledger.repositories.allocation_repository import AllocationRepository
from sam_ledger.repositories.pool_repository import PoolRepository
from sam_ledger.services.audit_service import AuditAction, AuditService, ResourceType
from sam_ledger.services.notification_service import NotificationService
from sam_ledger.services.view_service import ViewService
from sam_ledger.utils.ids import generate_id, utc_now

logger = logging.getLogger(__name__)

REHARVEST_JOB_ID = "JOB"


class ReharvestingService:
    """Service for the reharvesting job and its candidate list."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()
        self.allocation_repo = AllocationRepository(store)
        self.pool_repo = PoolRepository(store)
        self.audit_service = AuditService(store, self.settings)
        self.notification_service = NotificationService(store, self.settings)
        self.view_service = ViewService(store)

    async def run_reharvesting_job(self) -> ReharvestResult:
        """Move every AWAITING_INACT allocation to HISTORY and release its seat.

        Pool quantities are incremented once per pool by the number of
        allocations moved from it. The run always writes one audit entry and
        one notification, even when nothing was eligible.

        Returns:
            Count of moved allocations and seats released per pool
        """
        async with self.store.transaction():
            now = utc_now()
            released: Counter[str] = Counter()

            for allocation in self.allocation_repo.get_by_status(AllocStatus.AWAITING_INACT):
                allocation.history.append(
                    StatusHistory(
                        id=generate_id("hist"),
                        from_status=AllocStatus.AWAITING_INACT,
                        to_status=AllocStatus.HISTORY,
                        reason=self.settings.reharvest_reason,
                        created_by_id=self.settings.system_actor_id,
                        created_at=now,
                    )
                )
                allocation.status = AllocStatus.HISTORY
                allocation.updated_at = now
                released[allocation.pool_id] += 1

            if released:
                for pool in self.pool_repo.get_all():
                    if pool.id in released:
                        pool.available_qty += released[pool.id]

            count = sum(released.values())
            self.audit_service.log_system(
                action=AuditAction.EXECUTE,
                entity=ResourceType.LICENSE_REHARVESTING,
                entity_id=REHARVEST_JOB_ID,
                details=f"{count} license(s) moved to history and their pools updated.",
            )
            self.notification_service.notify(
                f"Reharvesting completed. {count} license(s) reclaimed.",
                NotificationType.SUCCESS,
            )

        logger.info("Reharvesting job reclaimed %d license(s) across %d pool(s)", count, len(released))
        return ReharvestResult(reharvested=count, released_by_pool=dict(released))

    def get_reclaimable(self) -> list[ReclaimableAllocation]:
        """List reharvesting candidates.

        Candidates are allocations awaiting inactivation, and active
        allocations held by inactive people. Only the former are moved by
        ``run_reharvesting_job``.
        """
        candidates = []
        for view in self.view_service.allocations_with_details():
            if view.status == AllocStatus.AWAITING_INACT:
                candidates.append(
                    ReclaimableAllocation(allocation=view, reason=ReclaimReason.AWAITING_INACTIVATION)
                )
            elif view.status == AllocStatus.ACTIVE and view.person.status == PersonStatus.INACTIVE:
                candidates.append(
                    ReclaimableAllocation(allocation=view, reason=ReclaimReason.INACTIVE_PERSON)
                )
        return candidates
