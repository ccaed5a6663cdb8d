"""Tests for the reharvesting job and candidate list."""

from sam_ledger.config import Settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.allocation import AllocStatus
from sam_ledger.models.dto.notification import NotificationType
from sam_ledger.models.dto.reharvest import ReclaimReason
from sam_ledger.services.audit_service import AuditAction, ResourceType
from sam_ledger.services.reharvesting_service import ReharvestingService
from tests.conftest import allocation_by_id, assert_pools_consistent, pool_by_id


class TestRunReharvestingJob:
    """Test batch reclamation."""

    async def test_reclaims_awaiting_allocations(self, store: LedgerStore, settings: Settings) -> None:
        result = await ReharvestingService(store, settings).run_reharvesting_job()

        assert result.reharvested == 4
        assert result.released_by_pool == {"P1": 3, "P2": 1}
        assert pool_by_id(store, "P1").available_qty == 4
        assert pool_by_id(store, "P2").available_qty == 2
        assert pool_by_id(store, "P3").available_qty == 10
        assert_pools_consistent(store)

    async def test_history_entries(self, store: LedgerStore, settings: Settings) -> None:
        await ReharvestingService(store, settings).run_reharvesting_job()

        for allocation_id in ("A2", "A3", "A4", "A5"):
            allocation = allocation_by_id(store, allocation_id)
            entry = allocation.history[-1]
            assert allocation.status == AllocStatus.HISTORY
            assert entry.from_status == AllocStatus.AWAITING_INACT
            assert entry.to_status == AllocStatus.HISTORY
            assert entry.reason == settings.reharvest_reason
            assert entry.created_by_id == settings.system_actor_id

    async def test_other_allocations_untouched(self, store: LedgerStore, settings: Settings) -> None:
        """Active allocations of inactive people are candidates, not job targets."""
        await ReharvestingService(store, settings).run_reharvesting_job()

        assert allocation_by_id(store, "A1").status == AllocStatus.ACTIVE
        assert allocation_by_id(store, "A7").status == AllocStatus.ACTIVE
        assert len(allocation_by_id(store, "A6").history) == 1

    async def test_audit_and_notification(self, store: LedgerStore, settings: Settings) -> None:
        await ReharvestingService(store, settings).run_reharvesting_job()

        assert len(store.audit_log) == 1
        entry = store.audit_log[0]
        assert entry.action == AuditAction.EXECUTE
        assert entry.entity == ResourceType.LICENSE_REHARVESTING
        assert entry.entity_id == "JOB"
        assert entry.actor_id == settings.system_actor_id
        assert entry.details == "4 license(s) moved to history and their pools updated."
        assert store.notifications[0].type == NotificationType.SUCCESS
        assert store.notifications[0].message == "Reharvesting completed. 4 license(s) reclaimed."

    async def test_second_run_is_a_no_op(self, store: LedgerStore, settings: Settings) -> None:
        service = ReharvestingService(store, settings)
        await service.run_reharvesting_job()
        pools_before = [p.model_dump() for p in store.pools]
        allocations_before = [a.model_dump() for a in store.allocations]

        result = await service.run_reharvesting_job()

        assert result.reharvested == 0
        assert result.released_by_pool == {}
        assert [p.model_dump() for p in store.pools] == pools_before
        assert [a.model_dump() for a in store.allocations] == allocations_before
        # The run itself is still audited
        assert len(store.audit_log) == 2
        assert store.audit_log[-1].details.startswith("0 license(s)")


class TestGetReclaimable:
    """Test the candidate list."""

    def test_candidates(self, store: LedgerStore, settings: Settings) -> None:
        candidates = ReharvestingService(store, settings).get_reclaimable()

        reasons = {c.allocation.id: c.reason for c in candidates}
        assert reasons == {
            "A2": ReclaimReason.AWAITING_INACTIVATION,
            "A3": ReclaimReason.AWAITING_INACTIVATION,
            "A4": ReclaimReason.AWAITING_INACTIVATION,
            "A5": ReclaimReason.AWAITING_INACTIVATION,
            "A7": ReclaimReason.INACTIVE_PERSON,
        }

    def test_candidates_carry_details(self, store: LedgerStore, settings: Settings) -> None:
        candidates = ReharvestingService(store, settings).get_reclaimable()

        a7 = next(c for c in candidates if c.allocation.id == "A7")
        assert a7.allocation.person.display_name == "Carla"
        assert a7.allocation.pool.product.name == "Miro Business"

    async def test_empty_after_job_for_awaiting(self, store: LedgerStore, settings: Settings) -> None:
        service = ReharvestingService(store, settings)
        await service.run_reharvesting_job()

        assert [c.allocation.id for c in service.get_reclaimable()] == ["A7"]
