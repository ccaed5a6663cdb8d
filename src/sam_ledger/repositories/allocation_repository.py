"""License allocation repository."""

from sam_ledger.models.domain.allocation import AllocStatus, LicenseAllocation
from sam_ledger.repositories.base import BaseRepository


def allocation_key(person_id: str, pool_id: str) -> str:
    """Identity of an allocation for duplicate detection."""
    return f"{person_id}|{pool_id}"


class AllocationRepository(BaseRepository[LicenseAllocation]):
    """Repository for license allocations."""

    collection = "allocations"

    def get_by_status(self, status: AllocStatus) -> list[LicenseAllocation]:
        """Get all allocations currently in a status."""
        return [a for a in self.items if a.status == status]

    def get_holding_keys(self) -> set[str]:
        """Get person/pool keys of every allocation not in HISTORY."""
        return {allocation_key(a.person_id, a.pool_id) for a in self.items if a.holds_capacity}
