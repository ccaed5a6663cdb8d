"""Vendor repository."""

from sam_ledger.models.domain.vendor import Vendor
from sam_ledger.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    """Repository for vendors."""

    collection = "vendors"

    def get_by_name(self, name: str) -> Vendor | None:
        """Get the first vendor whose name matches case-insensitively."""
        key = name.lower()
        return next((v for v in self.items if v.name.lower() == key), None)
