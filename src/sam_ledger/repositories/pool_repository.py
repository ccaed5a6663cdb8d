"""License pool repository."""

from sam_ledger.models.domain.pool import LicensePool
from sam_ledger.repositories.base import BaseRepository


class PoolRepository(BaseRepository[LicensePool]):
    """Repository for license pools."""

    collection = "pools"

    def get_first_by_product(self, product_id: str) -> LicensePool | None:
        """Get the first pool for a product, in collection order."""
        return next((p for p in self.items if p.product_id == product_id), None)
