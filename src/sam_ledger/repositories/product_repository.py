"""Software product repository."""

from sam_ledger.models.domain.product import SoftwareProduct
from sam_ledger.repositories.base import BaseRepository


class ProductRepository(BaseRepository[SoftwareProduct]):
    """Repository for catalog products."""

    collection = "products"

    def get_by_name(self, name: str) -> SoftwareProduct | None:
        """Get the first product whose name matches case-insensitively."""
        key = name.lower()
        return next((p for p in self.items if p.name.lower() == key), None)
