"""Base repository with common collection operations."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from sam_ledger.database import LedgerStore

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Base repository over one named collection of the ledger store."""

    collection: str

    def __init__(self, store: LedgerStore) -> None:
        """Initialize repository with the ledger store."""
        self.store = store

    @property
    def items(self) -> list[T]:
        """Live list backing this repository."""
        return getattr(self.store, self.collection)

    def get(self, id: str) -> T | None:
        """Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Record or None if not found
        """
        for item in self.items:
            if item.id == id:  # type: ignore[attr-defined]
                return item
        return None

    def get_by_id(self, id: str) -> T | None:
        """Get a record by ID (alias for get)."""
        return self.get(id)

    def get_all(self, offset: int = 0, limit: int | None = None) -> list[T]:
        """Get records in collection order.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return (all if None)

        Returns:
            List of records
        """
        end = None if limit is None else offset + limit
        return list(self.items[offset:end])

    def count(self) -> int:
        """Count total records."""
        return len(self.items)

    def add(self, instance: T) -> T:
        """Append a record to the collection."""
        self.items.append(instance)
        return instance

    def add_many(self, instances: list[T]) -> None:
        """Append several records, preserving their order."""
        self.items.extend(instances)
