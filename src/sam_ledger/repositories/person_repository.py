"""Person repository."""

from sam_ledger.models.domain.person import Person
from sam_ledger.repositories.base import BaseRepository


class PersonRepository(BaseRepository[Person]):
    """Repository for people."""

    collection = "people"

    def get_by_email(self, email: str) -> Person | None:
        """Get a person by email, case-insensitively."""
        key = email.lower()
        return next((p for p in self.items if p.email.lower() == key), None)
