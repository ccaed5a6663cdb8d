"""Department repository."""

from sam_ledger.models.domain.organization import Department
from sam_ledger.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    """Repository for departments."""

    collection = "departments"
