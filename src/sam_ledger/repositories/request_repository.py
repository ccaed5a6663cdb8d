"""Software request repository."""

from sam_ledger.models.domain.software_request import SoftwareRequest
from sam_ledger.repositories.base import BaseRepository


class RequestRepository(BaseRepository[SoftwareRequest]):
    """Repository for software requests."""

    collection = "requests"
