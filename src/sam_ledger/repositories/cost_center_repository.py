"""Cost center repository."""

from sam_ledger.models.domain.organization import CostCenter
from sam_ledger.repositories.base import BaseRepository


class CostCenterRepository(BaseRepository[CostCenter]):
    """Repository for cost centers."""

    collection = "cost_centers"
