"""Contract repository."""

from sam_ledger.models.domain.vendor import Contract
from sam_ledger.repositories.base import BaseRepository


class ContractRepository(BaseRepository[Contract]):
    """Repository for vendor contracts."""

    collection = "contracts"
