"""Software request service."""

import logging

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.exceptions import IntegrityError, RequestAlreadyDecidedError, RequestNotFoundError
from sam_ledger.models.domain.software_request import RequestStatus, SoftwareRequest
from sam_ledger.repositories.person_repository import PersonRepository
from sam_ledger.repositories.product_repository import ProductRepository
from sam_ledger.repositories.request_repository import RequestRepository
from sam_ledger.services.audit_service import AuditAction, AuditService, ResourceType
from sam_ledger.utils.ids import generate_id, utc_now

logger = logging.getLogger(__name__)


class RequestService:
    """Service for software access requests."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()
        self.request_repo = RequestRepository(store)
        self.person_repo = PersonRepository(store)
        self.product_repo = ProductRepository(store)
        self.audit_service = AuditService(store, self.settings)

    async def create_request(
        self,
        requester_id: str,
        product_id: str,
        justification: str,
    ) -> SoftwareRequest:
        """Create a pending software request.

        Raises:
            IntegrityError: If the requester or product does not exist
        """
        async with self.store.transaction():
            if self.person_repo.get_by_id(requester_id) is None:
                raise IntegrityError("SoftwareRequest", "(new)", "Person", requester_id)
            product = self.product_repo.get_by_id(product_id)
            if product is None:
                raise IntegrityError("SoftwareRequest", "(new)", "SoftwareProduct", product_id)

            request = self.request_repo.add(
                SoftwareRequest(
                    id=generate_id("req"),
                    requester_id=requester_id,
                    product_id=product_id,
                    justification=justification,
                    status=RequestStatus.PENDING,
                    created_at=utc_now(),
                )
            )
            self.audit_service.log(
                action=AuditAction.CREATE,
                entity=ResourceType.SOFTWARE_REQUEST,
                entity_id=request.id,
                details=f"Request for '{product.name}' created.",
                actor_id=requester_id,
            )
        return request.model_copy(deep=True)

    async def approve_request(self, request_id: str) -> SoftwareRequest:
        """Approve a pending request."""
        return await self._decide(request_id, RequestStatus.APPROVED, AuditAction.APPROVE)

    async def deny_request(self, request_id: str) -> SoftwareRequest:
        """Deny a pending request."""
        return await self._decide(request_id, RequestStatus.DENIED, AuditAction.DENY)

    async def _decide(self, request_id: str, status: RequestStatus, action: str) -> SoftwareRequest:
        async with self.store.transaction():
            request = self.request_repo.get_by_id(request_id)
            if request is None:
                raise RequestNotFoundError(request_id)
            if request.status != RequestStatus.PENDING:
                raise RequestAlreadyDecidedError(request_id, request.status)

            request.status = status
            self.audit_service.log(
                action=action,
                entity=ResourceType.SOFTWARE_REQUEST,
                entity_id=request.id,
                details=f"Request {status}.",
                actor_id=self.settings.admin_actor_id,
                actor_name=self.settings.admin_actor_name,
            )
        logger.info("Software request %s %s", request_id, status)
        return request.model_copy(deep=True)
