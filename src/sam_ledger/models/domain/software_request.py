"""Software request domain model."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class RequestStatus(StrEnum):
    """Software request status enum."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class SoftwareRequest(BaseModel):
    """Request by a person for access to a product."""

    id: str
    requester_id: str
    product_id: str
    justification: str
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime
