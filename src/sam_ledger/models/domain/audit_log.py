"""Audit log domain model."""

from datetime import datetime

from pydantic import BaseModel


class AuditLog(BaseModel):
    """Append-only audit trail entry."""

    id: str
    actor_id: str | None = None
    actor_name: str | None = None
    entity: str
    entity_id: str
    action: str
    details: str
    created_at: datetime
