"""Audit log DTOs."""

from pydantic import BaseModel


class AuditLogCreate(BaseModel):
    """Audit entry to append; id and timestamp are assigned on write."""

    actor_id: str | None = None
    actor_name: str | None = None
    entity: str
    entity_id: str
    action: str
    details: str
