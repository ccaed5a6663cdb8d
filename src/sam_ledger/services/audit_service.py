"""Audit service for centralized audit logging."""

import logging

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.models.dto.audit import AuditLogCreate
from sam_ledger.repositories.audit_repository import AuditRepository
from sam_ledger.utils.ids import generate_id, utc_now
from sam_ledger.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


class AuditAction:
    """Standard audit action types."""

    CREATE = "create"
    CREATE_BULK = "create_bulk"
    UPDATE_STATUS = "update_status"
    EXECUTE = "execute"
    APPROVE = "approve"
    DENY = "deny"


class ResourceType:
    """Standard entity names for audit logging."""

    LICENSE_ALLOCATION = "LicenseAllocation"
    LICENSE_REHARVESTING = "LicenseReharvesting"
    IMPORT = "Import"
    SOFTWARE_REQUEST = "SoftwareRequest"


class AuditService:
    """Service for audit logging operations.

    Writes are plain appends to the store; callers that need atomicity call
    this from inside their own ``LedgerStore.transaction()``.
    """

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize audit service.

        Args:
            store: Ledger store
            settings: Settings (defaults to the cached application settings)
        """
        self.store = store
        self.settings = settings or get_settings()
        self.audit_repo = AuditRepository(store)

    def add(self, entry: AuditLogCreate) -> AuditLog:
        """Append an audit entry, assigning its id and timestamp.

        Args:
            entry: Entry content

        Returns:
            Stored audit entry
        """
        log = AuditLog(id=generate_id("log"), created_at=utc_now(), **entry.model_dump())
        self.audit_repo.log(log)
        logger.debug(
            "Audit logged: action=%s entity=%s/%s actor=%s",
            log.action,
            log.entity,
            log.entity_id,
            log.actor_id,
        )
        return log

    def log(
        self,
        action: str,
        entity: str,
        entity_id: str,
        details: str,
        actor_id: str | None = None,
        actor_name: str | None = None,
    ) -> AuditLog | None:
        """Log an audit event.

        Args:
            action: Action performed (use AuditAction constants)
            entity: Entity name (use ResourceType constants)
            entity_id: ID of the affected entity, or a job marker
            details: Human-readable summary
            actor_id: ID of the acting person or system actor
            actor_name: Display name of the actor

        Returns:
            Stored entry, or None if writing failed
        """
        try:
            return self.add(
                AuditLogCreate(
                    actor_id=actor_id,
                    actor_name=actor_name,
                    entity=entity,
                    entity_id=entity_id,
                    action=action,
                    details=details,
                )
            )
        except Exception as e:
            # Never fail the main operation due to audit logging
            log_error(logger, "Failed to write audit log", e)
            return None

    def log_system(self, action: str, entity: str, entity_id: str, details: str) -> AuditLog | None:
        """Log an audit event performed by the system actor."""
        return self.log(
            action=action,
            entity=entity,
            entity_id=entity_id,
            details=details,
            actor_id=self.settings.system_actor_id,
            actor_name=self.settings.system_actor_name,
        )

    def list_entries(self, limit: int | None = None) -> list[AuditLog]:
        """List audit entries newest first."""
        return self.audit_repo.get_recent(limit)
