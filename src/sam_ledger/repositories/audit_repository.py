"""Audit log repository."""

from sam_ledger.models.domain.audit_log import AuditLog
from sam_ledger.repositories.base import BaseRepository


class AuditRepository(BaseRepository[AuditLog]):
    """Repository for the append-only audit trail."""

    collection = "audit_log"

    def log(self, entry: AuditLog) -> AuditLog:
        """Append an audit entry."""
        return self.add(entry)

    def get_recent(self, limit: int | None = None) -> list[AuditLog]:
        """Get audit entries newest first.

        Args:
            limit: Maximum number of entries (all if None)

        Returns:
            List of audit entries
        """
        entries = list(reversed(self.items))
        return entries if limit is None else entries[:limit]
