"""Transient user-facing notification queue."""

import logging

from sam_ledger.config import Settings, get_settings
from sam_ledger.database import LedgerStore
from sam_ledger.models.dto.notification import (
    Notification,
    NotificationCreate,
    NotificationType,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for the capped, newest-first notification queue."""

    def __init__(self, store: LedgerStore, settings: Settings | None = None) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.settings = settings or get_settings()

    def add(self, notification: NotificationCreate) -> Notification:
        """Push a notification, dropping the oldest beyond the configured limit.

        Args:
            notification: Notification content

        Returns:
            Queued notification with its id
        """
        queued = Notification(id=self.store.next_notification_id(), **notification.model_dump())
        self.store.notifications = [queued, *self.store.notifications][: self.settings.notification_limit]
        logger.debug("Notification queued: id=%s type=%s", queued.id, queued.type)
        return queued

    def notify(self, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        """Shortcut for ``add`` with plain arguments."""
        return self.add(NotificationCreate(message=message, type=type))

    def remove(self, notification_id: int) -> bool:
        """Remove a notification.

        Returns:
            True if a notification was removed
        """
        before = len(self.store.notifications)
        self.store.notifications = [n for n in self.store.notifications if n.id != notification_id]
        return len(self.store.notifications) < before

    def list_notifications(self) -> list[Notification]:
        """List queued notifications, newest first."""
        return list(self.store.notifications)
