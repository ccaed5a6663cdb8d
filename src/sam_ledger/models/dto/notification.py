"""Notification DTOs."""

from enum import StrEnum

from pydantic import BaseModel


class NotificationType(StrEnum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class NotificationCreate(BaseModel):
    """Notification to raise."""

    message: str
    type: NotificationType = NotificationType.INFO


class Notification(NotificationCreate):
    """Queued user-facing notification."""

    id: int
