"""Use cases deriving dashboard notifications."""

from .projector import (
    NOTIFICATION_ACTIONS,
    list_notifications,
    notification_severity,
    notification_text,
    to_notification,
)

__all__ = [
    "NOTIFICATION_ACTIONS",
    "list_notifications",
    "notification_severity",
    "notification_text",
    "to_notification",
]
