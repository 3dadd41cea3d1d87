"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    ACTIVITY_CREATED,
    ActivitySignalPublisher,
    serialize_activity_event,
)

__all__ = [
    "ACTIVITY_CREATED",
    "ActivitySignalPublisher",
    "NotificationConnectionManager",
    "notification_manager",
    "serialize_activity_event",
]
