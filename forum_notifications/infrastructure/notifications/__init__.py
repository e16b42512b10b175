"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager
from .publisher import NotificationStatePublisher, serialize_notification, serialize_state

__all__ = [
    "NotificationConnectionManager",
    "NotificationStatePublisher",
    "serialize_notification",
    "serialize_state",
]
