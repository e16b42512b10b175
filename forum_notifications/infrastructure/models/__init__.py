"""ORM models for the infrastructure layer."""

from .notification_preferences import NotificationPreferencesModel

__all__ = ["NotificationPreferencesModel"]
