"""Repository implementations for the infrastructure layer."""

from .notification_preferences_repository import (
    NotificationPreferencesRepository,
    SqlAlchemyPreferenceStorage,
)

__all__ = ["NotificationPreferencesRepository", "SqlAlchemyPreferenceStorage"]
