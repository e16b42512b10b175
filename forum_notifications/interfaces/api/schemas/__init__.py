"""Request and response schemas for the HTTP interface."""

from .auth import AuthEventRequest, AuthEventResponse
from .notification import (
    MarkAllReadResponse,
    MarkReadResponse,
    NavigationTargetRead,
    NotificationFeedRead,
    NotificationRead,
    NotificationSectionRead,
    NotificationTargetResponse,
)
from .preferences import NotificationPreferencesRead, PreferenceUpdateRequest, PreferencesStateRead

__all__ = [
    "AuthEventRequest",
    "AuthEventResponse",
    "MarkAllReadResponse",
    "MarkReadResponse",
    "NavigationTargetRead",
    "NotificationFeedRead",
    "NotificationPreferencesRead",
    "NotificationRead",
    "NotificationSectionRead",
    "NotificationTargetResponse",
    "PreferenceUpdateRequest",
    "PreferencesStateRead",
]
