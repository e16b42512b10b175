"""Domain entities exposed by the application."""

from .auth_event import AuthEvent
from .navigation import BYTE_PATH_TEMPLATE, PROFILE_PATH, SETTINGS_PATH, NavigationTarget
from .notification import (
    ADMIN_MESSAGE,
    BadgeDetails,
    GroupDetails,
    Notification,
    NotificationDetails,
    NotificationType,
    TopicDetails,
)
from .preferences import (
    DEFAULT_PREFERENCES,
    FORUM_TO_LIKE_FREQUENCY,
    LIKE_FREQUENCIES,
    LIKE_FREQUENCY_TO_FORUM,
    PREFERENCE_KEYS,
    PREFERENCES_VERSION,
    NotificationPreferences,
    validate_preference,
)
from .section import (
    SECTION_EARLIER,
    SECTION_THIS_WEEK,
    SECTION_TITLES,
    SECTION_TODAY,
    SECTION_YESTERDAY,
    NotificationSection,
)

__all__ = [
    "ADMIN_MESSAGE",
    "AuthEvent",
    "BYTE_PATH_TEMPLATE",
    "BadgeDetails",
    "DEFAULT_PREFERENCES",
    "FORUM_TO_LIKE_FREQUENCY",
    "GroupDetails",
    "LIKE_FREQUENCIES",
    "LIKE_FREQUENCY_TO_FORUM",
    "NavigationTarget",
    "Notification",
    "NotificationDetails",
    "NotificationPreferences",
    "NotificationSection",
    "NotificationType",
    "PREFERENCES_VERSION",
    "PREFERENCE_KEYS",
    "PROFILE_PATH",
    "SECTION_EARLIER",
    "SECTION_THIS_WEEK",
    "SECTION_TITLES",
    "SECTION_TODAY",
    "SECTION_YESTERDAY",
    "SETTINGS_PATH",
    "TopicDetails",
    "validate_preference",
]
