"""Notification pipeline: ingestion, filtering, grouping and read state."""

from .filters import (
    CATEGORIES,
    READ_STATES,
    count_unread,
    filter_by_category,
    filter_by_preferences,
    filter_by_read_state,
    get_type_category,
)
from .grouping import group_by_time
from .navigation import resolve_navigation_target
from .normalization import NOTIFICATION_TYPE_CODES, normalize_notification_type
from .ports import (
    AuthEventSubscriber,
    NotificationSource,
    PreferenceSource,
    PreferenceStorage,
    SourceResponse,
)
from .preferences import NotificationPreferencesService, PreferencesState
from .presentation import format_relative_time, get_notification_snippet, get_notification_title
from .refresh import RefreshTrigger
from .store import NotificationState, NotificationStore
from .transform import extract_raw_records, transform_notification, transform_notifications

__all__ = [
    "AuthEventSubscriber",
    "CATEGORIES",
    "NOTIFICATION_TYPE_CODES",
    "NotificationPreferencesService",
    "NotificationSource",
    "NotificationState",
    "NotificationStore",
    "PreferenceSource",
    "PreferenceStorage",
    "PreferencesState",
    "READ_STATES",
    "RefreshTrigger",
    "SourceResponse",
    "count_unread",
    "extract_raw_records",
    "filter_by_category",
    "filter_by_preferences",
    "filter_by_read_state",
    "format_relative_time",
    "get_notification_snippet",
    "get_notification_title",
    "get_type_category",
    "group_by_time",
    "normalize_notification_type",
    "resolve_navigation_target",
    "transform_notification",
    "transform_notifications",
]
