"""Filters narrowing a notification list by preferences, category or read state."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from forum_notifications.domain.entities import (
    ADMIN_MESSAGE,
    Notification,
    NotificationPreferences,
    NotificationType as T,
)

CATEGORY_ALL = "all"
CATEGORY_REPLIES = "replies"
CATEGORY_MENTIONS = "mentions"
CATEGORY_SYSTEM = "system"
CATEGORY_OTHER = "other"

CATEGORIES: Final[tuple[str, ...]] = (
    CATEGORY_ALL,
    CATEGORY_REPLIES,
    CATEGORY_MENTIONS,
    CATEGORY_SYSTEM,
)

READ_STATE_ALL = "all"
READ_STATE_UNREAD = "unread"
READ_STATE_READ = "read"

READ_STATES: Final[tuple[str, ...]] = (READ_STATE_ALL, READ_STATE_UNREAD, READ_STATE_READ)

# Type family -> NotificationPreferences attribute toggling it. Types missing
# from every family are always shown.
PREFERENCE_FAMILIES: Final[dict[str, frozenset[str]]] = {
    "replies": frozenset({T.REPLIED.value, T.QUOTED.value}),
    "mentions": frozenset({T.MENTIONED.value, T.GROUP_MENTIONED.value}),
    "private_messages": frozenset(
        {T.PRIVATE_MESSAGE.value, T.INVITED_TO_PRIVATE_MESSAGE.value}
    ),
    "likes": frozenset({T.LIKED.value, T.LIKED_CONSOLIDATED.value}),
    "badges": frozenset({T.GRANTED_BADGE.value}),
    "system": frozenset(
        {
            T.BOOKMARK_REMINDER.value,
            T.GROUP_MESSAGE_SUMMARY.value,
            ADMIN_MESSAGE,
            T.POST_APPROVED.value,
        }
    ),
}

_PREFERENCE_BY_TYPE: Final[dict[str, str]] = {
    notification_type: preference
    for preference, types in PREFERENCE_FAMILIES.items()
    for notification_type in types
}

CATEGORY_TYPES: Final[dict[str, frozenset[str]]] = {
    CATEGORY_REPLIES: frozenset({T.REPLIED.value, T.QUOTED.value}),
    CATEGORY_MENTIONS: frozenset({T.MENTIONED.value, T.GROUP_MENTIONED.value}),
    CATEGORY_SYSTEM: frozenset(
        {
            T.BOOKMARK_REMINDER.value,
            T.GRANTED_BADGE.value,
            T.GROUP_MESSAGE_SUMMARY.value,
            ADMIN_MESSAGE,
            T.POST_APPROVED.value,
        }
    ),
}


def preference_for_type(notification_type: str) -> str | None:
    """Return the preference toggle governing ``notification_type``, if any."""

    return _PREFERENCE_BY_TYPE.get(notification_type)


def filter_by_preferences(
    notifications: Iterable[Notification], preferences: NotificationPreferences
) -> list[Notification]:
    """Keep notifications whose family is enabled in ``preferences``."""

    visible: list[Notification] = []
    for notification in notifications:
        preference = preference_for_type(notification.type)
        if preference is None or getattr(preferences, preference):
            visible.append(notification)
    return visible


def get_type_category(notification_type: str) -> str:
    """Return the tab category of ``notification_type`` (``other`` if none)."""

    for category, types in CATEGORY_TYPES.items():
        if notification_type in types:
            return category
    return CATEGORY_OTHER


def filter_by_category(
    notifications: Sequence[Notification], category: str
) -> list[Notification]:
    """Narrow ``notifications`` to the tab ``category``."""

    if category == CATEGORY_ALL:
        return list(notifications)
    types = CATEGORY_TYPES.get(category)
    if types is None:
        raise ValueError(f"Unknown notification category '{category}'")
    return [notification for notification in notifications if notification.type in types]


def filter_by_read_state(
    notifications: Sequence[Notification], read_state: str
) -> list[Notification]:
    """Narrow ``notifications`` to read or unread items."""

    if read_state == READ_STATE_ALL:
        return list(notifications)
    if read_state == READ_STATE_UNREAD:
        return [notification for notification in notifications if not notification.is_read]
    if read_state == READ_STATE_READ:
        return [notification for notification in notifications if notification.is_read]
    raise ValueError(f"Unknown read state filter '{read_state}'")


def count_unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for notification in notifications if not notification.is_read)


__all__ = [
    "CATEGORIES",
    "CATEGORY_ALL",
    "CATEGORY_MENTIONS",
    "CATEGORY_OTHER",
    "CATEGORY_REPLIES",
    "CATEGORY_SYSTEM",
    "CATEGORY_TYPES",
    "PREFERENCE_FAMILIES",
    "READ_STATES",
    "READ_STATE_ALL",
    "READ_STATE_READ",
    "READ_STATE_UNREAD",
    "count_unread",
    "filter_by_category",
    "filter_by_preferences",
    "filter_by_read_state",
    "get_type_category",
    "preference_for_type",
]
