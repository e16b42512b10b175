"""Resolution of the screen a notification opens when selected."""

from __future__ import annotations

from typing import Final

from forum_notifications.domain.entities import (
    ADMIN_MESSAGE,
    BYTE_PATH_TEMPLATE,
    PROFILE_PATH,
    SETTINGS_PATH,
    NavigationTarget,
    Notification,
    NotificationType as T,
)

# Byte targets that also carry the post number so the thread scrolls to it.
_POST_TYPES: Final[frozenset[str]] = frozenset(
    {
        T.REPLIED.value,
        T.QUOTED.value,
        T.MENTIONED.value,
        T.GROUP_MENTIONED.value,
        T.LIKED.value,
        T.LIKED_CONSOLIDATED.value,
        T.LINKED.value,
        T.VOTES_RELEASED.value,
        T.POST_APPROVED.value,
    }
)

_TOPIC_TYPES: Final[frozenset[str]] = frozenset(
    {
        T.PRIVATE_MESSAGE.value,
        T.INVITED_TO_PRIVATE_MESSAGE.value,
        T.BOOKMARK_REMINDER.value,
        T.TOPIC_REMINDER.value,
        T.EVENT_REMINDER.value,
        T.EVENT_INVITATION.value,
        T.INVITED_TO_TOPIC.value,
        T.WATCHING_FIRST_POST.value,
        T.CODE_REVIEW_COMMIT_APPROVED.value,
        T.CUSTOM.value,
        T.POSTED.value,
        T.MOVED_POST.value,
    }
)

_OWN_PROFILE_TYPES: Final[frozenset[str]] = frozenset(
    {
        T.GRANTED_BADGE.value,
        T.MEMBERSHIP_REQUEST_ACCEPTED.value,
        T.MEMBERSHIP_REQUEST_CONSOLIDATED.value,
    }
)


def resolve_navigation_target(notification: Notification) -> NavigationTarget | None:
    """Return where ``notification`` leads, or ``None`` when nothing fits.

    The forum does not fill every field for every type, so each branch only
    relies on what that type normally carries and otherwise gives up quietly.
    """

    notification_type = notification.type

    if notification_type in _POST_TYPES:
        return _byte_target(notification, with_post_number=True)

    if notification_type in _TOPIC_TYPES:
        return _byte_target(notification, with_post_number=False)

    if notification_type == T.INVITEE_ACCEPTED.value:
        username = _username(notification, ("display_username", "original_username"))
        return _profile_target(notification, username)

    if notification_type in _OWN_PROFILE_TYPES:
        return NavigationTarget(path=PROFILE_PATH)

    if notification_type == T.NEW_FEATURES.value:
        return NavigationTarget(path=SETTINGS_PATH)

    if notification_type == ADMIN_MESSAGE:
        return _byte_target(notification, with_post_number=False) or NavigationTarget(
            path=SETTINGS_PATH
        )

    target = _byte_target(notification, with_post_number=True)
    if target is not None:
        return target
    return _profile_target(notification, _username(notification, ("display_username",)))


def _byte_target(notification: Notification, *, with_post_number: bool) -> NavigationTarget | None:
    if not notification.topic_id:
        return None
    path = BYTE_PATH_TEMPLATE.format(topic_id=notification.topic_id)
    if with_post_number and notification.post_number:
        return NavigationTarget(path=path, params={"postNumber": str(notification.post_number)})
    return NavigationTarget(path=path)


def _profile_target(notification: Notification, username: str | None) -> NavigationTarget | None:
    if username:
        return NavigationTarget(path=PROFILE_PATH, params={"username": username})
    if notification.user_id:
        return NavigationTarget(path=PROFILE_PATH, params={"userId": str(notification.user_id)})
    return None


def _username(notification: Notification, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = notification.data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


__all__ = ["resolve_navigation_target"]
