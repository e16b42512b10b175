"""Mapping of raw forum notification type codes to canonical tags."""

from __future__ import annotations

from typing import Any, Final

from forum_notifications.domain.entities import NotificationType

NOTIFICATION_TYPE_CODES: Final[dict[int, str]] = {
    1: NotificationType.MENTIONED.value,
    2: NotificationType.REPLIED.value,
    3: NotificationType.QUOTED.value,
    4: NotificationType.EDITED.value,
    5: NotificationType.LIKED.value,
    6: NotificationType.PRIVATE_MESSAGE.value,
    7: NotificationType.INVITED_TO_PRIVATE_MESSAGE.value,
    8: NotificationType.INVITEE_ACCEPTED.value,
    9: NotificationType.POSTED.value,
    10: NotificationType.MOVED_POST.value,
    11: NotificationType.LINKED.value,
    12: NotificationType.GRANTED_BADGE.value,
    13: NotificationType.INVITED_TO_TOPIC.value,
    14: NotificationType.CUSTOM.value,
    15: NotificationType.GROUP_MENTIONED.value,
    16: NotificationType.GROUP_MESSAGE_SUMMARY.value,
    17: NotificationType.WATCHING_FIRST_POST.value,
    18: NotificationType.TOPIC_REMINDER.value,
    19: NotificationType.LIKED_CONSOLIDATED.value,
    20: NotificationType.POST_APPROVED.value,
    21: NotificationType.CODE_REVIEW_COMMIT_APPROVED.value,
    22: NotificationType.MEMBERSHIP_REQUEST_ACCEPTED.value,
    23: NotificationType.MEMBERSHIP_REQUEST_CONSOLIDATED.value,
    24: NotificationType.BOOKMARK_REMINDER.value,
    25: NotificationType.REACTION.value,
    26: NotificationType.VOTES_RELEASED.value,
    27: NotificationType.EVENT_REMINDER.value,
    28: NotificationType.EVENT_INVITATION.value,
    29: NotificationType.NEW_FEATURES.value,
}


def normalize_notification_type(raw: Any) -> str:
    """Return the canonical tag for ``raw``.

    Strings are already tags and pass through untouched. Integers are looked
    up in :data:`NOTIFICATION_TYPE_CODES`. Everything else, including
    booleans and out of range codes, becomes ``"unknown"``.
    """

    if isinstance(raw, str):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return NOTIFICATION_TYPE_CODES.get(raw, NotificationType.UNKNOWN.value)
    return NotificationType.UNKNOWN.value


__all__ = ["NOTIFICATION_TYPE_CODES", "normalize_notification_type"]
