"""Domain entity representing a canonical forum notification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any


class NotificationType(str, Enum):
    """Canonical notification type tags."""

    MENTIONED = "mentioned"
    REPLIED = "replied"
    QUOTED = "quoted"
    EDITED = "edited"
    LIKED = "liked"
    PRIVATE_MESSAGE = "private_message"
    INVITED_TO_PRIVATE_MESSAGE = "invited_to_private_message"
    INVITEE_ACCEPTED = "invitee_accepted"
    POSTED = "posted"
    MOVED_POST = "moved_post"
    LINKED = "linked"
    GRANTED_BADGE = "granted_badge"
    INVITED_TO_TOPIC = "invited_to_topic"
    CUSTOM = "custom"
    GROUP_MENTIONED = "group_mentioned"
    GROUP_MESSAGE_SUMMARY = "group_message_summary"
    WATCHING_FIRST_POST = "watching_first_post"
    TOPIC_REMINDER = "topic_reminder"
    LIKED_CONSOLIDATED = "liked_consolidated"
    POST_APPROVED = "post_approved"
    CODE_REVIEW_COMMIT_APPROVED = "code_review_commit_approved"
    MEMBERSHIP_REQUEST_ACCEPTED = "membership_request_accepted"
    MEMBERSHIP_REQUEST_CONSOLIDATED = "membership_request_consolidated"
    BOOKMARK_REMINDER = "bookmark_reminder"
    REACTION = "reaction"
    VOTES_RELEASED = "votes_released"
    EVENT_REMINDER = "event_reminder"
    EVENT_INVITATION = "event_invitation"
    NEW_FEATURES = "new_features"
    UNKNOWN = "unknown"


# Not part of the numeric code table; the forum sends it as a string tag.
ADMIN_MESSAGE = "admin_message"

_BADGE_TYPES = frozenset({NotificationType.GRANTED_BADGE.value})
_GROUP_TYPES = frozenset(
    {
        NotificationType.GROUP_MESSAGE_SUMMARY.value,
        NotificationType.MEMBERSHIP_REQUEST_ACCEPTED.value,
        NotificationType.MEMBERSHIP_REQUEST_CONSOLIDATED.value,
    }
)


@dataclass(frozen=True)
class TopicDetails:
    """Fields the forum attaches to topic/post related notifications."""

    topic_title: str | None = None
    display_username: str | None = None
    original_username: str | None = None
    excerpt: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BadgeDetails:
    """Fields attached to ``granted_badge`` notifications."""

    badge_name: str | None = None
    badge_description: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GroupDetails:
    """Fields attached to group level notifications."""

    group_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


NotificationDetails = TopicDetails | BadgeDetails | GroupDetails


@dataclass(frozen=True)
class Notification:
    """Notification addressed to the signed-in forum user.

    ``data`` is the open bag received from the forum, held as a read-only
    copy. Known keys are exposed through :attr:`details`; the bag is kept
    whole so newer upstream keys stay reachable.
    """

    id: int
    type: str
    is_read: bool
    created_at: str
    topic_id: int | None = None
    post_number: int | None = None
    user_id: int | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    message: str | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.data, MappingProxyType):
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def mark_read(self) -> "Notification":
        """Return a copy flagged as read."""

        if self.is_read:
            return self
        return replace(self, is_read=True)

    @property
    def details(self) -> NotificationDetails:
        """Return the typed view of :attr:`data` for this notification's type."""

        if self.type in _BADGE_TYPES:
            return BadgeDetails(
                badge_name=_string_or_none(self.data.get("badge_name")),
                badge_description=_string_or_none(self.data.get("badge_description")),
                extra=_remaining(self.data, ("badge_name", "badge_description")),
            )
        if self.type in _GROUP_TYPES:
            return GroupDetails(
                group_name=_string_or_none(self.data.get("group_name")),
                extra=_remaining(self.data, ("group_name",)),
            )
        keys = ("topic_title", "display_username", "original_username", "excerpt")
        return TopicDetails(
            topic_title=_string_or_none(self.data.get("topic_title")),
            display_username=_string_or_none(self.data.get("display_username")),
            original_username=_string_or_none(self.data.get("original_username")),
            excerpt=_string_or_none(self.data.get("excerpt")),
            extra=_remaining(self.data, keys),
        )


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _remaining(data: Mapping[str, Any], promoted: tuple[str, ...]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key not in promoted}


__all__ = [
    "ADMIN_MESSAGE",
    "BadgeDetails",
    "GroupDetails",
    "Notification",
    "NotificationDetails",
    "NotificationType",
    "TopicDetails",
]
