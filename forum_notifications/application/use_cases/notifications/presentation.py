"""Human readable titles, snippets and timestamps for notifications."""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone

from forum_notifications.domain.entities import (
    ADMIN_MESSAGE,
    BadgeDetails,
    GroupDetails,
    Notification,
    NotificationType as T,
    TopicDetails,
)
from forum_notifications.utils import parse_iso_datetime

_TAG_PATTERN = re.compile(r"<[^>]*>")
_SNIPPET_LIMIT = 100
_DEFAULT_ACTOR = "Someone"


def get_notification_title(notification: Notification) -> str:
    """Return the headline shown for ``notification``."""

    details = notification.details
    data = notification.data
    actor = _actor(data)
    topic = _topic_title(data)
    group = _group_name(details, data)

    def about(with_topic: str, without_topic: str) -> str:
        return with_topic.replace("{topic}", topic) if topic else without_topic

    titles = {
        T.REPLIED.value: lambda: about(f'{actor} replied to "{{topic}}"', f"{actor} replied to your Byte"),
        T.MENTIONED.value: lambda: about(f'{actor} mentioned you in "{{topic}}"', f"{actor} mentioned you"),
        T.QUOTED.value: lambda: about(f'{actor} quoted you in "{{topic}}"', f"{actor} quoted you"),
        T.LIKED.value: lambda: about(f'{actor} liked "{{topic}}"', f"{actor} liked your Byte"),
        T.LIKED_CONSOLIDATED.value: lambda: about(
            'Multiple people liked "{topic}"', "Multiple people liked your Byte"
        ),
        T.GROUP_MENTIONED.value: lambda: about(
            'You were mentioned in "{topic}"', "You were mentioned in a group"
        ),
        T.INVITED_TO_PRIVATE_MESSAGE.value: lambda: f"{actor} invited you to a private message",
        T.PRIVATE_MESSAGE.value: lambda: about('New message: "{topic}"', "New private message"),
        T.BOOKMARK_REMINDER.value: lambda: about('Reminder: "{topic}"', "Bookmark reminder"),
        T.GRANTED_BADGE.value: lambda: f"You earned {_badge_name(details)}",
        T.GROUP_MESSAGE_SUMMARY.value: lambda: f"New messages in {group}",
        ADMIN_MESSAGE: lambda: topic or "Admin message",
        T.INVITED_TO_TOPIC.value: lambda: about(
            f'{actor} invited you to "{{topic}}"', f"{actor} invited you to a topic"
        ),
        T.POST_APPROVED.value: lambda: about(
            'Your post in "{topic}" was approved', "Your post was approved"
        ),
        T.INVITEE_ACCEPTED.value: lambda: f"{actor} accepted your invitation",
        T.POSTED.value: lambda: about(f'{actor} posted in "{{topic}}"', f"{actor} posted"),
        T.MOVED_POST.value: lambda: about('Post moved: "{topic}"', "Post was moved"),
        T.LINKED.value: lambda: about(f'{actor} linked to "{{topic}}"', f"{actor} linked to your post"),
        T.WATCHING_FIRST_POST.value: lambda: about(
            'New topic: "{topic}"', "New topic in watched category"
        ),
        T.CODE_REVIEW_COMMIT_APPROVED.value: lambda: "Code review commit approved",
        T.MEMBERSHIP_REQUEST_ACCEPTED.value: lambda: f"Membership request accepted for {group}",
        T.MEMBERSHIP_REQUEST_CONSOLIDATED.value: lambda: f"Membership requests in {group}",
        T.VOTES_RELEASED.value: lambda: about('Votes released for "{topic}"', "Votes released"),
        T.CUSTOM.value: lambda: _string(data.get("title")) or topic or "Custom notification",
    }

    build = titles.get(notification.type)
    if build is not None:
        return build()

    if topic:
        return topic
    if actor != _DEFAULT_ACTOR:
        return f"{actor} notified you"
    return notification.title or "Notification"


def get_notification_snippet(notification: Notification) -> str:
    """Return the secondary line shown under the title."""

    details = notification.details
    data = notification.data

    excerpt = _string(data.get("excerpt"))
    if excerpt:
        return _truncate(clean_html(excerpt))

    if isinstance(details, BadgeDetails) and details.badge_description:
        return details.badge_description

    if notification.type == T.GROUP_MESSAGE_SUMMARY.value and isinstance(details, GroupDetails):
        if details.group_name:
            return f"Messages from {details.group_name}"

    topic = _topic_title(data)
    if topic:
        return topic

    if notification.message:
        return _truncate(clean_html(notification.message))

    return ""


def format_relative_time(created_at: str, *, now: datetime | None = None) -> str:
    """Return a compact age such as ``Just now``, ``3m``, ``2h`` or ``Nov 20``."""

    moment = parse_iso_datetime(created_at)
    if moment is None:
        return "Unknown"

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = (now - moment).total_seconds()
    minutes = int(elapsed // 60)
    hours = int(elapsed // 3600)
    days = int(elapsed // 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days}d"
    if days < 30:
        return f"{days // 7}w"

    local = moment.astimezone(now.tzinfo)
    label = f"{local.strftime('%b')} {local.day}"
    if local.year != now.year:
        label = f"{label}, {local.year}"
    return label


def clean_html(value: str) -> str:
    """Strip tags and decode entities from forum HTML fragments."""

    text = _TAG_PATTERN.sub("", value)
    return html.unescape(text).replace("\xa0", " ").strip()


def _truncate(value: str) -> str:
    if len(value) > _SNIPPET_LIMIT:
        return value[:_SNIPPET_LIMIT] + "..."
    return value


def _actor(data: dict) -> str:
    return _string(data.get("display_username")) or _DEFAULT_ACTOR


def _topic_title(data: dict) -> str | None:
    return _string(data.get("topic_title"))


def _badge_name(details: TopicDetails | BadgeDetails | GroupDetails) -> str:
    if isinstance(details, BadgeDetails) and details.badge_name:
        return details.badge_name
    return "a badge"


def _group_name(details: TopicDetails | BadgeDetails | GroupDetails, data: dict) -> str:
    if isinstance(details, GroupDetails) and details.group_name:
        return details.group_name
    return _string(data.get("group_name")) or "group"


def _string(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


__all__ = [
    "clean_html",
    "format_relative_time",
    "get_notification_snippet",
    "get_notification_title",
]
