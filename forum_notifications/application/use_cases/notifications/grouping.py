"""Grouping of notifications into day based display sections."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from forum_notifications.domain.entities import (
    SECTION_EARLIER,
    SECTION_THIS_WEEK,
    SECTION_TITLES,
    SECTION_TODAY,
    SECTION_YESTERDAY,
    Notification,
    NotificationSection,
)
from forum_notifications.utils import get_app_timezone, parse_iso_datetime


def group_by_time(
    notifications: Iterable[Notification] | None,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[NotificationSection]:
    """Split ``notifications`` into Today, Yesterday, This week and Earlier.

    Days are calendar dates in ``tz`` (the application timezone by default).
    "This week" covers the seven days before yesterday, so a notification
    dated exactly one week before today still lands there. Empty sections are
    dropped and the input order is kept inside each section.
    """

    tz = tz or get_app_timezone()
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    else:
        now = now.astimezone(tz)
    today = now.date()
    yesterday = today - timedelta(days=1)
    this_week_start = today - timedelta(days=7)

    buckets: dict[str, list[Notification]] = {title: [] for title in SECTION_TITLES}
    for notification in notifications or ():
        day = _local_day(notification, tz)
        if day is None:
            buckets[SECTION_EARLIER].append(notification)
        elif day == today:
            buckets[SECTION_TODAY].append(notification)
        elif day == yesterday:
            buckets[SECTION_YESTERDAY].append(notification)
        elif day >= this_week_start:
            buckets[SECTION_THIS_WEEK].append(notification)
        else:
            buckets[SECTION_EARLIER].append(notification)

    return [
        NotificationSection(title=title, data=buckets[title])
        for title in SECTION_TITLES
        if buckets[title]
    ]


def _local_day(notification: Notification, tz: tzinfo) -> date | None:
    created_at = parse_iso_datetime(notification.created_at)
    if created_at is None:
        return None
    return created_at.astimezone(tz).date()


__all__ = ["group_by_time"]
