"""Display sections produced when grouping notifications by day."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import Notification

SECTION_TODAY = "Today"
SECTION_YESTERDAY = "Yesterday"
SECTION_THIS_WEEK = "This week"
SECTION_EARLIER = "Earlier"

SECTION_TITLES = (SECTION_TODAY, SECTION_YESTERDAY, SECTION_THIS_WEEK, SECTION_EARLIER)


@dataclass
class NotificationSection:
    """Titled slice of a notification list, derived on every render."""

    title: str
    data: list[Notification] = field(default_factory=list)


__all__ = [
    "NotificationSection",
    "SECTION_EARLIER",
    "SECTION_THIS_WEEK",
    "SECTION_TITLES",
    "SECTION_TODAY",
    "SECTION_YESTERDAY",
]
