"""Timezone resolution and ISO-8601 parsing for notification timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from forum_notifications.config import get_settings

_UTC_ALIASES: Final[frozenset[str]] = frozenset({"UTC", "GMT", "Z"})
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"(?:UTC|GMT)?(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone whose calendar days define the feed sections.

    Read from ``APP_TIMEZONE``; IANA names and fixed offsets such as
    ``UTC+05:30`` are accepted, anything else means UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    return _resolve_timezone(name) if name else timezone.utc


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_isoformat() -> str:
    """Return the current instant as an ISO-8601 string in UTC."""

    return utc_now().isoformat()


def parse_iso_datetime(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` for anything unparseable.

    A trailing ``Z`` is accepted as UTC. Naive values are assumed to be UTC,
    which is how the forum serializes its timestamps.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _resolve_timezone(name: str) -> tzinfo:
    if name.upper() in _UTC_ALIASES:
        return timezone.utc

    offset = _FIXED_OFFSET.fullmatch(name)
    if offset is not None and int(offset["hours"]) < 24:
        delta = timedelta(hours=int(offset["hours"]), minutes=int(offset["minutes"] or 0))
        return timezone(-delta if offset["sign"] == "-" else delta)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return timezone.utc


__all__ = ["get_app_timezone", "parse_iso_datetime", "utc_now", "utc_now_isoformat"]
