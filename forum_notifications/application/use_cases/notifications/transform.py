"""Conversion of raw forum notification records into canonical entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from forum_notifications.domain.entities import Notification
from forum_notifications.utils import parse_iso_datetime, utc_now_isoformat

from .normalization import normalize_notification_type

logger = logging.getLogger(__name__)

_ID_FIELDS = ("id", "notification_id")
_TYPE_FIELDS = ("notification_type", "type")
_RECORD_CONTAINERS = ("notifications", "data")
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def extract_raw_records(payload: Any) -> list[Any]:
    """Return the raw record list held by a ``fetch_notifications`` payload.

    The forum either returns the list itself or an object holding it under
    ``notifications`` (or ``data`` for wrapped responses).
    """

    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for container in _RECORD_CONTAINERS:
            records = payload.get(container)
            if isinstance(records, list):
                return records
            if isinstance(records, Mapping):
                nested = extract_raw_records(records)
                if nested:
                    return nested
    return []


def transform_notification(raw: Any, *, now: str | None = None) -> Notification:
    """Build a :class:`Notification` from one raw record, defaulting missing fields."""

    record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    notification_id = _first_int(record, _ID_FIELDS)
    if notification_id is None:
        logger.debug("Notification record without an id: %s", record)
        notification_id = 0

    raw_type = _first_present(record, _TYPE_FIELDS)
    data = record.get("data")
    data = dict(data) if isinstance(data, Mapping) else {}

    created_at = record.get("created_at")
    if isinstance(created_at, datetime):
        created_at = created_at.isoformat()
    if not isinstance(created_at, str) or not created_at:
        created_at = now or utc_now_isoformat()

    return Notification(
        id=notification_id,
        type=normalize_notification_type(raw_type),
        is_read=_coerce_bool(record.get("read")),
        created_at=created_at,
        topic_id=_coerce_int(record.get("topic_id")),
        post_number=_coerce_int(record.get("post_number")),
        user_id=_coerce_int(record.get("user_id")),
        data=data,
        message=_first_string(record.get("message"), data.get("message")),
        title=_first_string(record.get("title"), data.get("title")),
    )


def transform_notifications(records: Iterable[Any], *, now: str | None = None) -> list[Notification]:
    """Transform every record and order the result newest first."""

    stamp = now or utc_now_isoformat()
    notifications = [transform_notification(record, now=stamp) for record in records]
    notifications.sort(key=_created_at_sort_key, reverse=True)
    return notifications


def _created_at_sort_key(notification: Notification) -> datetime:
    return parse_iso_datetime(notification.created_at) or _OLDEST


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _first_int(record: Mapping[str, Any], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        value = _coerce_int(record.get(key))
        if value is not None:
            return value
    return None


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return False


def _first_string(*values: Any) -> str | None:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return None


__all__ = ["extract_raw_records", "transform_notification", "transform_notifications"]
