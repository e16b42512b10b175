"""Shared fixtures and in-memory collaborators for the notification tests."""

from __future__ import annotations

import os
import pathlib
import sys
from collections.abc import Mapping
from typing import Any

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

import pytest

from forum_notifications.application.use_cases.notifications import SourceResponse
from forum_notifications.domain.entities import NotificationPreferences


class FakeForum:
    """Scriptable stand-in for the forum covering notifications and preferences."""

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records = list(records or [])
        self.fetch_responses: list[SourceResponse | Exception] = []
        self.mark_one_result = SourceResponse(success=True)
        self.mark_all_result = SourceResponse(success=True)
        self.remote_preferences: dict[str, str] | None = None
        self.sync_result = SourceResponse(success=True)
        self.fetch_calls = 0
        self.marked: list[int] = []
        self.mark_all_calls = 0
        self.preference_requests: list[str] = []
        self.synced: list[tuple[str, dict[str, str]]] = []

    async def fetch_notifications(self) -> SourceResponse:
        self.fetch_calls += 1
        if self.fetch_responses:
            response = self.fetch_responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return SourceResponse(success=True, data={"notifications": list(self.records)})

    async def mark_one_read(self, notification_id: int) -> SourceResponse:
        self.marked.append(notification_id)
        if self.mark_one_result.success:
            self._mark_record(notification_id)
        return self.mark_one_result

    async def mark_all_read(self) -> SourceResponse:
        self.mark_all_calls += 1
        if self.mark_all_result.success:
            for record in self.records:
                record["read"] = True
        return self.mark_all_result

    async def fetch_preferences(self, username: str) -> dict[str, str] | None:
        self.preference_requests.append(username)
        return self.remote_preferences

    async def sync_preferences(
        self, username: str, preferences: Mapping[str, str]
    ) -> SourceResponse:
        self.synced.append((username, dict(preferences)))
        return self.sync_result

    def _mark_record(self, notification_id: int) -> None:
        for record in self.records:
            if record.get("id") == notification_id:
                record["read"] = True


class InMemoryPreferenceStorage:
    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self.records: dict[str, dict[str, Any]] = dict(initial or {})
        self.saves = 0

    def load(self, key: str) -> dict[str, Any] | None:
        return self.records.get(key)

    def save(self, key: str, preferences: NotificationPreferences) -> None:
        self.saves += 1
        self.records[key] = preferences.to_dict()


def raw_notification(notification_id: int, notification_type: Any = 2, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": notification_id,
        "notification_type": notification_type,
        "read": False,
        "created_at": "2024-05-15T10:00:00Z",
        "topic_id": 100 + notification_id,
        "post_number": 1,
        "data": {"topic_title": f"Topic {notification_id}", "display_username": "alice"},
    }
    record.update(overrides)
    return record


@pytest.fixture()
def forum() -> FakeForum:
    return FakeForum()


@pytest.fixture()
def storage() -> InMemoryPreferenceStorage:
    return InMemoryPreferenceStorage()


@pytest.fixture()
def make_raw():
    """Return the raw record factory used across the tests."""

    return raw_notification
