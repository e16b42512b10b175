"""Tests for the notification preferences service."""

from __future__ import annotations

import threading

import pytest

from forum_notifications.application.use_cases.notifications import (
    NotificationPreferencesService,
    SourceResponse,
)
from forum_notifications.application.use_cases.notifications.preferences import LOCAL_STORAGE_KEY
from forum_notifications.domain.entities import DEFAULT_PREFERENCES, NotificationPreferences


class ThreadRecordingStorage:
    def __init__(self):
        self.threads = []
        self.records = {}

    def load(self, key):
        self.threads.append(threading.get_ident())
        return self.records.get(key)

    def save(self, key, preferences):
        self.threads.append(threading.get_ident())
        self.records[key] = preferences.to_dict()


class BrokenStorage:
    def load(self, key):
        raise OSError("disk unavailable")

    def save(self, key, preferences):
        raise OSError("disk unavailable")


@pytest.mark.asyncio
async def test_load_without_stored_record_uses_defaults(storage):
    service = NotificationPreferencesService(storage)
    assert service.is_loading is True

    preferences = await service.load()

    assert preferences == DEFAULT_PREFERENCES
    assert service.is_loading is False


@pytest.mark.asyncio
async def test_load_migrates_old_records(storage):
    storage.records[LOCAL_STORAGE_KEY] = {"replies": False, "likes": "sometimes", "retired_flag": True}
    service = NotificationPreferencesService(storage)

    preferences = await service.load()

    assert preferences.version == 1
    assert preferences.replies is False
    assert preferences.likes is True
    assert preferences.mentions is True


@pytest.mark.asyncio
async def test_load_falls_back_to_defaults_when_storage_fails():
    service = NotificationPreferencesService(BrokenStorage())

    assert await service.load() == DEFAULT_PREFERENCES
    assert service.is_loading is False


@pytest.mark.asyncio
async def test_remote_like_frequency_overrides_local(storage, forum):
    storage.records["alice"] = {"version": 1, "like_frequency": "never", "badges": False}
    forum.remote_preferences = {"like_frequency": "weekly"}
    service = NotificationPreferencesService(storage, forum, username="alice", storage_key="alice")

    preferences = await service.load()

    assert forum.preference_requests == ["alice"]
    assert preferences.like_frequency == "weekly"
    assert preferences.badges is False
    assert storage.records["alice"]["like_frequency"] == "weekly"
    assert service.is_syncing is False


@pytest.mark.asyncio
async def test_remote_failure_keeps_local_values(storage, forum):
    storage.records[LOCAL_STORAGE_KEY] = {"like_frequency": "daily"}
    forum.remote_preferences = None
    service = NotificationPreferencesService(storage, forum, username="alice")

    preferences = await service.load()

    assert preferences.like_frequency == "daily"
    assert await service.sync_from_remote() is False


@pytest.mark.asyncio
async def test_no_remote_sync_without_username(storage, forum):
    service = NotificationPreferencesService(storage, forum)

    await service.load()
    await service.set_preference("like_frequency", "never")

    assert forum.preference_requests == []
    assert forum.synced == []
    assert service.preferences.like_frequency == "never"


@pytest.mark.asyncio
async def test_local_toggle_is_persisted_but_not_synced(storage, forum):
    service = NotificationPreferencesService(storage, forum, username="alice")
    await service.load()

    updated = await service.set_preference("replies", False)

    assert updated.replies is False
    assert storage.records[LOCAL_STORAGE_KEY]["replies"] is False
    assert forum.synced == []


@pytest.mark.asyncio
async def test_like_frequency_is_pushed_to_the_forum(storage, forum):
    service = NotificationPreferencesService(storage, forum, username="alice")
    await service.load()

    await service.set_preference("like_frequency", "daily")

    assert forum.synced == [("alice", {"like_frequency": "daily"})]
    assert service.is_syncing is False


@pytest.mark.asyncio
async def test_failed_push_keeps_the_local_change(storage, forum):
    forum.sync_result = SourceResponse(success=False, error="rate limited")
    service = NotificationPreferencesService(storage, forum, username="alice")
    await service.load()

    updated = await service.set_preference("like_frequency", "weekly")

    assert updated.like_frequency == "weekly"
    assert storage.records[LOCAL_STORAGE_KEY]["like_frequency"] == "weekly"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("key", "value"),
    [("unknown_key", True), ("version", 2), ("likes", "yes"), ("like_frequency", "hourly")],
)
async def test_invalid_updates_are_rejected(storage, key, value):
    service = NotificationPreferencesService(storage)
    await service.load()

    with pytest.raises(ValueError):
        await service.set_preference(key, value)

    assert service.preferences == DEFAULT_PREFERENCES
    assert storage.saves == 0


@pytest.mark.asyncio
async def test_reset_to_defaults(storage):
    service = NotificationPreferencesService(storage)
    await service.load()
    await service.set_preference("mentions", False)

    assert await service.reset_to_defaults() == DEFAULT_PREFERENCES
    assert storage.records[LOCAL_STORAGE_KEY]["mentions"] is True


@pytest.mark.asyncio
async def test_persist_failures_are_logged_not_raised():
    service = NotificationPreferencesService(BrokenStorage())
    await service.load()

    updated = await service.set_preference("push_enabled", True)

    assert updated.push_enabled is True


@pytest.mark.asyncio
async def test_listeners_follow_changes(storage):
    service = NotificationPreferencesService(storage)
    states = []
    unsubscribe = service.subscribe(states.append)

    await service.load()
    await service.set_preference("badges", False)
    unsubscribe()
    unsubscribe()
    await service.reset_to_defaults()

    assert states[-1].preferences.badges is False
    assert states[0].is_loading is False


def test_from_mapping_handles_versions():
    assert NotificationPreferences.from_mapping({"version": 0}).version == 1
    assert NotificationPreferences.from_mapping({"version": True}).version == 1
    assert NotificationPreferences.from_mapping({}).to_dict() == DEFAULT_PREFERENCES.to_dict()


@pytest.mark.asyncio
async def test_username_set_after_sign_in_enables_sync(storage, forum):
    forum.remote_preferences = {"like_frequency": "never"}
    service = NotificationPreferencesService(storage, forum)
    await service.load()

    service.set_username("alice")
    assert service.username == "alice"
    assert await service.sync_from_remote() is True
    assert service.preferences.like_frequency == "never"

    service.set_username("")
    assert service.username is None
    assert await service.sync_from_remote() is False


@pytest.mark.asyncio
async def test_storage_runs_outside_the_event_loop_thread():
    storage = ThreadRecordingStorage()
    service = NotificationPreferencesService(storage)

    await service.load()
    await service.set_preference("replies", False)
    await service.reset_to_defaults()

    assert len(storage.threads) == 3
    assert threading.get_ident() not in storage.threads
    assert storage.records[LOCAL_STORAGE_KEY]["replies"] is True
