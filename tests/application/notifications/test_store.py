"""Tests for the notification store and its read-state mutations."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from forum_notifications.application.use_cases.notifications import (
    NotificationStore,
    SourceResponse,
)
from forum_notifications.domain.entities import DEFAULT_PREFERENCES


class GatedForum:
    """Forum whose fetches block until the test releases them, in call order."""

    def __init__(self) -> None:
        self.pending: list[tuple[asyncio.Event, SourceResponse]] = []
        self.fetch_calls = 0

    def queue(self, response: SourceResponse) -> asyncio.Event:
        gate = asyncio.Event()
        self.pending.append((gate, response))
        return gate

    async def fetch_notifications(self) -> SourceResponse:
        self.fetch_calls += 1
        gate, response = self.pending.pop(0)
        await gate.wait()
        return response

    async def mark_one_read(self, notification_id: int) -> SourceResponse:
        return SourceResponse(success=True)

    async def mark_all_read(self) -> SourceResponse:
        return SourceResponse(success=True)


@pytest.mark.asyncio
async def test_load_replaces_list_and_counts(forum, make_raw):
    forum.records = [make_raw(1), make_raw(2, read=True), make_raw(3, created_at="2024-05-16T00:00:00Z")]
    store = NotificationStore(forum)

    assert await store.load_notifications() is True

    assert [notification.id for notification in store.notifications] == [3, 1, 2]
    assert store.unread_count == 2
    assert store.total_count == 3
    assert store.is_loading is False
    assert store.has_error is False


@pytest.mark.asyncio
async def test_failed_load_keeps_previous_list(forum, make_raw):
    forum.records = [make_raw(1)]
    store = NotificationStore(forum)
    await store.load_notifications()

    forum.fetch_responses.append(SourceResponse(success=False, error="Forum is down"))
    assert await store.load_notifications() is False

    assert store.has_error is True
    assert store.error_message == "Forum is down"
    assert [notification.id for notification in store.notifications] == [1]


@pytest.mark.asyncio
async def test_failed_load_without_message_uses_default(forum):
    forum.fetch_responses.append(SourceResponse(success=True, data=None))
    store = NotificationStore(forum)

    await store.load_notifications()

    assert store.has_error is True
    assert store.error_message == "Failed to load notifications"


@pytest.mark.asyncio
async def test_source_exception_is_reported_as_error(forum):
    forum.fetch_responses.append(RuntimeError("socket closed"))
    store = NotificationStore(forum)

    assert await store.load_notifications() is False

    assert store.has_error is True
    assert store.error_message == "socket closed"


@pytest.mark.asyncio
async def test_next_load_clears_the_error(forum, make_raw):
    forum.fetch_responses.append(SourceResponse(success=False, error="boom"))
    store = NotificationStore(forum)
    await store.load_notifications()

    forum.records = [make_raw(1)]
    await store.load_notifications()

    assert store.has_error is False
    assert store.error_message is None
    assert store.total_count == 1


@pytest.mark.asyncio
async def test_mark_as_read_updates_after_confirmation(forum, make_raw):
    forum.records = [make_raw(1), make_raw(2)]
    store = NotificationStore(forum)
    await store.load_notifications()

    assert await store.mark_as_read(1) is True

    assert forum.marked == [1]
    assert store.get(1).is_read is True
    assert store.get(2).is_read is False
    assert store.unread_count == 1
    assert forum.fetch_calls == 1


@pytest.mark.asyncio
async def test_failed_mark_as_read_reloads(forum, make_raw):
    forum.records = [make_raw(1)]
    store = NotificationStore(forum)
    await store.load_notifications()
    forum.mark_one_result = SourceResponse(success=False, error="403")

    assert await store.mark_as_read(1) is False

    assert forum.fetch_calls == 2
    assert store.get(1).is_read is False
    assert store.unread_count == 1


@pytest.mark.asyncio
async def test_mark_all_as_read(forum, make_raw):
    forum.records = [make_raw(1), make_raw(2), make_raw(3, read=True)]
    store = NotificationStore(forum)
    await store.load_notifications()

    assert await store.mark_all_as_read() is True

    assert store.unread_count == 0
    assert all(notification.is_read for notification in store.notifications)


@pytest.mark.asyncio
async def test_failed_mark_all_as_read_reloads(forum, make_raw):
    forum.records = [make_raw(1)]
    store = NotificationStore(forum)
    await store.load_notifications()
    forum.mark_all_result = SourceResponse(success=False, error="nope")

    assert await store.mark_all_as_read() is False

    assert forum.fetch_calls == 2
    assert store.unread_count == 1


@pytest.mark.asyncio
async def test_only_the_latest_load_is_applied(make_raw):
    forum = GatedForum()
    first = forum.queue(SourceResponse(success=True, data=[make_raw(1)]))
    second = forum.queue(SourceResponse(success=True, data=[make_raw(2)]))
    store = NotificationStore(forum)

    older = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)
    newer = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)

    second.set()
    assert await newer is True
    first.set()
    assert await older is False

    assert [notification.id for notification in store.notifications] == [2]
    assert store.is_loading is False


@pytest.mark.asyncio
async def test_read_confirmed_during_load_survives_the_load(make_raw):
    forum = GatedForum()
    gate = forum.queue(SourceResponse(success=True, data=[make_raw(1), make_raw(2)]))
    store = NotificationStore(forum)

    loading = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)
    assert store.is_loading is True

    assert await store.mark_as_read(1) is True
    gate.set()
    await loading

    assert store.get(1).is_read is True
    assert store.get(2).is_read is False


@pytest.mark.asyncio
async def test_mark_all_during_load_survives_the_load(make_raw):
    forum = GatedForum()
    gate = forum.queue(SourceResponse(success=True, data=[make_raw(1), make_raw(2)]))
    store = NotificationStore(forum)

    loading = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)
    await store.mark_all_as_read()
    gate.set()
    await loading

    assert store.unread_count == 0


@pytest.mark.asyncio
async def test_mark_all_during_load_covers_the_whole_fetched_page(make_raw):
    forum = GatedForum()
    first = forum.queue(SourceResponse(success=True, data=[make_raw(1), make_raw(2)]))
    store = NotificationStore(forum)

    loading = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)
    await store.mark_all_as_read()
    first.set()
    await loading

    assert store.get(2).is_read is True

    second = forum.queue(SourceResponse(success=True, data=[make_raw(1, read=True), make_raw(2)]))
    second.set()
    await store.load_notifications()

    assert store.get(2).is_read is False
    assert store.unread_count == 1


@pytest.mark.asyncio
async def test_clear_discards_list_and_pending_load(make_raw):
    forum = GatedForum()
    gate = forum.queue(SourceResponse(success=True, data=[make_raw(1)]))
    store = NotificationStore(forum)

    loading = asyncio.create_task(store.load_notifications())
    await asyncio.sleep(0)
    store.clear()
    gate.set()

    assert await loading is False
    assert store.notifications == ()
    assert store.is_loading is False


@pytest.mark.asyncio
async def test_listeners_receive_snapshots(forum, make_raw):
    forum.records = [make_raw(1)]
    store = NotificationStore(forum)
    states = []
    unsubscribe = store.subscribe(states.append)

    await store.load_notifications()
    unsubscribe()
    unsubscribe()
    store.clear()

    assert [state.is_loading for state in states] == [True, False]
    assert states[-1].total_count == 1


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_the_store(forum, make_raw):
    forum.records = [make_raw(1)]
    store = NotificationStore(forum)

    def broken(state):
        raise RuntimeError("listener bug")

    store.subscribe(broken)

    assert await store.load_notifications() is True
    assert store.total_count == 1


@pytest.mark.asyncio
async def test_visible_notifications_and_sections(forum, make_raw):
    forum.records = [
        make_raw(1, 2),
        make_raw(2, 5, read=True),
        make_raw(3, 1, created_at="2024-05-01T10:00:00Z"),
    ]
    store = NotificationStore(forum)
    await store.load_notifications()
    preferences = DEFAULT_PREFERENCES.with_value("likes", False)

    visible = store.visible_notifications(preferences, read_state="unread")
    sections = store.sections(
        preferences,
        now=datetime(2024, 5, 15, 12, tzinfo=timezone.utc),
    )

    assert [notification.id for notification in visible] == [1, 3]
    assert [(section.title, [item.id for item in section.data]) for section in sections] == [
        ("Today", [1]),
        ("Earlier", [3]),
    ]
    assert [notification.id for notification in store.visible_notifications(category="mentions")] == [3]
