"""Tests for settings loading and datetime helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from forum_notifications.config import Settings, get_settings, reset_settings_cache
from forum_notifications.utils import parse_iso_datetime
from forum_notifications.utils.datetime import _resolve_timezone


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.forum_base_url == "http://localhost:3000"
    assert settings.forum_api_key is None
    assert settings.request_timeout_seconds == 15.0


def test_settings_strip_trailing_slash():
    settings = Settings(_env_file=None, forum_base_url="https://forum.example.com/")

    assert settings.forum_base_url == "https://forum.example.com"


def test_settings_require_key_and_username_together():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, forum_api_key="secret")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, forum_api_username="alice")


def test_settings_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("FORUM_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "4.5")
    reset_settings_cache()
    try:
        settings = get_settings()
        assert settings.forum_base_url == "https://env.example.com"
        assert settings.request_timeout_seconds == 4.5
        assert get_settings() is settings
    finally:
        reset_settings_cache()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-05-15T10:00:00Z", datetime(2024, 5, 15, 10, tzinfo=timezone.utc)),
        ("2024-05-15T10:00:00", datetime(2024, 5, 15, 10, tzinfo=timezone.utc)),
        (
            "2024-05-15T12:00:00+02:00",
            datetime(2024, 5, 15, 10, tzinfo=timezone.utc),
        ),
        ("not a date", None),
        ("", None),
        (None, None),
        (12345, None),
    ],
)
def test_parse_iso_datetime(value, expected):
    assert parse_iso_datetime(value) == expected


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC", timedelta(0)),
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("UTC-03:00", timedelta(hours=-3)),
        ("Not/AZone", timedelta(0)),
    ],
)
def test_resolve_timezone(name, offset):
    reference = datetime(2024, 1, 1, 12)

    assert _resolve_timezone(name).utcoffset(reference) == offset

