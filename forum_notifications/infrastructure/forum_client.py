"""Async HTTP client for the Discourse notification and user option endpoints."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Final
from urllib.parse import quote

import httpx

from forum_notifications.application.use_cases.notifications.ports import SourceResponse
from forum_notifications.config import Settings
from forum_notifications.domain.entities import (
    FORUM_TO_LIKE_FREQUENCY,
    LIKE_FREQUENCY_TO_FORUM,
)
from forum_notifications.domain.entities.preferences import LIKE_FREQUENCY_ALWAYS

logger = logging.getLogger(__name__)

_USERNAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_.-]{1,60}")


def is_valid_username(username: str | None) -> bool:
    return bool(username) and bool(_USERNAME_PATTERN.fullmatch(username))


def _extract_error_details(response: httpx.Response) -> str:
    """Return a human readable description for a forum error payload."""

    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError):
        text = response.text.strip()
        return text[:200] if text else f"HTTP {response.status_code}"

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(item) for item in errors)
        for key in ("error", "message"):
            if payload.get(key):
                return str(payload[key])
    return f"HTTP {response.status_code}"


class ForumNotificationClient:
    """Talk to the forum on behalf of one user.

    Every public method returns a :class:`SourceResponse`; transport errors
    and non-success statuses are logged and reported through ``error``
    instead of being raised.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        api_username: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_key and api_username:
            headers["Api-Key"] = api_key
            headers["Api-Username"] = api_username
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ForumNotificationClient":
        return cls(
            settings.forum_base_url,
            api_key=settings.forum_api_key,
            api_username=settings.forum_api_username,
            timeout=settings.request_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_notifications(self) -> SourceResponse:
        return await self._request("GET", "/notifications.json")

    async def mark_one_read(self, notification_id: int) -> SourceResponse:
        return await self._request(
            "PUT", "/notifications/mark-read.json", json={"id": notification_id}
        )

    async def mark_all_read(self) -> SourceResponse:
        return await self._request("PUT", "/notifications/mark-read.json")

    async def fetch_preferences(self, username: str) -> dict[str, str] | None:
        """Return ``{"like_frequency": ...}`` for ``username`` or ``None`` on failure."""

        if not is_valid_username(username):
            logger.warning("Refusing to load preferences for invalid username %r", username)
            return None

        response = await self._request("GET", f"/u/{quote(username)}.json")
        if not response.success or not isinstance(response.data, Mapping):
            return None

        user = response.data.get("user") or response.data
        options = user.get("user_option") if isinstance(user, Mapping) else None
        raw_frequency = options.get("like_notification_frequency") if isinstance(options, Mapping) else None
        if isinstance(raw_frequency, int) and not isinstance(raw_frequency, bool):
            like_frequency = FORUM_TO_LIKE_FREQUENCY.get(raw_frequency, LIKE_FREQUENCY_ALWAYS)
        else:
            like_frequency = LIKE_FREQUENCY_ALWAYS
        return {"like_frequency": like_frequency}

    async def sync_preferences(
        self, username: str, preferences: Mapping[str, str]
    ) -> SourceResponse:
        if not is_valid_username(username):
            return SourceResponse(success=False, error="Invalid username format")

        forum_frequency = LIKE_FREQUENCY_TO_FORUM.get(preferences.get("like_frequency", ""))
        if forum_frequency is None:
            return SourceResponse(success=False, error="Invalid like frequency value")

        return await self._request(
            "PUT",
            f"/u/{quote(username)}.json",
            json={"user": {"like_notification_frequency": forum_frequency}},
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> SourceResponse:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Forum request %s %s failed: %s", method, path, exc)
            return SourceResponse(success=False, error=str(exc) or exc.__class__.__name__)

        if response.is_error:
            details = _extract_error_details(response)
            logger.error(
                "Forum request %s %s failed with status %s: %s",
                method,
                path,
                response.status_code,
                details,
            )
            return SourceResponse(success=False, error=details)

        if not response.content:
            return SourceResponse(success=True)
        try:
            return SourceResponse(success=True, data=response.json())
        except (json.JSONDecodeError, ValueError):
            logger.debug("Forum response for %s %s is not JSON", method, path)
            return SourceResponse(success=True)


__all__ = ["ForumNotificationClient", "is_valid_username"]
