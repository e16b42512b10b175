"""Destination the client opens when a notification is selected."""

from __future__ import annotations

from dataclasses import dataclass

BYTE_PATH_TEMPLATE = "/feed/{topic_id}"
PROFILE_PATH = "/(profile)/index"
SETTINGS_PATH = "/(profile)/settings"


@dataclass(frozen=True)
class NavigationTarget:
    """Route path plus optional string parameters."""

    path: str
    params: dict[str, str] | None = None


__all__ = ["BYTE_PATH_TEMPLATE", "NavigationTarget", "PROFILE_PATH", "SETTINGS_PATH"]
