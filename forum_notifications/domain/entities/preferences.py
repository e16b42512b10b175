"""Domain entity describing which notifications a user wants to see."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Final, Mapping

PREFERENCES_VERSION: Final[int] = 1

LIKE_FREQUENCY_ALWAYS = "always"
LIKE_FREQUENCY_DAILY = "daily"
LIKE_FREQUENCY_WEEKLY = "weekly"
LIKE_FREQUENCY_NEVER = "never"

LIKE_FREQUENCIES: Final[tuple[str, ...]] = (
    LIKE_FREQUENCY_ALWAYS,
    LIKE_FREQUENCY_DAILY,
    LIKE_FREQUENCY_WEEKLY,
    LIKE_FREQUENCY_NEVER,
)

# Values of the forum's ``like_notification_frequency`` user option.
LIKE_FREQUENCY_TO_FORUM: Final[dict[str, int]] = {
    LIKE_FREQUENCY_ALWAYS: 0,
    LIKE_FREQUENCY_DAILY: 1,
    LIKE_FREQUENCY_WEEKLY: 2,
    LIKE_FREQUENCY_NEVER: 3,
}
FORUM_TO_LIKE_FREQUENCY: Final[dict[int, str]] = {
    value: key for key, value in LIKE_FREQUENCY_TO_FORUM.items()
}


@dataclass(frozen=True)
class NotificationPreferences:
    """Per-category toggles plus the forum synced like frequency.

    Push fields are stored for the settings screen only; nothing delivers push
    messages from them.
    """

    version: int = PREFERENCES_VERSION
    replies: bool = True
    mentions: bool = True
    likes: bool = True
    private_messages: bool = True
    badges: bool = True
    system: bool = True
    following: bool = True
    like_frequency: str = LIKE_FREQUENCY_ALWAYS
    push_enabled: bool = False
    push_sound: bool = False
    push_alert: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_value(self, key: str, value: Any) -> "NotificationPreferences":
        """Return a copy with ``key`` set to ``value`` after validating both."""

        validate_preference(key, value)
        return replace(self, **{key: value})

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "NotificationPreferences":
        """Build preferences from a stored record, migrating old versions.

        Records without a version, or with an older one, are merged over the
        defaults and stamped with the current version. Keys that are unknown or
        hold invalid values are ignored so a damaged record never hides the
        defaults.
        """

        values: dict[str, Any] = {}
        for key, value in raw.items():
            if key == "version" or key not in PREFERENCE_KEYS:
                continue
            try:
                validate_preference(key, value)
            except ValueError:
                continue
            values[key] = value

        version = raw.get("version")
        if not isinstance(version, int) or isinstance(version, bool) or version < PREFERENCES_VERSION:
            version = PREFERENCES_VERSION
        return cls(version=version, **values)


DEFAULT_PREFERENCES: Final[NotificationPreferences] = NotificationPreferences()

PREFERENCE_KEYS: Final[frozenset[str]] = frozenset(
    item.name for item in fields(NotificationPreferences) if item.name != "version"
)


def validate_preference(key: str, value: Any) -> None:
    """Raise :class:`ValueError` unless ``value`` is acceptable for ``key``."""

    if key not in PREFERENCE_KEYS:
        raise ValueError(f"Unknown notification preference '{key}'")
    if key == "like_frequency":
        if value not in LIKE_FREQUENCIES:
            allowed = ", ".join(LIKE_FREQUENCIES)
            raise ValueError(f"like_frequency must be one of: {allowed}")
        return
    if not isinstance(value, bool):
        raise ValueError(f"Notification preference '{key}' must be a boolean")


__all__ = [
    "DEFAULT_PREFERENCES",
    "FORUM_TO_LIKE_FREQUENCY",
    "LIKE_FREQUENCIES",
    "LIKE_FREQUENCY_ALWAYS",
    "LIKE_FREQUENCY_DAILY",
    "LIKE_FREQUENCY_NEVER",
    "LIKE_FREQUENCY_TO_FORUM",
    "LIKE_FREQUENCY_WEEKLY",
    "NotificationPreferences",
    "PREFERENCES_VERSION",
    "PREFERENCE_KEYS",
    "validate_preference",
]
