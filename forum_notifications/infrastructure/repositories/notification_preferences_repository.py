"""Persistence helpers for notification preferences."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from forum_notifications.domain.entities import PREFERENCE_KEYS, NotificationPreferences
from forum_notifications.infrastructure.models import NotificationPreferencesModel
from forum_notifications.utils import utc_now

_STORED_FIELDS = ("version", *sorted(PREFERENCE_KEYS))


class NotificationPreferencesRepository:
    """Read and write :class:`NotificationPreferences` rows keyed by storage key."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, storage_key: str) -> dict[str, Any] | None:
        """Return the stored record as a mapping, omitting unset columns."""

        model = self._get_model(storage_key)
        if model is None:
            return None
        return self._to_mapping(model)

    def save(self, storage_key: str, preferences: NotificationPreferences) -> NotificationPreferences:
        model = self._get_model(storage_key)
        if model is None:
            model = NotificationPreferencesModel(storage_key=storage_key)
        for name, value in preferences.to_dict().items():
            setattr(model, name, value)
        model.updated_at = utc_now().replace(tzinfo=None)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return NotificationPreferences.from_mapping(self._to_mapping(model))

    def delete(self, storage_key: str) -> bool:
        model = self._get_model(storage_key)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, storage_key: str) -> NotificationPreferencesModel | None:
        return (
            self.session.query(NotificationPreferencesModel)
            .filter(NotificationPreferencesModel.storage_key == storage_key)
            .one_or_none()
        )

    @staticmethod
    def _to_mapping(model: NotificationPreferencesModel) -> dict[str, Any]:
        values = {name: getattr(model, name) for name in _STORED_FIELDS}
        return {name: value for name, value in values.items() if value is not None}


class SqlAlchemyPreferenceStorage:
    """``PreferenceStorage`` adapter opening one session per operation."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> dict[str, Any] | None:
        with self._session_factory() as session:
            return NotificationPreferencesRepository(session).get(key)

    def save(self, key: str, preferences: NotificationPreferences) -> None:
        with self._session_factory() as session:
            NotificationPreferencesRepository(session).save(key, preferences)


__all__ = ["NotificationPreferencesRepository", "SqlAlchemyPreferenceStorage"]
