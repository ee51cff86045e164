# preferences/store.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from django.conf import settings
from django.db import DatabaseError, models, transaction
from django.utils.module_loading import import_string

from .models import UserPreference

logger = logging.getLogger("monitorweb")

# Namespace the web frontend keeps its own preferences under
WEB_NAMESPACE = "icingaweb"


class Preferences:
    """
    Namespaced preference bag: ``{section: {name: value}}``.

    Sections are independent of each other. Values are JSON scalars so the
    bag can live in the session as-is.
    """

    def __init__(self, data: Optional[Dict[str, Dict[str, Any]]] = None):
        self._data: Dict[str, Dict[str, Any]] = {}
        for section, values in (data or {}).items():
            self.set(section, values)

    def get(self, section: str, default: Any = None) -> Any:
        if section not in self._data:
            return default
        return dict(self._data[section])

    def set(self, section: str, values: Dict[str, Any]) -> None:
        # empty sections are not kept; the stores do not keep them either
        if values:
            self._data[section] = dict(values)
        else:
            self._data.pop(section, None)

    def items(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        for section, values in self._data.items():
            yield section, dict(values)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {section: dict(values) for section, values in self._data.items()}

    def copy(self) -> "Preferences":
        return Preferences(self._data)

    def __contains__(self, section: str) -> bool:
        return section in self._data

    def __eq__(self, other) -> bool:
        if not isinstance(other, Preferences):
            return NotImplemented
        return self._data == other._data

    def __repr__(self):
        return f"Preferences({self._data!r})"


class SaveError(models.TextChoices):
    UNAVAILABLE = "unavailable", "Preference store unavailable"
    WRITE_FAILED = "write_failed", "Writing preferences failed"


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    error: Optional[SaveError] = None
    detail: str = ""

    @classmethod
    def success(cls) -> "SaveResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: SaveError, detail: str = "") -> "SaveResult":
        return cls(ok=False, error=error, detail=detail)


class PreferencesStoreError(Exception):
    """Raised when preferences cannot be loaded from a store."""


class PreferencesStore:
    """
    Durable per-user preference storage.

    ``load`` raises PreferencesStoreError when the backend fails.
    ``save`` never raises for backend failures; it reports them through the
    returned SaveResult instead.
    """

    def load(self, user) -> Preferences:
        raise NotImplementedError

    def save(self, user, preferences: Preferences) -> SaveResult:
        raise NotImplementedError


class DatabasePreferencesStore(PreferencesStore):
    """Keeps one UserPreference row per (user, section, name)."""

    def load(self, user) -> Preferences:
        data: Dict[str, Dict[str, Any]] = {}
        try:
            rows = UserPreference.objects.filter(user=user).values_list(
                "section", "name", "value"
            )
            for section, name, value in rows:
                data.setdefault(section, {})[name] = value
        except DatabaseError as exc:
            logger.error("preferences.load failed user=%s: %s", user.pk, exc, exc_info=True)
            raise PreferencesStoreError(str(exc)) from exc
        return Preferences(data)

    def save(self, user, preferences: Preferences) -> SaveResult:
        wanted = {
            (section, name): value
            for section, values in preferences.items()
            for name, value in values.items()
        }
        try:
            with transaction.atomic():
                existing = {
                    (row.section, row.name): row
                    for row in UserPreference.objects.select_for_update().filter(user=user)
                }
                stale = [row.pk for key, row in existing.items() if key not in wanted]
                if stale:
                    UserPreference.objects.filter(pk__in=stale).delete()

                for (section, name), value in wanted.items():
                    row = existing.get((section, name))
                    if row is None:
                        UserPreference.objects.create(
                            user=user, section=section, name=name, value=value
                        )
                    elif row.value != value:
                        row.value = value
                        row.save(update_fields=["value", "updated_at"])
        except DatabaseError as exc:
            logger.exception("preferences.save failed user=%s", user.pk)
            return SaveResult.failure(SaveError.WRITE_FAILED, str(exc))
        return SaveResult.success()


def create_store() -> PreferencesStore:
    """Instantiate the backend configured in settings.PREFERENCES_STORE."""
    config = getattr(settings, "PREFERENCES_STORE", {}) or {}
    backend = config.get("BACKEND", "preferences.store.DatabasePreferencesStore")
    return import_string(backend)(**config.get("OPTIONS", {}))
