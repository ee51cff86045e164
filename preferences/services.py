# preferences/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from django.contrib import messages
from django.db import models
from django.utils.translation import gettext as _

from .session import get_session_preferences, set_session_preferences
from .store import (
    WEB_NAMESPACE,
    PreferencesStore,
    PreferencesStoreError,
    SaveError,
    SaveResult,
)

logger = logging.getLogger("monitorweb")

# Submitted instead of a value: derive it from the request at render time
AUTODETECT = "autodetect"


class Action(models.TextChoices):
    PERSIST = "persist", "Save permanently"
    SESSION = "session", "Save for the current session"


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    persisted: bool
    message: str
    level: int = messages.SUCCESS


def merge_web_preferences(current: Mapping[str, Any], values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply submitted values to a preference section.
    Empty and "autodetect" values drop the key so it gets detected again.
    """
    merged = dict(current)
    for key, value in values.items():
        if value is None or value == "" or value == AUTODETECT:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def handle_submit(
    values: Mapping[str, Any], action: Action, request, store: PreferencesStore
) -> SubmitResult:
    """
    Merge validated form values into the user's preferences.

    The stored copy is reloaded first so other sections are not overwritten
    with stale session data. The session always gets the new web section,
    even when persisting fails afterwards; after a successful persist it
    holds exactly the persisted bag.
    """
    user = request.user
    try:
        stored = store.load(user)
    except PreferencesStoreError:
        logger.warning("preferences.submit store load failed, using session copy user=%s", user.pk)
        stored = get_session_preferences(request)

    web = merge_web_preferences(stored.get(WEB_NAMESPACE, {}), values)
    stored.set(WEB_NAMESPACE, web)

    # only the web section is replaced; unsaved session-only sections survive
    current = get_session_preferences(request)
    current.set(WEB_NAMESPACE, web)
    set_session_preferences(request, current)

    if action != Action.PERSIST:
        logger.info("preferences.submit session-only user=%s", user.pk)
        return SubmitResult(
            ok=True,
            persisted=False,
            message=_("Preferences successfully saved for the current session"),
        )

    try:
        result = store.save(user, stored)
    except Exception as exc:
        logger.error("preferences.submit store raised user=%s: %s", user.pk, exc, exc_info=True)
        result = SaveResult.failure(SaveError.UNAVAILABLE, str(exc))

    if not result.ok:
        logger.error(
            "preferences.submit save failed user=%s error=%s detail=%s",
            user.pk,
            result.error,
            result.detail,
        )
        reason = result.error.label if result.error else _("unknown error")
        return SubmitResult(
            ok=False,
            persisted=False,
            message=_("Preferences could not be saved: %(reason)s") % {"reason": reason},
            level=messages.ERROR,
        )

    # the session now mirrors exactly what was persisted
    set_session_preferences(request, stored)
    logger.info("preferences.submit persisted user=%s", user.pk)
    return SubmitResult(
        ok=True, persisted=True, message=_("Preferences successfully saved")
    )
