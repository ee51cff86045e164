# preferences/locales.py
from __future__ import annotations

from typing import List, Optional, Sequence

from django.conf import settings
from django.utils.translation import to_language, to_locale
from django.utils.translation.trans_real import parse_accept_lang_header


def list_available_locales() -> List[str]:
    """Locale codes (``de_DE`` style) of the configured translations, in settings order."""
    return [to_locale(code) for code, _name in settings.LANGUAGES]


def default_locale() -> str:
    return getattr(settings, "PREFERENCES_DEFAULT_LOCALE", "en_US")


def resolve_preferred_locale(
    accept_language: Optional[str], available: Optional[Sequence[str]] = None
) -> str:
    """
    Pick the best available locale for an Accept-Language header.

    Entries are tried by descending quality. For each entry an exact match
    wins ("fr-fr" -> "fr_FR"), otherwise the first locale of the same
    language family is taken ("fr-ch" -> "fr_FR"). Without any match the
    default locale is returned.
    """
    if available is None:
        available = list_available_locales()
    by_lower = {code.lower(): code for code in available}

    for lang, _quality in parse_accept_lang_header(accept_language or ""):
        wanted = lang.replace("-", "_")
        if wanted in by_lower:
            return by_lower[wanted]
        family = wanted.split("_", 1)[0]
        for code in available:
            if code.lower().split("_", 1)[0] == family:
                return code
    return default_locale()


def locale_from_request(request) -> str:
    return resolve_preferred_locale(request.META.get("HTTP_ACCEPT_LANGUAGE", ""))


def language_code(locale: str) -> str:
    """``fr_FR`` -> ``fr-fr``, as understood by translation.activate()."""
    return to_language(locale)
