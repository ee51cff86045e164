# preferences/timezones.py
from __future__ import annotations

import logging
import zoneinfo
from functools import lru_cache
from typing import FrozenSet, Optional, Tuple
from urllib.parse import unquote

from django.conf import settings

logger = logging.getLogger("monitorweb")

# Etc/GMT zones only cover whole hours between these offsets
MIN_OFFSET_HOURS = -12
MAX_OFFSET_HOURS = 14


# Region prefixes of canonical IANA names; legacy aliases (US/Eastern, GB, ...) live outside them
CANONICAL_REGIONS = (
    "Africa/",
    "America/",
    "Antarctica/",
    "Arctic/",
    "Asia/",
    "Atlantic/",
    "Australia/",
    "Europe/",
    "Indian/",
    "Pacific/",
)


@lru_cache(maxsize=1)
def list_all_timezone_identifiers() -> Tuple[str, ...]:
    """Sorted canonical IANA zone names plus UTC, as offered on the preferences form."""
    names = {name for name in zoneinfo.available_timezones() if name.startswith(CANONICAL_REGIONS)}
    names.add("UTC")
    return tuple(sorted(names))


@lru_cache(maxsize=1)
def _known_timezones() -> FrozenSet[str]:
    return frozenset(zoneinfo.available_timezones()) | {"UTC"}


def is_valid_timezone(name: str) -> bool:
    """Any zone zoneinfo can load, including aliases and Etc/GMT offsets."""
    return name in _known_timezones()


def _zone_from_offset(raw: str) -> Optional[str]:
    # offset cookie holds seconds east of UTC, e.g. "7200" or "-18000"
    try:
        seconds = int(raw)
    except (TypeError, ValueError):
        return None
    if seconds % 3600:
        return None
    hours = seconds // 3600
    if not MIN_OFFSET_HOURS <= hours <= MAX_OFFSET_HOURS:
        return None
    if hours == 0:
        return "UTC"
    # POSIX style: Etc/GMT-2 is two hours *east* of UTC
    return f"Etc/GMT{-hours:+d}"


def detect_from_request(request) -> Optional[str]:
    """Timezone the browser reported through the timezone cookies, if any."""
    cookies = getattr(request, "COOKIES", {}) or {}

    name = cookies.get(getattr(settings, "PREFERENCES_TZ_COOKIE", "monitorweb-tz"))
    if name:
        name = unquote(name).strip()
        if is_valid_timezone(name):
            return name
        logger.debug("timezone.detect ignoring unknown zone %r", name)

    offset = cookies.get(getattr(settings, "PREFERENCES_TZ_OFFSET_COOKIE", "monitorweb-tzo"))
    if offset:
        zone = _zone_from_offset(offset.strip())
        if zone and is_valid_timezone(zone):
            return zone
    return None


def default_timezone(request) -> str:
    """Detected browser timezone, falling back to the configured host default."""
    return detect_from_request(request) or settings.TIME_ZONE
