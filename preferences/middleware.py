# preferences/middleware.py
import logging
import time
import zoneinfo

from django.utils import timezone, translation

from .locales import language_code, locale_from_request
from .session import get_session_preferences
from .store import WEB_NAMESPACE
from .timezones import default_timezone

logger = logging.getLogger("monitorweb")


class PreferencesMiddleware:
    """
    Activate the user's language and timezone for the request.
    Unset preferences are detected from the request (Accept-Language,
    timezone cookies). Also stamps the request start for the benchmark footer.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.benchmark_started_at = time.perf_counter()

        web = get_session_preferences(request).get(WEB_NAMESPACE, {})

        locale = web.get("language") or locale_from_request(request)
        translation.activate(language_code(locale))
        request.LANGUAGE_CODE = translation.get_language()

        tz_name = web.get("timezone") or default_timezone(request)
        try:
            timezone.activate(zoneinfo.ZoneInfo(tz_name))
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            logger.warning("preferences.middleware unknown timezone %r", tz_name)
            timezone.deactivate()
        request.TIME_ZONE = timezone.get_current_timezone_name()

        try:
            response = self.get_response(request)
        finally:
            timezone.deactivate()
            translation.deactivate()

        if not response.has_header("Content-Language"):
            response.headers["Content-Language"] = request.LANGUAGE_CODE
        return response
