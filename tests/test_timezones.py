import pytest

from preferences.timezones import (
    default_timezone,
    detect_from_request,
    list_all_timezone_identifiers,
)


@pytest.fixture
def tz_cookies(settings):
    settings.PREFERENCES_TZ_COOKIE = "monitorweb-tz"
    settings.PREFERENCES_TZ_OFFSET_COOKIE = "monitorweb-tzo"


def _request(rf, **cookies):
    request = rf.get("/")
    request.COOKIES.update(cookies)
    return request


def test_identifiers_are_sorted_iana_names():
    names = list_all_timezone_identifiers()

    assert isinstance(names, tuple)
    assert list(names) == sorted(names)
    assert "Europe/Berlin" in names
    assert "UTC" in names
    assert not any(name.startswith(("posix/", "right/")) for name in names)


def test_identifiers_leave_out_legacy_aliases():
    names = list_all_timezone_identifiers()

    assert "US/Eastern" not in names
    assert "GB" not in names
    assert "Etc/GMT-2" not in names
    assert "America/New_York" in names


def test_legacy_alias_cookie_is_still_detected(rf, tz_cookies):
    request = _request(rf, **{"monitorweb-tz": "US/Eastern"})
    assert detect_from_request(request) == "US/Eastern"


def test_detects_zone_name_cookie(rf, tz_cookies):
    request = _request(rf, **{"monitorweb-tz": "America/New_York"})
    assert detect_from_request(request) == "America/New_York"


def test_detects_url_encoded_zone_name(rf, tz_cookies):
    request = _request(rf, **{"monitorweb-tz": "Europe%2FBerlin"})
    assert detect_from_request(request) == "Europe/Berlin"


def test_unknown_zone_name_falls_through_to_offset(rf, tz_cookies):
    request = _request(rf, **{"monitorweb-tz": "Mars/Olympus", "monitorweb-tzo": "7200"})
    assert detect_from_request(request) == "Etc/GMT-2"


@pytest.mark.parametrize(
    "offset, expected",
    [
        ("0", "UTC"),
        ("3600", "Etc/GMT-1"),
        ("-18000", "Etc/GMT+5"),
        ("19800", None),  # +05:30 has no Etc zone
        ("86400", None),
        ("east", None),
    ],
)
def test_offset_cookie(rf, tz_cookies, offset, expected):
    assert detect_from_request(_request(rf, **{"monitorweb-tzo": offset})) == expected


def test_nothing_to_detect(rf, tz_cookies):
    assert detect_from_request(_request(rf)) is None


def test_default_timezone_falls_back_to_host_setting(rf, tz_cookies, settings):
    settings.TIME_ZONE = "Asia/Kolkata"
    assert default_timezone(_request(rf)) == "Asia/Kolkata"


def test_default_timezone_prefers_detection(rf, tz_cookies, settings):
    settings.TIME_ZONE = "Asia/Kolkata"
    request = _request(rf, **{"monitorweb-tz": "Europe/Paris"})
    assert default_timezone(request) == "Europe/Paris"
