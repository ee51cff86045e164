import pytest

from core.context_processors import benchmark
from preferences.session import SESSION_KEY
from preferences.store import WEB_NAMESPACE

URL = "/settings/preferences/"


def _set_web_preferences(client, **values):
    session = client.session
    session[SESSION_KEY] = {WEB_NAMESPACE: values}
    session.save()


@pytest.mark.integration
def test_stored_language_is_activated(auth_client):
    _set_web_preferences(auth_client, language="fr_FR")

    response = auth_client.get(URL, HTTP_ACCEPT_LANGUAGE="de-DE")

    assert response["Content-Language"] == "fr-fr"
    assert response.wsgi_request.LANGUAGE_CODE == "fr-fr"


@pytest.mark.integration
def test_unset_language_is_detected_from_browser(auth_client):
    response = auth_client.get(URL, HTTP_ACCEPT_LANGUAGE="de-AT,de;q=0.9")

    assert response["Content-Language"] == "de-de"


@pytest.mark.integration
def test_unset_language_without_header_uses_default(auth_client, settings):
    settings.PREFERENCES_DEFAULT_LOCALE = "en_US"

    response = auth_client.get(URL)

    assert response["Content-Language"] == "en-us"


@pytest.mark.integration
def test_stored_timezone_is_activated(auth_client):
    _set_web_preferences(auth_client, timezone="Europe/Berlin")

    response = auth_client.get(URL)

    assert response.wsgi_request.TIME_ZONE == "Europe/Berlin"


@pytest.mark.integration
def test_unset_timezone_uses_cookie_then_host_default(auth_client, settings):
    settings.TIME_ZONE = "America/Chicago"
    settings.PREFERENCES_TZ_COOKIE = "monitorweb-tz"

    response = auth_client.get(URL)
    assert response.wsgi_request.TIME_ZONE == "America/Chicago"

    auth_client.cookies["monitorweb-tz"] = "Asia/Tokyo"
    response = auth_client.get(URL)
    assert response.wsgi_request.TIME_ZONE == "Asia/Tokyo"


@pytest.mark.integration
def test_broken_stored_timezone_falls_back(auth_client, settings):
    settings.TIME_ZONE = "UTC"
    _set_web_preferences(auth_client, timezone="Not/AZone")

    response = auth_client.get(URL)

    assert response.status_code == 200
    assert response.wsgi_request.TIME_ZONE == "UTC"


@pytest.mark.integration
def test_benchmark_footer_follows_preference(auth_client):
    response = auth_client.get(URL)
    assert 'class="benchmark"' not in response.content.decode()

    _set_web_preferences(auth_client, show_benchmark=True)
    response = auth_client.get(URL)
    assert response.context["show_benchmark"] is True
    assert 'class="benchmark"' in response.content.decode()


@pytest.mark.unit
def test_benchmark_context_without_start_stamp(rf):
    request = rf.get("/")
    request.session = {SESSION_KEY: {WEB_NAMESPACE: {"show_benchmark": True}}}

    assert benchmark(request) == {"show_benchmark": True, "benchmark_ms": None}


@pytest.mark.unit
def test_benchmark_context_disabled(rf):
    request = rf.get("/")
    request.session = {}

    assert benchmark(request) == {"show_benchmark": False}
