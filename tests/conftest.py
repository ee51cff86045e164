from types import SimpleNamespace

import pytest
from django.contrib.auth import get_user_model


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, HTTP)")


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="jdoe", password="S3cret-pass-42")


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(username="asmith", password="S3cret-pass-42")


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def plain_user():
    """Stand-in user for code that only needs a primary key."""
    return SimpleNamespace(pk=7)


@pytest.fixture
def make_request(rf):
    def _make(user, session=None, **extra):
        request = rf.post("/settings/preferences/", **extra)
        request.user = user
        request.session = {} if session is None else session
        return request

    return _make
