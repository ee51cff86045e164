# preferences/session.py
from .store import Preferences

SESSION_KEY = "preferences"


def get_session_preferences(request) -> Preferences:
    """Preferences of the current user as held in the session (may be empty)."""
    session = getattr(request, "session", None)
    if session is None:
        return Preferences()
    return Preferences(session.get(SESSION_KEY) or {})


def set_session_preferences(request, preferences: Preferences) -> None:
    request.session[SESSION_KEY] = preferences.to_dict()
