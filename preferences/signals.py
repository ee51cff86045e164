import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .session import set_session_preferences
from .store import Preferences, PreferencesStoreError, create_store

logger = logging.getLogger("monitorweb")


@receiver(user_logged_in)
def load_preferences_on_login(sender, request, user, **kwargs):
    # a broken store must not block logging in
    try:
        preferences = create_store().load(user)
    except PreferencesStoreError:
        logger.warning("preferences.login could not load preferences user=%s", user.pk)
        preferences = Preferences()
    set_session_preferences(request, preferences)
