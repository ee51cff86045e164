# preferences/views.py
from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _

from .forms import PreferenceForm
from .services import handle_submit
from .session import get_session_preferences
from .store import create_store


@login_required
def index(request):
    form = PreferenceForm(request.POST if request.method == "POST" else None, request=request)

    if request.method != "POST":
        form.load_from_session(get_session_preferences(request))
    elif form.is_valid():
        result = handle_submit(form.cleaned_data, form.action, request, create_store())
        messages.add_message(request, result.level, result.message)
        return redirect("preferences:index")
    else:
        messages.error(request, _("Please correct the errors below."))

    return render(
        request,
        "preferences/index.html",
        {
            "title": _("Preferences"),
            "form": form,
            "tz_cookie": settings.PREFERENCES_TZ_COOKIE,
            "tz_offset_cookie": settings.PREFERENCES_TZ_OFFSET_COOKIE,
        },
    )
