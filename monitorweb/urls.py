from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView


urlpatterns = [
    path("admin/", admin.site.urls),

    # Auth (session-based, templates)
    path("auth/", include("django.contrib.auth.urls")),

    # Root → preferences page
    path("", RedirectView.as_view(pattern_name="preferences:index", permanent=False)),

    path("settings/", include(("preferences.urls", "preferences"), namespace="preferences")),
]
