from django.contrib import admin
from .models import UserPreference


@admin.register(UserPreference)
class UserPreferenceAdmin(admin.ModelAdmin):
    list_display = ("user", "section", "name", "value", "updated_at")
    list_filter = ("section",)
    search_fields = ("user__username", "user__email", "section", "name")
    readonly_fields = ("updated_at",)
