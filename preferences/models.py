# preferences/models.py
from django.conf import settings
from django.db import models


class UserPreference(models.Model):
    """
    One stored preference of one user.
    Rows are grouped by section (namespace), e.g.:
      - icingaweb / language   -> "de_DE"
      - icingaweb / timezone   -> "Europe/Berlin"
      - icingaweb / show_benchmark -> true
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="stored_preferences",
    )
    section = models.CharField(max_length=64)
    name = models.CharField(max_length=64)
    value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["section", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "section", "name"], name="uniq_user_preference"
            )
        ]

    def __str__(self):
        return f"{self.user} {self.section}.{self.name}"
