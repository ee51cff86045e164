# preferences/forms.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from django import forms
from django.db import models
from django.utils.translation import gettext_lazy as _

from .locales import list_available_locales, locale_from_request
from .services import AUTODETECT, Action
from .store import WEB_NAMESPACE, Preferences
from .timezones import default_timezone, list_all_timezone_identifiers


class FieldKind(models.TextChoices):
    SELECT = "select", "Select"
    CHECKBOX = "checkbox", "Checkbox"
    SUBMIT = "submit", "Submit"


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: FieldKind
    label: str
    description: str = ""
    required: bool = False
    options: Tuple[Tuple[str, str], ...] = ()


def _build_field(descriptor: FieldDescriptor) -> forms.Field:
    if descriptor.kind == FieldKind.SELECT:
        return forms.ChoiceField(
            choices=descriptor.options,
            required=descriptor.required,
            label=descriptor.label,
            help_text=descriptor.description,
        )
    if descriptor.kind == FieldKind.CHECKBOX:
        return forms.BooleanField(
            required=descriptor.required,
            label=descriptor.label,
            help_text=descriptor.description,
        )
    raise ValueError(f"{descriptor.kind} does not map to an input field")


class PreferenceForm(forms.Form):
    """Language, timezone and benchmark toggle of the current user."""

    SUBMIT_PERSIST = "btn_submit_preferences"
    SUBMIT_SESSION = "btn_submit_session"

    def __init__(self, *args, request=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.request = request
        self.descriptors = self.describe()
        for descriptor in self.descriptors:
            if descriptor.kind != FieldKind.SUBMIT:
                self.fields[descriptor.name] = _build_field(descriptor)

    def describe(self) -> List[FieldDescriptor]:
        browser_locale = locale_from_request(self.request) if self.request else ""
        browser_tz = default_timezone(self.request) if self.request else ""

        languages = [(AUTODETECT, _("Browser (%s)") % browser_locale)]
        languages += [(code, code) for code in list_available_locales()]

        timezones = [(AUTODETECT, _("Browser (%s)") % browser_tz)]
        timezones += [(name, name) for name in list_all_timezone_identifiers()]

        return [
            FieldDescriptor(
                name="language",
                kind=FieldKind.SELECT,
                label=_("Your Current Language"),
                description=_("Use the following language to display texts and messages"),
                required=True,
                options=tuple(languages),
            ),
            FieldDescriptor(
                name="timezone",
                kind=FieldKind.SELECT,
                label=_("Your Current Timezone"),
                description=_("Use the following timezone for dates and times"),
                required=True,
                options=tuple(timezones),
            ),
            FieldDescriptor(
                name="show_benchmark",
                kind=FieldKind.CHECKBOX,
                label=_("Use benchmark"),
            ),
            FieldDescriptor(
                name=self.SUBMIT_PERSIST,
                kind=FieldKind.SUBMIT,
                label=_("Save to the Preferences"),
            ),
            FieldDescriptor(
                name=self.SUBMIT_SESSION,
                kind=FieldKind.SUBMIT,
                label=_("Save for the current Session"),
            ),
        ]

    @property
    def submit_buttons(self) -> List[FieldDescriptor]:
        return [d for d in self.descriptors if d.kind == FieldKind.SUBMIT]

    @property
    def action(self) -> Action:
        if self.data.get(self.SUBMIT_PERSIST) is not None:
            return Action.PERSIST
        return Action.SESSION

    def load_from_session(self, preferences: Preferences):
        values = preferences.get(WEB_NAMESPACE, {})
        values.setdefault("language", AUTODETECT)
        values.setdefault("timezone", AUTODETECT)
        self.initial.update(
            {name: value for name, value in values.items() if name in self.fields}
        )
