"""
Ready-made UI text patterns built on a Translator.

Status badges, form field labels, navigation items, empty states and
locale-aware money/date strings all follow fixed key conventions in the
common catalog (status.*, actions.*, forms.*, navigation.*, time.*).
"""

from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from .formatting import LocaleFormatter
from .translator import Translator

DEFAULT_STATUS_CLASS = "text-gray-600 bg-gray-50 border-gray-200"

STATUS_CLASSES = {
    # General
    "pending": "text-yellow-600 bg-yellow-50 border-yellow-200",
    "success": "text-green-600 bg-green-50 border-green-200",
    "error": "text-red-600 bg-red-50 border-red-200",
    "warning": "text-orange-600 bg-orange-50 border-orange-200",
    "info": "text-blue-600 bg-blue-50 border-blue-200",
    # Stories
    "draft": DEFAULT_STATUS_CLASS,
    "analyzing": "text-blue-600 bg-blue-50 border-blue-200",
    "ready": "text-green-600 bg-green-50 border-green-200",
    # Orders
    "approved": "text-green-600 bg-green-50 border-green-200",
    "manufacturing": "text-purple-600 bg-purple-50 border-purple-200",
    "shipping": "text-blue-600 bg-blue-50 border-blue-200",
    "delivered": "text-emerald-600 bg-emerald-50 border-emerald-200",
}

# Hebrew count words used in place of the numerals 1 and 2
HEBREW_COUNT_WORDS = {1: "אחד", 2: "שניים"}


def _as_datetime(value: Union[str, date, datetime]) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value


class TranslationHelpers:
    """Common translated UI fragments for the translator's current language."""

    def __init__(self, translator: Translator):
        self.translator = translator

    @property
    def language(self) -> str:
        return self.translator.language

    @property
    def is_rtl(self) -> bool:
        return self.translator.is_rtl

    @property
    def formatter(self) -> LocaleFormatter:
        return LocaleFormatter.from_language(self.language)

    def t(self, key: str, **options: Any) -> str:
        return self.translator.t(key, **options)

    # Status

    def status_text(self, status: str, status_namespace: str = "status") -> dict:
        return {
            "text": self.t(f"{status_namespace}.{status}"),
            "class_name": self.status_class_name(status),
        }

    @staticmethod
    def status_class_name(status: str) -> str:
        return STATUS_CLASSES.get(status, DEFAULT_STATUS_CLASS)

    # Forms

    def validation_error(self, field: str, error_type: str, **options: Any) -> str:
        return self.t(f"validation.{error_type}", field=self.t(f"forms.labels.{field}"), **options)

    def field_config(self, field_name: str) -> dict:
        label = self.t(f"forms.labels.{field_name}")
        return {
            "label": label,
            "placeholder": self.t(f"forms.placeholders.{field_name}"),
            "validation": {
                "required": self.t("forms.validation.required", field=label),
                "invalid": self.t(f"forms.validation.{field_name}Invalid"),
            },
        }

    # Actions and navigation

    def action_text(self, action: str) -> dict:
        return {
            "text": self.t(f"actions.{action}"),
            "icon_position": "right" if self.is_rtl else "left",
        }

    def nav_item(self, key: str) -> dict:
        return {
            "text": self.t(f"navigation.{key}"),
            "class_name": "text-right" if self.is_rtl else "text-left",
        }

    # Text

    def plural_text(self, key: str, count: int, **options: Any) -> str:
        """
        Plural-aware text; {{count_text}} is the count spelled for display.

        Hebrew spells one and two as words ('אחד', 'שניים').
        """
        count_text = str(count)
        if self.language == "he":
            count_text = HEBREW_COUNT_WORDS.get(count, count_text)
        return self.t(key, count=count, count_text=count_text, **options)

    def loading_text(self, action: Optional[str] = None) -> str:
        generic = self.t("status.loading")
        if action:
            return self.t(f"status.loading.{action}", default_value=generic)
        return generic

    def empty_state(self, context: str) -> dict:
        return {
            "title": self.t(f"{context}.empty"),
            "description": self.t(
                f"{context}.emptyDescription", default_value=self.t("status.noResults")
            ),
            "action": self.t(f"{context}.createNew", default_value=self.t("actions.create")),
        }

    # Locale formatting

    def format_locale_currency(self, amount: float, currency: Optional[str] = None) -> str:
        return self.formatter.number.format_currency(amount, currency)

    def format_locale_date(self, value: Union[str, date, datetime], style: str = "long") -> str:
        return self.formatter.date.format_date(_as_datetime(value), style)

    def format_relative_time(
        self, value: Union[str, datetime], now: Optional[datetime] = None
    ) -> str:
        """
        Short 'time ago' text from the time.* catalog keys.

        Under a minute is 'now', a day ago is 'yesterday', and anything a
        week or older is shown as a date.
        """
        value = _as_datetime(value)
        if now is None:
            now = datetime.now(timezone.utc) if value.tzinfo else datetime.now()

        minutes = int((now - value).total_seconds() // 60)
        hours = minutes // 60
        days = hours // 24

        if minutes < 1:
            return self.t("time.now")
        if minutes < 60:
            return f"{minutes} {self.t('time.minutesAgo', count=minutes)}"
        if hours < 24:
            return f"{hours} {self.t('time.hoursAgo', count=hours)}"
        if days == 1:
            return self.t("time.yesterday")
        if days < 7:
            return f"{days} {self.t('time.daysAgo', count=days)}"
        return self.format_locale_date(value, "medium")
