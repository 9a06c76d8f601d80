"""
Locale-aware formatting for Hebrew and English.

Thin layer over Babel (CLDR data) for dates, numbers, currencies, plurals
and lists, plus Israeli/US input validation and collation.

Usage:
    from src.i18n.formatting import LocaleFormatter

    fmt = LocaleFormatter.from_language("he")
    fmt.number.format_currency(1250)
    fmt.list.format_list(["זהב", "כסף"])
    fmt.date.format_relative_time(created_at)
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping, Optional, Union

from babel import Locale
from babel.dates import (
    format_date as babel_format_date,
    format_time as babel_format_time,
    format_timedelta,
    get_datetime_format,
    get_day_names,
    get_month_names,
)
from babel.lists import format_list as babel_format_list
from babel.numbers import (
    format_compact_decimal,
    format_currency as babel_format_currency,
    format_decimal,
    format_percent,
)

from .direction import LTR, RTL

LOCALE_CONFIG = {
    "he_IL": {
        "language": "he",
        "country": "IL",
        "currency": "ILS",
        "currency_symbol": "₪",
        "currency_position": "after",
        "date_format": "dd/MM/yyyy",
        "time_format": "HH:mm",
        "rtl": True,
    },
    "en_US": {
        "language": "en",
        "country": "US",
        "currency": "USD",
        "currency_symbol": "$",
        "currency_position": "before",
        "date_format": "MM/dd/yyyy",
        "time_format": "h:mm a",
        "rtl": False,
    },
}

DEFAULT_LOCALE = "en_US"

# Style names accepted by the date/number helpers
DATE_STYLES = ("full", "long", "medium", "short")
_NAME_WIDTHS = {"long": "wide", "short": "abbreviated", "narrow": "narrow"}

DateLike = Union[date, datetime]

# Named relative days, keyed by language then day offset
_RELATIVE_DAY_WORDS = {
    "he": {0: "עכשיו", -1: "אתמול", 1: "מחר"},
    "en": {0: "now", -1: "yesterday", 1: "tomorrow"},
}


def locale_for_language(language: Optional[str]) -> str:
    """Map a language code to its formatting locale ('he' -> 'he_IL')."""
    return "he_IL" if language == "he" else DEFAULT_LOCALE


def _check_style(style: str) -> str:
    if style not in DATE_STYLES:
        raise ValueError(f"Unknown style '{style}'. Use one of: {', '.join(DATE_STYLES)}")
    return style


class DateFormatter:
    """Dates and times in the locale's CLDR patterns (Gregorian calendar)."""

    def __init__(self, locale: str):
        self.locale = locale

    def format_date(self, value: DateLike, style: str = "medium") -> str:
        return babel_format_date(value, format=_check_style(style), locale=self.locale)

    def format_time(self, value: Union[datetime, time], style: str = "short") -> str:
        return babel_format_time(value, format=_check_style(style), locale=self.locale)

    def format_datetime(
        self, value: datetime, date_style: str = "medium", time_style: str = "short"
    ) -> str:
        """Date and time joined with the locale's date-time glue pattern."""
        pattern = get_datetime_format(_check_style(date_style), locale=self.locale)
        return (
            pattern.replace("'", "")
            .replace("{0}", self.format_time(value, time_style))
            .replace("{1}", self.format_date(value, date_style))
        )

    def format_relative_time(self, value: datetime, base: Optional[datetime] = None) -> str:
        """
        Describe a moment relative to another ('2 hours ago', 'in 3 days').

        The unit is the largest of second/minute/hour/day whose rounded
        value stays under the next unit's size; anything beyond a day is
        expressed in days. The current moment and a one-day offset use
        words ('now', 'yesterday', 'tomorrow') instead of numbers.
        """
        base = base or datetime.now(value.tzinfo)
        diff_seconds = round((value - base).total_seconds())
        diff_minutes = round(diff_seconds / 60)
        diff_hours = round(diff_minutes / 60)
        diff_days = round(diff_hours / 24)

        words = _RELATIVE_DAY_WORDS.get(self.locale.split("_")[0], {})
        if diff_seconds == 0 and 0 in words:
            return words[0]

        if abs(diff_seconds) < 60:
            delta, unit = timedelta(seconds=diff_seconds), "second"
        elif abs(diff_minutes) < 60:
            delta, unit = timedelta(minutes=diff_minutes), "minute"
        elif abs(diff_hours) < 24:
            delta, unit = timedelta(hours=diff_hours), "hour"
        else:
            delta, unit = timedelta(days=diff_days), "day"
            if diff_days in words:
                return words[diff_days]

        # An infinite threshold pins the output to the chosen unit
        return format_timedelta(
            delta,
            granularity=unit,
            threshold=float("inf"),
            add_direction=True,
            locale=self.locale,
        )

    def day_name(self, value: DateLike, style: str = "long") -> str:
        names = get_day_names(_NAME_WIDTHS[style], locale=self.locale)
        return names[value.weekday()]

    def month_name(self, value: DateLike, style: str = "long") -> str:
        names = get_month_names(_NAME_WIDTHS[style], locale=self.locale)
        return names[value.month]


class NumberFormatter:
    """Numbers, currency, percentages and sizes."""

    FILE_SIZE_UNITS = {
        "he_IL": ("בייט", 'ק"ב', 'מ"ב', 'ג"ב', 'ט"ב'),
        "en_US": ("B", "KB", "MB", "GB", "TB"),
    }
    _ORDINAL_SUFFIXES = {"one": "st", "two": "nd", "few": "rd", "other": "th"}

    def __init__(self, locale: str):
        self.locale = locale
        self.config = LOCALE_CONFIG[locale]

    def format_number(self, value: float, max_fraction_digits: Optional[int] = None) -> str:
        if max_fraction_digits is None:
            return format_decimal(value, locale=self.locale)
        pattern = "#,##0" + ("." + "#" * max_fraction_digits if max_fraction_digits else "")
        return format_decimal(value, format=pattern, locale=self.locale)

    def format_currency(self, value: float, currency: Optional[str] = None) -> str:
        return babel_format_currency(
            value, currency or self.config["currency"], locale=self.locale
        )

    def format_percentage(self, value: float, decimals: int = 1) -> str:
        """Format a ratio (0.125 -> '12.5%') with a fixed number of decimals."""
        pattern = "#,##0" + ("." + "0" * decimals if decimals > 0 else "") + "%"
        return format_percent(value, format=pattern, locale=self.locale)

    def format_file_size(self, size_bytes: int) -> str:
        units = self.FILE_SIZE_UNITS[self.locale]
        if size_bytes <= 0:
            return f"0 {units[0]}"

        index = 0
        value = float(size_bytes)
        while value >= 1024 and index < len(units) - 1:
            value /= 1024
            index += 1
        return f"{self.format_number(value, max_fraction_digits=1)} {units[index]}"

    def format_ordinal(self, value: int) -> str:
        if self.locale == "he_IL":
            return f"{value}-{'ה' if value == 1 else 'ים'}"
        rule = Locale.parse(self.locale).ordinal_form(value)
        return f"{value}{self._ORDINAL_SUFFIXES.get(rule, 'th')}"

    def format_compact(self, value: float, fraction_digits: int = 0) -> str:
        """Short form for large numbers ('1.2K', '3M')."""
        return format_compact_decimal(
            value, format_type="short", fraction_digits=fraction_digits, locale=self.locale
        )


class PluralFormatter:
    """CLDR plural categories and simple plural form selection."""

    def __init__(self, locale: str):
        self.locale = locale
        self._locale = Locale.parse(locale)

    def plural_rule(self, count: float) -> str:
        """CLDR category for a count: zero, one, two, few, many or other."""
        return self._locale.plural_form(count)

    def format_plural(self, count: float, forms: Mapping[str, str]) -> str:
        """
        Pick the plural form for a count and substitute {{count}}.

        Args:
            count: The number being described
            forms: Category -> text; must contain 'other'. 'zero' is used
                for 0 even where the language has no zero category.
        """
        if count == 0 and forms.get("zero"):
            return forms["zero"].replace("{{count}}", str(count))
        form = forms.get(self.plural_rule(count)) or forms["other"]
        return form.replace("{{count}}", str(count))

    def format_hebrew_plural(
        self, count: int, singular: str, plural: str, dual: Optional[str] = None
    ) -> str:
        """Hebrew noun forms; the dual is used for exactly two when given."""
        if self.locale != "he_IL":
            return singular if count == 1 else plural
        if count == 1:
            return singular
        if count == 2 and dual:
            return dual
        return plural


class ListFormatter:
    """Join items with the locale's conjunctions."""

    _STYLES = {
        ("conjunction", "long"): "standard",
        ("conjunction", "short"): "standard-short",
        ("conjunction", "narrow"): "standard-short",
        ("disjunction", "long"): "or",
        ("disjunction", "short"): "or-short",
        ("disjunction", "narrow"): "or-short",
    }

    def __init__(self, locale: str):
        self.locale = locale

    def format_list(
        self, items: Iterable[str], list_type: str = "conjunction", style: str = "long"
    ) -> str:
        items = list(items)
        if not items:
            return ""
        try:
            babel_style = self._STYLES[(list_type, style)]
        except KeyError:
            raise ValueError(f"Unknown list format: {list_type}/{style}") from None
        return babel_format_list(items, style=babel_style, locale=self.locale)

    def format_list_custom(
        self,
        items: Iterable[str],
        separator: str = ", ",
        last_separator: Optional[str] = None,
    ) -> str:
        """Join with explicit separators; Hebrew attaches 'ו' to the last item."""
        items = list(items)
        if not items:
            return ""
        if len(items) == 1:
            return items[0]

        hebrew = self.locale == "he_IL"
        if len(items) == 2:
            return (last_separator or (" ו" if hebrew else " and ")).join(items)

        final = last_separator or (", ו" if hebrew else ", and ")
        return separator.join(items[:-1]) + final + items[-1]


class LocaleValidator:
    """Phone numbers, postal codes and national ID numbers."""

    _IL_PHONE_PATTERNS = (
        re.compile(r"^0[2-9]\d{7,8}$"),  # landline and mobile
        re.compile(r"^05\d{8}$"),  # mobile
        re.compile(r"^\+972[2-9]\d{7,8}$"),  # international
    )
    _US_PHONE = re.compile(r"^(\+1)?[2-9]\d{9}$")

    def __init__(self, locale: str):
        self.locale = locale

    def validate_phone_number(self, phone: str) -> bool:
        if self.locale == "he_IL":
            cleaned = re.sub(r"[-\s]", "", phone)
            return any(p.match(cleaned) for p in self._IL_PHONE_PATTERNS)
        cleaned = re.sub(r"[-\s()]", "", phone)
        return bool(self._US_PHONE.match(cleaned))

    def validate_postal_code(self, code: str) -> bool:
        if self.locale == "he_IL":
            return bool(re.fullmatch(r"\d{5}|\d{7}", code))
        return bool(re.fullmatch(r"\d{5}(-\d{4})?", code))

    def validate_id_number(self, id_number: str) -> bool:
        """Israeli Teudat Zehut check digit, or the US SSN shape."""
        if self.locale != "he_IL":
            return bool(re.fullmatch(r"\d{3}-\d{2}-\d{4}", id_number))

        if not re.fullmatch(r"\d{9}", id_number):
            return False
        total = 0
        for i, ch in enumerate(id_number):
            digit = int(ch) * (i % 2 + 1)
            total += digit - 9 if digit > 9 else digit
        return total % 10 == 0


def _natural_key(value: Any) -> tuple:
    """Case-insensitive key that orders embedded numbers numerically."""
    parts = re.split(r"(\d+)", str(value).casefold())
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p)


class LocaleSorter:
    """Collation: case-insensitive with numeric runs compared as numbers."""

    def __init__(self, locale: str):
        self.locale = locale

    def sort_strings(self, strings: Iterable[str]) -> list[str]:
        return sorted(strings, key=_natural_key)

    def sort_by_property(self, items: Iterable[Any], prop: str) -> list[Any]:
        """Sort dicts or objects by one attribute."""

        def value(item):
            return item.get(prop) if isinstance(item, Mapping) else getattr(item, prop)

        return sorted(items, key=lambda item: _natural_key(value(item)))

    def search_and_sort(self, items: Iterable[str], query: str) -> list[str]:
        """Items containing query, earliest match first, then alphabetical."""
        needle = query.casefold()
        matches = [item for item in items if needle in item.casefold()]
        return sorted(matches, key=lambda item: (item.casefold().index(needle), _natural_key(item)))


class LocaleFormatter:
    """All formatters for one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        if locale not in LOCALE_CONFIG:
            raise ValueError(f"Unsupported locale '{locale}'")
        self.locale = locale
        self.config = LOCALE_CONFIG[locale]
        self.date = DateFormatter(locale)
        self.number = NumberFormatter(locale)
        self.plural = PluralFormatter(locale)
        self.list = ListFormatter(locale)
        self.validator = LocaleValidator(locale)
        self.sorter = LocaleSorter(locale)

    @classmethod
    def from_language(cls, language: Optional[str]) -> "LocaleFormatter":
        return cls(locale_for_language(language))

    def format_display_name(self, code: str, kind: str = "region") -> str:
        """Localized name of a region, language or currency code."""
        babel_locale = Locale.parse(self.locale)
        names = {
            "region": babel_locale.territories,
            "language": babel_locale.languages,
            "currency": babel_locale.currencies,
        }.get(kind)
        if names is None:
            raise ValueError(f"Unknown display name kind '{kind}'")
        return names.get(code, code)

    def is_rtl(self) -> bool:
        return self.config["rtl"]

    def direction(self) -> str:
        return RTL if self.config["rtl"] else LTR
