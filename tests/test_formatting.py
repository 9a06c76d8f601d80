"""
Tests for locale-aware formatting.
"""

from datetime import date, datetime, time, timedelta

import pytest

from src.i18n.formatting import LOCALE_CONFIG, LocaleFormatter, locale_for_language

BASE = datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def en():
    return LocaleFormatter.from_language("en")


@pytest.fixture
def he():
    return LocaleFormatter.from_language("he")


class TestLocaleSelection:
    def test_locale_for_language(self):
        assert locale_for_language("he") == "he_IL"
        assert locale_for_language("en") == "en_US"
        assert locale_for_language("fr") == "en_US"
        assert locale_for_language(None) == "en_US"

    def test_direction(self, he, en):
        assert he.is_rtl() and he.direction() == "rtl"
        assert not en.is_rtl() and en.direction() == "ltr"

    def test_unsupported_locale(self):
        with pytest.raises(ValueError):
            LocaleFormatter("fr_FR")

    def test_locale_config(self):
        assert LOCALE_CONFIG["he_IL"]["currency"] == "ILS"
        assert LOCALE_CONFIG["en_US"]["currency_position"] == "before"


class TestDateFormatter:
    """Test date formatting (Gregorian calendar)."""

    def test_format_date_styles(self, en):
        assert en.date.format_date(date(2024, 3, 15)) == "Mar 15, 2024"
        assert en.date.format_date(date(2024, 3, 15), "short") == "3/15/24"

    def test_format_time(self, en):
        result = en.date.format_time(time(14, 30))
        assert "2:30" in result
        assert "PM" in result

    def test_format_datetime(self, en):
        result = en.date.format_datetime(datetime(2024, 3, 15, 14, 30))
        assert result.startswith("Mar 15, 2024")
        assert "2:30" in result

    def test_unknown_style(self, en):
        with pytest.raises(ValueError):
            en.date.format_date(date(2024, 3, 15), "tiny")

    def test_relative_time_buckets(self, en):
        assert en.date.format_relative_time(BASE - timedelta(seconds=30), BASE) == "30 seconds ago"
        assert en.date.format_relative_time(BASE - timedelta(minutes=5), BASE) == "5 minutes ago"
        assert en.date.format_relative_time(BASE - timedelta(hours=2), BASE) == "2 hours ago"
        assert en.date.format_relative_time(BASE + timedelta(days=3), BASE) == "in 3 days"

    def test_relative_time_uses_days_beyond_a_day(self, en):
        assert en.date.format_relative_time(BASE - timedelta(days=45), BASE) == "45 days ago"

    def test_relative_time_words_for_now_and_adjacent_days(self, en, he):
        assert en.date.format_relative_time(BASE, BASE) == "now"
        assert en.date.format_relative_time(BASE - timedelta(days=1), BASE) == "yesterday"
        assert en.date.format_relative_time(BASE + timedelta(hours=30), BASE) == "tomorrow"
        assert he.date.format_relative_time(BASE, BASE) == "עכשיו"
        assert he.date.format_relative_time(BASE - timedelta(days=1), BASE) == "אתמול"

    def test_sub_day_offsets_stay_numeric(self, en):
        assert en.date.format_relative_time(BASE - timedelta(hours=23), BASE) == "23 hours ago"
        assert en.date.format_relative_time(BASE - timedelta(days=2), BASE) == "2 days ago"

    def test_day_and_month_names(self, en, he):
        friday = date(2024, 3, 15)
        assert en.date.day_name(friday) == "Friday"
        assert en.date.month_name(friday) == "March"
        assert en.date.month_name(friday, "short") == "Mar"
        assert he.date.day_name(friday) == "יום שישי"
        assert he.date.month_name(friday) == "מרץ"


class TestNumberFormatter:
    def test_format_number(self, en):
        assert en.number.format_number(1234567.891) == "1,234,567.891"
        assert en.number.format_number(1234.5678, max_fraction_digits=1) == "1,234.6"

    def test_format_currency(self, en, he):
        assert en.number.format_currency(1234.5) == "$1,234.50"
        shekels = he.number.format_currency(1234.5)
        assert "₪" in shekels
        assert "1,234.50" in shekels

    def test_explicit_currency(self, en):
        assert en.number.format_currency(10, "EUR") == "€10.00"

    def test_format_percentage(self, en):
        assert en.number.format_percentage(0.125) == "12.5%"
        assert en.number.format_percentage(0.5, decimals=0) == "50%"

    def test_file_size(self, en, he):
        assert en.number.format_file_size(0) == "0 B"
        assert en.number.format_file_size(500) == "500 B"
        assert en.number.format_file_size(1536) == "1.5 KB"
        assert en.number.format_file_size(3 * 1024 ** 2) == "3 MB"
        assert he.number.format_file_size(2048) == '2 ק"ב'

    @pytest.mark.parametrize(
        "value,expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (22, "22nd"), (103, "103rd")],
    )
    def test_english_ordinals(self, en, value, expected):
        assert en.number.format_ordinal(value) == expected

    def test_hebrew_ordinals(self, he):
        assert he.number.format_ordinal(1) == "1-ה"
        assert he.number.format_ordinal(3) == "3-ים"

    def test_compact(self, en):
        assert en.number.format_compact(1200, fraction_digits=1) == "1.2K"
        assert en.number.format_compact(3000000) == "3M"


class TestPluralFormatter:
    def test_plural_rules(self, en, he):
        assert en.plural.plural_rule(1) == "one"
        assert en.plural.plural_rule(5) == "other"
        assert he.plural.plural_rule(1) == "one"
        assert he.plural.plural_rule(2) == "two"

    def test_format_plural(self, en):
        forms = {"zero": "no items", "one": "{{count}} item", "other": "{{count}} items"}
        assert en.plural.format_plural(0, forms) == "no items"
        assert en.plural.format_plural(1, forms) == "1 item"
        assert en.plural.format_plural(3, forms) == "3 items"

    def test_missing_category_uses_other(self, he):
        assert he.plural.format_plural(2, {"one": "x", "other": "{{count}} טבעות"}) == "2 טבעות"

    def test_hebrew_dual(self, he, en):
        assert he.plural.format_hebrew_plural(1, "שבוע", "שבועות", "שבועיים") == "שבוע"
        assert he.plural.format_hebrew_plural(2, "שבוע", "שבועות", "שבועיים") == "שבועיים"
        assert he.plural.format_hebrew_plural(5, "שבוע", "שבועות", "שבועיים") == "שבועות"
        assert he.plural.format_hebrew_plural(0, "שבוע", "שבועות") == "שבועות"
        assert en.plural.format_hebrew_plural(2, "week", "weeks", "fortnight") == "weeks"


class TestListFormatter:
    def test_conjunction(self, en):
        assert en.list.format_list(["gold", "silver", "platinum"]) == "gold, silver, and platinum"

    def test_disjunction(self, en):
        assert en.list.format_list(["gold", "silver"], "disjunction") == "gold or silver"

    def test_empty_list(self, en):
        assert en.list.format_list([]) == ""

    def test_unknown_list_type(self, en):
        with pytest.raises(ValueError):
            en.list.format_list(["a"], "exclusive")

    def test_custom_hebrew_conjunction(self, he):
        assert he.list.format_list_custom(["זהב", "כסף"]) == "זהב וכסף"
        assert he.list.format_list_custom(["זהב", "כסף", "יהלום"]) == "זהב, כסף, ויהלום"

    def test_custom_english(self, en):
        assert en.list.format_list_custom([]) == ""
        assert en.list.format_list_custom(["a"]) == "a"
        assert en.list.format_list_custom(["a", "b"]) == "a and b"
        assert en.list.format_list_custom(["a", "b", "c"]) == "a, b, and c"
        assert en.list.format_list_custom(["a", "b", "c"], " / ", " & ") == "a / b & c"


class TestLocaleValidator:
    @pytest.mark.parametrize(
        "phone,valid",
        [
            ("050-123-4567", True),
            ("02-6234567", True),
            ("+972-50-123-4567", True),
            ("12345", False),
        ],
    )
    def test_israeli_phone(self, he, phone, valid):
        assert he.validator.validate_phone_number(phone) is valid

    @pytest.mark.parametrize(
        "phone,valid",
        [("(212) 555-0100", True), ("+1 212 555 0100", True), ("112-555-0100", False)],
    )
    def test_us_phone(self, en, phone, valid):
        assert en.validator.validate_phone_number(phone) is valid

    def test_postal_codes(self, he, en):
        assert he.validator.validate_postal_code("12345")
        assert he.validator.validate_postal_code("1234567")
        assert not he.validator.validate_postal_code("123456")
        assert en.validator.validate_postal_code("12345-6789")
        assert not en.validator.validate_postal_code("1234")

    def test_israeli_id_check_digit(self, he):
        assert he.validator.validate_id_number("123456782")
        assert he.validator.validate_id_number("000000018")
        assert not he.validator.validate_id_number("000000019")
        assert not he.validator.validate_id_number("12345678")

    def test_us_ssn_shape(self, en):
        assert en.validator.validate_id_number("123-45-6789")
        assert not en.validator.validate_id_number("123456789")


class TestLocaleSorter:
    def test_natural_case_insensitive_sort(self, en):
        assert en.sorter.sort_strings(["item10", "Item2", "item1"]) == ["item1", "Item2", "item10"]

    def test_sort_by_property(self, en):
        items = [{"name": "b"}, {"name": "A"}, {"name": "c"}]
        assert [i["name"] for i in en.sorter.sort_by_property(items, "name")] == ["A", "b", "c"]

    def test_search_and_sort(self, en):
        items = ["necklace gold", "Gold ring", "rose gold", "silver"]
        assert en.sorter.search_and_sort(items, "gold") == ["Gold ring", "rose gold", "necklace gold"]


class TestDisplayNames:
    def test_region_and_language(self, en):
        assert en.format_display_name("IL") == "Israel"
        assert en.format_display_name("he", "language") == "Hebrew"

    def test_unknown_code_returns_code(self, en):
        assert en.format_display_name("ZZZ") == "ZZZ"

    def test_unknown_kind(self, en):
        with pytest.raises(ValueError):
            en.format_display_name("IL", "planet")
