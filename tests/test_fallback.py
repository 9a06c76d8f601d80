"""
Tests for Hebrew-first translation fallback.
"""

from src.i18n.fallback import keys_fallback, resolve_many, resolve_translation


class TestResolveTranslation:
    """Test the requested -> default -> fallback -> key order."""

    def test_requested_language_wins(self):
        """Test that the requested language is used when present."""
        translations = {"he": "בית", "en": "Home"}
        assert resolve_translation(translations, "en", key="nav.home") == "Home"

    def test_missing_language_falls_back_to_hebrew(self):
        """Test that a missing translation falls back to the default language."""
        translations = {"he": "בית"}
        assert resolve_translation(translations, "en", key="nav.home") == "בית"

    def test_blank_translation_is_treated_as_missing(self):
        """Test that empty and whitespace-only values are skipped."""
        translations = {"he": "בית", "en": "   "}
        assert resolve_translation(translations, "en", key="nav.home") == "בית"

    def test_caller_fallback_before_key(self):
        """Test that the caller fallback is preferred over the bare key."""
        assert resolve_translation({}, "en", key="nav.home", fallback="Home") == "Home"

    def test_key_is_last_resort(self):
        """Test that the key is returned when nothing else is available."""
        assert resolve_translation(None, "en", key="nav.home") == "nav.home"
        assert resolve_translation({"fr": "Maison"}, "en", key="nav.home") == "nav.home"

    def test_custom_default_language(self):
        """Test that the default language is configurable."""
        translations = {"en": "Home"}
        assert resolve_translation(translations, "fr", "en", key="nav.home") == "Home"

    def test_non_string_values_are_ignored(self):
        """Test that malformed JSON values do not leak through."""
        translations = {"en": None, "he": 42}
        assert resolve_translation(translations, "en", key="k") == "k"

    def test_non_mapping_translations_are_ignored(self):
        """Test that a JSON string or list column resolves like a missing one."""
        assert resolve_translation('{"he": "x"}', "he", key="k") == "k"
        assert resolve_translation(["he", "x"], "he", key="k", fallback="Default") == "Default"


class TestResolveMany:
    """Test batch resolution."""

    def test_every_requested_key_has_an_entry(self):
        """Test that keys with no row resolve to themselves."""
        rows = [{"translation_key": "a", "translations": {"he": "א", "en": "A"}}]
        result = resolve_many(rows, ["a", "b"], "translation_key", "en")
        assert result == {"a": "A", "b": "b"}

    def test_duplicate_keys_collapse(self):
        """Test that repeated keys produce a single entry."""
        rows = [{"translation_key": "a", "translations": {"he": "א"}}]
        result = resolve_many(rows, ["a", "a"], "translation_key", "en")
        assert result == {"a": "א"}

    def test_enum_rows_use_enum_value_field(self):
        """Test that the key column is configurable."""
        rows = [{"enum_value": "shipped", "translations": {"he": "נשלח", "en": "Shipped"}}]
        result = resolve_many(rows, ["shipped"], "enum_value", "he")
        assert result == {"shipped": "נשלח"}

    def test_rows_without_key_are_skipped(self):
        """Test that rows missing the key column are ignored."""
        rows = [{"translations": {"he": "x"}}]
        assert resolve_many(rows, ["a"], "translation_key", "he") == {"a": "a"}

    def test_never_returns_empty_string(self):
        """Test that a row with only blank translations resolves to its key."""
        rows = [{"translation_key": "a", "translations": {"he": "", "en": ""}}]
        assert resolve_many(rows, ["a"], "translation_key", "en") == {"a": "a"}

    def test_malformed_translations_column(self):
        rows = [
            {"translation_key": "a", "translations": '{"he": "א"}'},
            {"translation_key": "b", "translations": {"he": "ב"}},
        ]
        result = resolve_many(rows, ["a", "b"], "translation_key", "he")
        assert result == {"a": "a", "b": "ב"}


class TestKeysFallback:
    def test_identity_mapping(self):
        assert keys_fallback(["a", "b"]) == {"a": "a", "b": "b"}

    def test_empty(self):
        assert keys_fallback([]) == {}
