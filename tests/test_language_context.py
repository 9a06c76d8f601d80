"""
Tests for language switching and stale-result protection.
"""

import pytest

from src.i18n.language_context import LanguageContext, LocalizedContent


class TestLanguageContext:
    """Test the active language state."""

    def test_defaults_to_hebrew_rtl(self):
        context = LanguageContext()
        assert context.language == "he"
        assert context.direction == "rtl"
        assert context.is_rtl
        assert context.version == 0

    def test_change_language_bumps_version(self):
        context = LanguageContext()

        assert context.change_language("en") is True

        assert context.language == "en"
        assert context.direction == "ltr"
        assert context.version == 1

    def test_same_language_is_a_no_op(self):
        """Test that re-selecting the active language does not bump the version."""
        context = LanguageContext()
        assert context.change_language("he") is False
        assert context.version == 0

    def test_unsupported_language_raises(self):
        context = LanguageContext()
        with pytest.raises(ValueError):
            context.change_language("fr")
        assert context.language == "he"

    def test_default_must_be_supported(self):
        with pytest.raises(ValueError):
            LanguageContext(default_language="fr")

    def test_subscribers_receive_language_and_direction(self):
        context = LanguageContext()
        seen = []
        unsubscribe = context.subscribe(lambda lang, direction: seen.append((lang, direction)))

        context.change_language("en")
        unsubscribe()
        context.change_language("he")

        assert seen == [("en", "ltr")]

    def test_failing_listener_does_not_block_others(self):
        context = LanguageContext()
        seen = []

        def broken(lang, direction):
            raise RuntimeError("listener bug")

        context.subscribe(broken)
        context.subscribe(lambda lang, direction: seen.append(lang))
        context.change_language("en")

        assert seen == ["en"]

    def test_fetch_is_fresh_without_switch(self):
        context = LanguageContext()
        result, fresh = context.fetch(lambda lang: f"content:{lang}")
        assert result == "content:he"
        assert fresh is True

    def test_fetch_is_stale_after_switch_mid_flight(self):
        """Test that a result loaded across a language switch is flagged stale."""
        context = LanguageContext()

        def slow_loader(lang):
            context.change_language("en")
            return f"content:{lang}"

        result, fresh = context.fetch(slow_loader)

        assert result == "content:he"
        assert fresh is False

    def test_snapshot_and_is_current(self):
        context = LanguageContext()
        language, version = context.snapshot()
        assert (language, version) == ("he", 0)
        context.change_language("en")
        assert not context.is_current(version)
        assert context.is_current(context.version)


class TestLocalizedContent:
    """Test that only fresh loader results are kept."""

    def test_reloads_on_language_change(self):
        context = LanguageContext()
        content = LocalizedContent(context, lambda lang: f"stories:{lang}")

        content.reload()
        assert content.value == "stories:he"

        context.change_language("en")
        assert content.value == "stories:en"
        assert content.language == "en"

    def test_stale_completion_is_discarded(self):
        """Test that a load finishing after a newer switch does not overwrite state."""
        context = LanguageContext()
        calls = []

        def loader(lang):
            calls.append(lang)
            # The first load is overtaken by a switch to English
            if len(calls) == 1:
                context.change_language("en")
            return f"stories:{lang}"

        content = LocalizedContent(context, loader, initial="initial")
        content.reload()

        assert content.value == "stories:en"
        assert content.language == "en"
        assert content.stale_discards == 1

    def test_error_keeps_previous_value(self):
        context = LanguageContext()
        fail = {"on": False}

        def loader(lang):
            if fail["on"]:
                raise RuntimeError("network down")
            return f"stories:{lang}"

        content = LocalizedContent(context, loader)
        content.reload()
        fail["on"] = True
        context.change_language("en")

        assert content.value == "stories:he"
        assert content.error == "network down"

    def test_close_stops_auto_reload(self):
        context = LanguageContext()
        content = LocalizedContent(context, lambda lang: lang, initial="none")
        content.close()
        context.change_language("en")
        assert content.value == "none"

    def test_manual_mode(self):
        context = LanguageContext()
        content = LocalizedContent(context, lambda lang: lang, auto_reload=False)
        context.change_language("en")
        assert content.value is None
        assert content.reload() == "en"
