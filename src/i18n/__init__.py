"""
Multilingual content layer for GemsAI.

Hebrew is the canonical language; every other language is an optional
overlay that falls back to Hebrew, then to the translation key.

- I18nQueryBuilder: translated content and UI strings from Supabase
- LanguageContext / LocalizedContent: active language with stale-result protection
- TranslationManager / Translator: JSON locale catalogs and key lookup
- TranslationHelpers: status, form and navigation text patterns
- LocaleFormatter: Babel-backed dates, numbers, plurals and lists
- direction: RTL classes, styles and layout attributes
"""

from .cache import TTLCache, cache_key
from .catalog import MissingTranslation, TranslationManager, TranslationStats, ValidationReport
from .direction import (
    directional_container,
    directional_flex,
    directional_input,
    is_rtl_language,
    text_direction,
    to_rtl_class,
)
from .fallback import keys_fallback, resolve_many, resolve_translation
from .formatting import LocaleFormatter, locale_for_language
from .helpers import TranslationHelpers
from .language_context import LanguageContext, LocalizedContent
from .query_builder import I18nQueryBuilder, create_i18n_query
from .translator import Translator

__all__ = [
    "TTLCache",
    "cache_key",
    "MissingTranslation",
    "TranslationManager",
    "TranslationStats",
    "ValidationReport",
    "directional_container",
    "directional_flex",
    "directional_input",
    "is_rtl_language",
    "text_direction",
    "to_rtl_class",
    "keys_fallback",
    "resolve_many",
    "resolve_translation",
    "LocaleFormatter",
    "locale_for_language",
    "TranslationHelpers",
    "LanguageContext",
    "LocalizedContent",
    "I18nQueryBuilder",
    "create_i18n_query",
    "Translator",
]
