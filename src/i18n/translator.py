"""
Key lookup over file catalogs with i18next-compatible conventions.

    t("nav.home")                        # dotted key in the default namespace
    t("auth:login.title")                # explicit namespace
    t("cart.items", count=3)             # picks cart.items_one / _two / _other ...
    t("greeting", name="Dana")           # "Hello {{name}}" -> "Hello Dana"

Missing keys fall back to the fallback language, then to default_value,
then to the key itself.
"""

import re
from typing import Any, Mapping, Optional

from babel import Locale, UnknownLocaleError

from config.settings import config

from .catalog import TranslationManager, get_nested
from .direction import text_direction

_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")

Catalogs = Mapping[str, Mapping[str, Mapping[str, Any]]]


def interpolate(text: str, variables: Mapping[str, Any]) -> str:
    """Replace {{name}} placeholders; unknown names are left untouched."""

    def replace(match):
        name = match.group(1)
        return str(variables[name]) if name in variables else match.group(0)

    return _PLACEHOLDER.sub(replace, text)


class Translator:
    """Resolves UI strings for the current language from loaded catalogs."""

    def __init__(
        self,
        catalogs: Catalogs,
        language: str = "he",
        fallback_language: str = "en",
        default_namespace: str = "common",
    ):
        """
        Initialize the translator.

        Args:
            catalogs: locale -> namespace -> nested catalog
            language: Active language
            fallback_language: Language consulted when a key is missing
            default_namespace: Namespace for keys without an 'ns:' prefix
        """
        self.catalogs = catalogs
        self.fallback_language = fallback_language
        self.default_namespace = default_namespace
        self._plural_locales: dict[str, Optional[Locale]] = {}
        self.language = language
        self.change_language(language)

    @classmethod
    def from_manager(
        cls,
        manager: TranslationManager,
        language: Optional[str] = None,
        fallback_language: Optional[str] = None,
        default_namespace: Optional[str] = None,
    ) -> "Translator":
        """Build a translator over every catalog the manager can load."""
        return cls(
            manager.load_all(),
            language=language or config.i18n.default_language,
            fallback_language=fallback_language or config.i18n.fallback_language,
            default_namespace=default_namespace or config.i18n.default_namespace,
        )

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self.catalogs)

    @property
    def direction(self) -> str:
        return text_direction(self.language)

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    def change_language(self, language: str) -> None:
        if language not in self.catalogs:
            raise ValueError(
                f"No catalogs loaded for '{language}'. Available: {', '.join(self.catalogs)}"
            )
        self.language = language

    def _split_namespace(self, key: str, namespace: Optional[str]) -> tuple[str, str]:
        if ":" in key:
            prefix, rest = key.split(":", 1)
            if prefix and rest:
                return prefix, rest
        return namespace or self.default_namespace, key

    def _plural_locale(self, language: str) -> Optional[Locale]:
        if language not in self._plural_locales:
            try:
                self._plural_locales[language] = Locale.parse(language)
            except (UnknownLocaleError, ValueError):
                self._plural_locales[language] = None
        return self._plural_locales[language]

    def _candidates(self, key: str, language: str, count: Optional[float]) -> list[str]:
        if count is None:
            return [key]
        candidates = []
        if count == 0:
            candidates.append(f"{key}_zero")
        locale = self._plural_locale(language)
        if locale is not None:
            candidates.append(f"{key}_{locale.plural_form(count)}")
        candidates.extend([f"{key}_other", key])
        return candidates

    def _lookup(
        self, key: str, namespace: str, language: str, count: Optional[float]
    ) -> Optional[str]:
        catalog = self.catalogs.get(language, {}).get(namespace)
        for candidate in self._candidates(key, language, count):
            value = get_nested(catalog, candidate)
            if isinstance(value, str):
                return value
        return None

    def resolve(
        self, key: str, namespace: Optional[str] = None, count: Optional[float] = None
    ) -> Optional[str]:
        """Raw catalog text for the current or fallback language, or None."""
        namespace, key = self._split_namespace(key, namespace)
        for language in dict.fromkeys((self.language, self.fallback_language)):
            value = self._lookup(key, namespace, language, count)
            if value is not None:
                return value
        return None

    def t(
        self,
        key: str,
        namespace: Optional[str] = None,
        default_value: Optional[str] = None,
        count: Optional[float] = None,
        **variables: Any,
    ) -> str:
        """
        Translate a key.

        Args:
            key: Dotted key, optionally prefixed with 'namespace:'
            namespace: Namespace when the key has no prefix
            default_value: Text used when no catalog has the key
            count: Selects a plural form and is available as {{count}}
            **variables: Interpolation values

        Returns:
            The translated, interpolated text
        """
        text = self.resolve(key, namespace, count)
        if text is None:
            text = default_value if default_value is not None else self._split_namespace(
                key, namespace
            )[1]

        if count is not None:
            variables.setdefault("count", count)
        return interpolate(text, variables) if variables else text

    def exists(self, key: str, namespace: Optional[str] = None) -> bool:
        return self.resolve(key, namespace) is not None
