"""
File-based UI translation catalogs.

Catalogs are i18next-style JSON files, one per locale and namespace:

    locales/
        he/common.json
        he/auth.json
        en/common.json
        ...

Nested objects form dotted keys ("nav.home"). The manager loads and saves
catalogs and reports keys that are missing from some locales.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from rich.console import Console

from config.settings import config

console = Console()


@dataclass
class MissingTranslation:
    """A key present in at least one locale but absent from others."""

    key: str
    namespace: str
    missing_locales: list[str]

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "namespace": self.namespace,
            "missing_locales": self.missing_locales,
        }


@dataclass
class ValidationReport:
    """Result of checking every catalog file."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class TranslationStats:
    """Catalog coverage summary."""

    total_keys: int
    completion_by_locale: dict[str, float]
    missing_translations: list[MissingTranslation]

    def to_dict(self) -> dict:
        return {
            "total_keys": self.total_keys,
            "completion_by_locale": self.completion_by_locale,
            "missing_translations": [m.to_dict() for m in self.missing_translations],
        }


def flatten_keys(obj: Mapping[str, Any], prefix: str = "") -> list[str]:
    """
    Dotted paths of every leaf in a nested catalog.

    Example:
        flatten_keys({"nav": {"home": "Home"}, "ok": "OK"}) -> ["nav.home", "ok"]
    """
    keys = []
    for key, value in obj.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            keys.extend(flatten_keys(value, full_key))
        else:
            keys.append(full_key)
    return keys


def get_nested(obj: Optional[Mapping[str, Any]], key: str) -> Any:
    """Value at a dotted path, or None if any segment is missing."""
    current: Any = obj
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def set_nested(obj: dict, key: str, value: Any) -> None:
    """Set a dotted path, replacing non-object intermediates with objects."""
    parts = key.split(".")
    current = obj
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


class TranslationManager:
    """Loads, saves and audits the JSON catalogs under one directory."""

    def __init__(
        self,
        locales_dir: Optional[Path] = None,
        locales: Iterable[str] = ("he", "en"),
        namespaces: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the manager.

        Args:
            locales_dir: Root directory holding one folder per locale
            locales: Locales to manage
            namespaces: Catalog names (defaults to the configured namespaces)
        """
        self.locales_dir = Path(locales_dir or config.i18n.locales_dir)
        self.locales = tuple(locales)
        self.namespaces = tuple(namespaces or config.i18n.namespaces)

    def catalog_path(self, locale: str, namespace: str) -> Path:
        return self.locales_dir / locale / f"{namespace}.json"

    def load_translations(self, locale: str) -> dict[str, dict]:
        """
        Load every namespace catalog of a locale.

        Missing files are skipped; unreadable ones are reported and skipped.

        Returns:
            Dict of namespace -> catalog
        """
        translations = {}
        for namespace in self.namespaces:
            path = self.catalog_path(locale, namespace)
            if not path.exists():
                continue
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                console.print(
                    f"[yellow]Warning: Failed to load {namespace} translations "
                    f"for {locale}: {e}[/yellow]"
                )
                continue
            if isinstance(data, dict):
                translations[namespace] = data
            else:
                console.print(
                    f"[yellow]Warning: {locale}/{namespace}.json is not a JSON object[/yellow]"
                )
        return translations

    def load_all(self) -> dict[str, dict[str, dict]]:
        """Catalogs of every managed locale: locale -> namespace -> catalog."""
        return {locale: self.load_translations(locale) for locale in self.locales}

    def save_translations(self, locale: str, namespace: str, data: Mapping[str, Any]) -> Path:
        """Write one catalog as indented UTF-8 JSON, creating directories."""
        path = self.catalog_path(locale, namespace)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        return path

    @staticmethod
    def has_translation(key: str, namespace: str, translations: Mapping[str, Any]) -> bool:
        """Whether a locale's catalogs define a (possibly empty) value for key."""
        return get_nested(translations.get(namespace), key) is not None

    def _all_keys(self, catalogs: Mapping[str, Mapping[str, Any]], namespace: str) -> list[str]:
        keys: dict[str, None] = {}
        for locale in self.locales:
            for key in flatten_keys(catalogs[locale].get(namespace) or {}):
                keys[key] = None
        return list(keys)

    def find_missing_translations(self) -> list[MissingTranslation]:
        """Keys defined in some locale but missing from at least one other."""
        catalogs = self.load_all()
        missing = []

        for namespace in self.namespaces:
            for key in self._all_keys(catalogs, namespace):
                absent = [
                    locale
                    for locale in self.locales
                    if not self.has_translation(key, namespace, catalogs[locale])
                ]
                if absent:
                    missing.append(MissingTranslation(key, namespace, absent))

        return missing

    def add_translation_key(
        self, key: str, namespace: str, translations: Mapping[str, str]
    ) -> None:
        """
        Add or overwrite a key in every managed locale.

        Args:
            key: Dotted key
            namespace: Catalog to write
            translations: Locale -> text; locales not listed get an empty string
        """
        if namespace not in self.namespaces:
            raise ValueError(
                f"Unknown namespace '{namespace}'. Known: {', '.join(self.namespaces)}"
            )

        for locale in self.locales:
            catalog = self.load_translations(locale).get(namespace) or {}
            set_nested(catalog, key, translations.get(locale, ""))
            self.save_translations(locale, namespace, catalog)

        console.print(f"[green]✓ Added {namespace}:{key} to {', '.join(self.locales)}[/green]")

    def validate_translations(self) -> ValidationReport:
        """Check that every locale/namespace file exists and parses."""
        errors = []
        warnings = []

        for locale in self.locales:
            for namespace in self.namespaces:
                path = self.catalog_path(locale, namespace)
                name = f"{locale}/{namespace}.json"
                if not path.exists():
                    warnings.append(f"Missing translation file: {name}")
                    continue
                try:
                    with open(path, encoding="utf-8") as f:
                        data = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    errors.append(f"Invalid JSON in {name}: {e}")
                    continue
                if not isinstance(data, dict):
                    errors.append(f"Top level of {name} must be an object")

        return ValidationReport(valid=not errors, errors=errors, warnings=warnings)

    def get_translation_stats(self) -> TranslationStats:
        """Total distinct keys and the percentage each locale covers."""
        catalogs = self.load_all()

        all_keys = [
            (namespace, key)
            for namespace in self.namespaces
            for key in self._all_keys(catalogs, namespace)
        ]
        total = len(all_keys)

        completion = {}
        for locale in self.locales:
            translated = sum(
                1
                for namespace, key in all_keys
                if self.has_translation(key, namespace, catalogs[locale])
            )
            completion[locale] = translated / total * 100 if total else 100.0

        return TranslationStats(
            total_keys=total,
            completion_by_locale=completion,
            missing_translations=self.find_missing_translations(),
        )
