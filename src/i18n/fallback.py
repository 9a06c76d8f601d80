"""
Hebrew-first translation fallback.

Hebrew is the canonical source language; other languages are optional
overlays. A lookup resolves, in order, to:

    requested language -> default language -> caller fallback -> key

These functions never raise and never return an empty string for a
non-empty key, so UI code can always render something.
"""

from typing import Iterable, Mapping, Optional

DEFAULT_LANGUAGE = "he"


def resolve_translation(
    translations: Optional[Mapping[str, str]],
    language: str,
    default_language: str = DEFAULT_LANGUAGE,
    key: str = "",
    fallback: Optional[str] = None,
) -> str:
    """
    Pick the best available text for a language.

    Args:
        translations: Language code -> text (may be None or incomplete)
        language: Requested language
        default_language: Canonical language used when the requested one is missing
        key: The translation key, used as the last resort
        fallback: Caller-supplied text preferred over the bare key

    Returns:
        The resolved text
    """
    if not isinstance(translations, Mapping):
        # Malformed JSON columns (strings, lists) count as no translations
        translations = {}
    for candidate in (
        translations.get(language),
        translations.get(default_language),
        fallback,
    ):
        if isinstance(candidate, str) and candidate.strip():
            return candidate
    return key


def resolve_many(
    rows: Iterable[Mapping],
    keys: Iterable[str],
    key_field: str,
    language: str,
    default_language: str = DEFAULT_LANGUAGE,
) -> dict[str, str]:
    """
    Resolve a batch of translation rows for the requested keys.

    Args:
        rows: Rows with `key_field` and a `translations` mapping
        keys: Keys the caller asked for (duplicates are collapsed)
        key_field: Column holding the key ('translation_key' or 'enum_value')
        language: Requested language
        default_language: Canonical fallback language

    Returns:
        Dict with an entry for every requested key
    """
    result: dict[str, str] = {}
    for row in rows:
        row_key = row.get(key_field)
        if not row_key:
            continue
        result[row_key] = resolve_translation(
            row.get("translations"),
            language,
            default_language,
            key=row_key,
        )

    # Keys without a row resolve to themselves
    for key in keys:
        if not result.get(key):
            result[key] = key
    return result


def keys_fallback(keys: Iterable[str]) -> dict[str, str]:
    """Identity mapping used when a lookup fails outright."""
    return {key: key for key in keys}
