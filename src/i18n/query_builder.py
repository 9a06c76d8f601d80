"""
Multilingual query builder.

Reads translated content from Supabase for one language at a time:

- Language registry (languages table)
- System UI strings (system_translations) with a shared TTL cache
- Enum display labels (enum_translations)
- Stories, products and jewelers through the *_multilingual views, which
  fall back to the Hebrew row when the requested translation is missing
- Translation completeness and translation writes

Lookups of UI strings never raise: on any failure they degrade to the
caller's fallback or the key itself. Content reads raise SupabaseError.

Usage:
    from src.i18n import create_i18n_query

    query = create_i18n_query("en")
    labels = query.get_cached_system_translations(["nav.home", "nav.shop"])
    products = query.get_products(limit=20, jeweler_id="j-1")
"""

import re
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError
from rich.console import Console

from config.settings import I18nConfig, config
from src.db import SupabaseError, create_i18n_client, handle_response, set_language_context

from .cache import TTLCache, cache_key
from .fallback import keys_fallback, resolve_many
from .models import (
    ENTITY_TABLES,
    BulkTranslationError,
    BulkTranslationResult,
    CreateTranslationPayload,
    JewelerMultilingual,
    Language,
    ProductMultilingual,
    StoryMultilingual,
    TranslationCompleteness,
)

console = Console()

STORY_ORDER_FIELDS = ("created_at", "updated_at")
PRODUCT_ORDER_FIELDS = ("created_at", "updated_at", "price")
JEWELER_ORDER_FIELDS = ("created_at", "updated_at")
ORDER_DIRECTIONS = ("asc", "desc")

# Postgres text search configurations per language
SEARCH_CONFIGS = {"he": "hebrew", "en": "english"}

# Characters with meaning inside a PostgREST or=(...) filter
_RESERVED_FILTER_CHARS = re.compile(r"[,()]")


def _validate_page(limit: int, offset: int) -> None:
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")


def _validate_order(order_by: str, order_direction: str, allowed: tuple) -> None:
    if order_by not in allowed:
        raise ValueError(f"Cannot order by '{order_by}'. Allowed: {', '.join(allowed)}")
    if order_direction not in ORDER_DIRECTIONS:
        raise ValueError(f"order_direction must be 'asc' or 'desc', got '{order_direction}'")


class I18nQueryBuilder:
    """
    Query builder bound to one language.

    The system translation cache is shared by every builder in the process,
    keyed by language and the sorted set of requested keys.
    """

    _system_cache = TTLCache(
        ttl_seconds=config.i18n.cache_ttl_seconds,
        max_entries=config.i18n.cache_max_entries,
    )

    def __init__(
        self,
        language_id: str = "he",
        client: Any = None,
        i18n_config: Optional[I18nConfig] = None,
    ):
        """
        Initialize the query builder.

        Args:
            language_id: Language to resolve content in
            client: Supabase client (created from config if omitted)
            i18n_config: Language settings (defaults to global config)
        """
        self.i18n_config = i18n_config or config.i18n
        self.language_id = language_id
        self.client = client if client is not None else create_i18n_client(language_id)

    @property
    def default_language(self) -> str:
        return self.i18n_config.default_language

    # =========================================================================
    # LANGUAGE MANAGEMENT
    # =========================================================================

    def set_language(self, language_id: str) -> None:
        """Switch the builder language and update the database session."""
        self.language_id = language_id
        set_language_context(self.client, language_id)

    def get_languages(self) -> list[Language]:
        """Active languages ordered for display."""
        rows = handle_response(
            self.client.table("languages")
            .select("*")
            .eq("is_active", True)
            .order("sort_order", desc=False)
        )
        return [Language.model_validate(row) for row in rows]

    def get_default_language(self) -> Optional[Language]:
        """The active language flagged as default, if any."""
        rows = handle_response(
            self.client.table("languages")
            .select("*")
            .eq("is_default", True)
            .eq("is_active", True)
            .limit(1)
        )
        return Language.model_validate(rows[0]) if rows else None

    # =========================================================================
    # SYSTEM TRANSLATIONS
    # =========================================================================

    def get_system_translation(self, key: str, fallback: Optional[str] = None) -> str:
        """
        Resolve one UI string through the get_system_translation function.

        Args:
            key: Translation key (e.g. 'checkout.title')
            fallback: Text to use if no translation exists

        Returns:
            The translated text, the fallback, or the key
        """
        try:
            result = self.client.rpc(
                "get_system_translation",
                {"translation_key": key, "language_id": self.language_id},
            ).execute()
        except Exception as e:
            console.print(
                f"[yellow]Warning: Failed to get system translation for '{key}': {e}[/yellow]"
            )
            return fallback or key

        return result.data or fallback or key

    def get_system_translations(self, keys: Iterable[str]) -> dict[str, str]:
        """
        Resolve many UI strings with one query.

        Args:
            keys: Translation keys

        Returns:
            Dict with an entry for every requested key
        """
        keys = list(dict.fromkeys(keys))
        if not keys:
            return {}

        try:
            rows = handle_response(
                self.client.table("system_translations")
                .select("translation_key, translations")
                .in_("translation_key", keys)
                .eq("is_active", True)
            )
        except SupabaseError as e:
            console.print(f"[yellow]Warning: Failed to get system translations: {e}[/yellow]")
            return keys_fallback(keys)

        return resolve_many(
            rows, keys, "translation_key", self.language_id, self.default_language
        )

    def get_cached_system_translations(self, keys: Iterable[str]) -> dict[str, str]:
        """Same as get_system_translations, served from the shared TTL cache."""
        keys = list(keys)
        key = cache_key(self.language_id, keys)

        cached = self._system_cache.get(key)
        if cached is not None:
            return dict(cached)

        translations = self.get_system_translations(keys)
        self._system_cache.set(key, translations)
        return dict(translations)

    @classmethod
    def clear_cache(cls) -> None:
        """Drop all cached system translations (after admin edits)."""
        cls._system_cache.clear()

    # =========================================================================
    # ENUM TRANSLATIONS
    # =========================================================================

    def get_enum_translation(
        self, enum_type: str, enum_value: str, fallback: Optional[str] = None
    ) -> str:
        """Resolve the display label of one enum value."""
        try:
            result = self.client.rpc(
                "get_enum_translation",
                {
                    "enum_type": enum_type,
                    "enum_value": enum_value,
                    "language_id": self.language_id,
                },
            ).execute()
        except Exception as e:
            console.print(
                f"[yellow]Warning: Failed to get enum translation for "
                f"'{enum_type}.{enum_value}': {e}[/yellow]"
            )
            return fallback or enum_value

        return result.data or fallback or enum_value

    def get_enum_translations(
        self, enum_type: str, enum_values: Iterable[str]
    ) -> dict[str, str]:
        """Resolve display labels for several values of one enum."""
        enum_values = list(dict.fromkeys(enum_values))
        if not enum_values:
            return {}

        try:
            rows = handle_response(
                self.client.table("enum_translations")
                .select("enum_value, translations")
                .eq("enum_type", enum_type)
                .in_("enum_value", enum_values)
                .eq("is_active", True)
                .order("sort_order", desc=False)
            )
        except SupabaseError as e:
            console.print(
                f"[yellow]Warning: Failed to get enum translations for '{enum_type}': {e}[/yellow]"
            )
            return keys_fallback(enum_values)

        return resolve_many(
            rows, enum_values, "enum_value", self.language_id, self.default_language
        )

    # =========================================================================
    # MULTILINGUAL CONTENT
    # =========================================================================

    def _view_query(self, view: str):
        set_language_context(self.client, self.language_id)
        return self.client.table(view).select("*")

    def _page(self, query, limit: int, offset: int, order_by: str, order_direction: str):
        return query.order(order_by, desc=order_direction == "desc").range(
            offset, offset + limit - 1
        )

    def _get_by_id(self, entity_type: str, entity_id: str):
        tables = ENTITY_TABLES[entity_type]
        rows = handle_response(self._view_query(tables.view).eq("id", entity_id).limit(1))
        return tables.row_model.model_validate(rows[0]) if rows else None

    def get_stories(
        self,
        limit: int = 10,
        offset: int = 0,
        user_id: Optional[str] = None,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> list[StoryMultilingual]:
        """Stories in the builder language, newest first by default."""
        _validate_page(limit, offset)
        _validate_order(order_by, order_direction, STORY_ORDER_FIELDS)

        query = self._view_query("stories_multilingual")
        if user_id:
            query = query.eq("user_id", user_id)

        rows = handle_response(self._page(query, limit, offset, order_by, order_direction))
        return [StoryMultilingual.model_validate(row) for row in rows]

    def get_story_by_id(self, story_id: str) -> Optional[StoryMultilingual]:
        return self._get_by_id("story", story_id)

    def get_products(
        self,
        limit: int = 10,
        offset: int = 0,
        jeweler_id: Optional[str] = None,
        category: Optional[str] = None,
        available_only: bool = True,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> list[ProductMultilingual]:
        """
        Products in the builder language.

        category and available_only are accepted for callers but not
        applied: products_multilingual does not expose the base table's
        category or is_available columns, and PostgREST rejects filters
        on columns a view lacks.
        """
        _validate_page(limit, offset)
        _validate_order(order_by, order_direction, PRODUCT_ORDER_FIELDS)

        query = self._view_query("products_multilingual")
        if jeweler_id:
            query = query.eq("jeweler_id", jeweler_id)

        rows = handle_response(self._page(query, limit, offset, order_by, order_direction))
        return [ProductMultilingual.model_validate(row) for row in rows]

    def get_product_by_id(self, product_id: str) -> Optional[ProductMultilingual]:
        return self._get_by_id("product", product_id)

    def get_jewelers(
        self,
        limit: int = 10,
        offset: int = 0,
        verified_only: bool = True,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> list[JewelerMultilingual]:
        """
        Jeweler profiles in the builder language.

        verified_only is not applied: verification_status lives on the
        jewelers table, not on jewelers_multilingual.
        """
        _validate_page(limit, offset)
        _validate_order(order_by, order_direction, JEWELER_ORDER_FIELDS)

        query = self._view_query("jewelers_multilingual")

        rows = handle_response(self._page(query, limit, offset, order_by, order_direction))
        return [JewelerMultilingual.model_validate(row) for row in rows]

    def get_jeweler_by_id(self, jeweler_id: str) -> Optional[JewelerMultilingual]:
        return self._get_by_id("jeweler", jeweler_id)

    # =========================================================================
    # SEARCH
    # =========================================================================

    def search_stories(
        self, query: str, limit: int = 10, offset: int = 0
    ) -> list[StoryMultilingual]:
        """Full-text search over story content using the language's dictionary."""
        if not query or not query.strip():
            return []
        _validate_page(limit, offset)

        search = self._view_query("stories_multilingual").text_search(
            "content",
            query.strip(),
            options={
                "type": "websearch",
                "config": SEARCH_CONFIGS.get(self.language_id, "english"),
            },
        )
        rows = handle_response(self._page(search, limit, offset, "created_at", "desc"))
        return [StoryMultilingual.model_validate(row) for row in rows]

    def search_products(
        self,
        query: str,
        limit: int = 10,
        offset: int = 0,
        category: Optional[str] = None,
    ) -> list[ProductMultilingual]:
        """
        Case-insensitive substring search over product name and description.

        category is accepted but not applied (see get_products).
        """
        term = _RESERVED_FILTER_CHARS.sub(" ", query or "").strip()
        if not term:
            return []
        _validate_page(limit, offset)

        search = self._view_query("products_multilingual").or_(
            f"name.ilike.%{term}%,description.ilike.%{term}%"
        )
        rows = handle_response(self._page(search, limit, offset, "created_at", "desc"))
        return [ProductMultilingual.model_validate(row) for row in rows]

    # =========================================================================
    # TRANSLATION MANAGEMENT
    # =========================================================================

    def get_translation_completeness(
        self, entity_type: str, entity_id: str
    ) -> list[TranslationCompleteness]:
        """Which languages have a complete translation of an entity."""
        try:
            result = self.client.rpc(
                "get_translation_completeness",
                {"entity_type": entity_type, "entity_id": entity_id},
            ).execute()
        except Exception as e:
            console.print(
                f"[yellow]Warning: Failed to get translation completeness: {e}[/yellow]"
            )
            return []

        return [TranslationCompleteness.model_validate(row) for row in result.data or []]

    def create_translation(
        self, payload: Union[CreateTranslationPayload, dict]
    ) -> dict:
        """
        Create or replace one translation of a story, product or jeweler.

        Args:
            payload: CreateTranslationPayload or an equivalent dict

        Returns:
            The stored translation row

        Raises:
            ValidationError: Payload or translation fields are invalid
            SupabaseError: The write failed
        """
        if not isinstance(payload, CreateTranslationPayload):
            payload = CreateTranslationPayload.model_validate(payload)

        tables = ENTITY_TABLES[payload.entity_type]
        translation = tables.translation_model.model_validate(
            {
                **payload.translation_data,
                tables.foreign_key: payload.entity_id,
                "language_id": payload.language_id,
            }
        )
        row = translation.model_dump(
            mode="json",
            exclude_unset=True,
            exclude={"id", "created_at", "updated_at"},
        )

        stored = handle_response(
            self.client.table(tables.translation_table).upsert(
                row, on_conflict=f"{tables.foreign_key},language_id"
            )
        )
        handle_response(
            self.client.table("translation_metadata").upsert(
                {
                    "entity_type": payload.entity_type,
                    "entity_id": payload.entity_id,
                    "language_id": payload.language_id,
                    "is_original": payload.is_original,
                    "translation_status": payload.translation_status,
                },
                on_conflict="entity_type,entity_id,language_id",
            )
        )

        self.clear_cache()
        console.print(
            f"[green]✓ Saved {payload.entity_type} translation: "
            f"{payload.entity_id} ({payload.language_id})[/green]"
        )
        return stored[0] if stored else row

    def bulk_create_translations(
        self, payloads: Iterable[Union[CreateTranslationPayload, dict]]
    ) -> BulkTranslationResult:
        """Create many translations; one failure does not stop the rest."""
        result = BulkTranslationResult()

        for payload in payloads:
            if isinstance(payload, CreateTranslationPayload):
                entity_id = payload.entity_id
            elif isinstance(payload, dict):
                entity_id = str(payload.get("entity_id", ""))
            else:
                entity_id = ""
            try:
                self.create_translation(payload)
                result.success += 1
            except (SupabaseError, ValidationError, ValueError) as e:
                result.failed += 1
                result.errors.append(BulkTranslationError(entity_id=entity_id, error=str(e)))

        if result.failed:
            console.print(
                f"[yellow]Bulk translation: {result.success} saved, "
                f"{result.failed} failed[/yellow]"
            )
        return result


def create_i18n_query(language_id: str = "he", client: Any = None) -> I18nQueryBuilder:
    """Convenience constructor for a query builder."""
    return I18nQueryBuilder(language_id, client=client)
