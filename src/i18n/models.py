"""
Pydantic models for the multilingual database schema.

Covers the language registry, the system/enum translation tables, the
per-entity translation tables, and the *_multilingual views that join an
entity with its translation in the requested language.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EntityType = Literal["story", "product", "jeweler"]
TranslationStatus = Literal["draft", "pending", "approved", "published"]
Direction = Literal["ltr", "rtl"]


class DBModel(BaseModel):
    """Base for database rows; unknown columns are ignored."""

    model_config = ConfigDict(extra="ignore")


class Language(DBModel):
    """A row from the languages table."""

    id: str  # 'he', 'en'
    name: dict[str, str] = Field(default_factory=dict)  # {"he": "עברית", "en": "Hebrew"}
    direction: Direction = "ltr"
    is_default: bool = False
    is_active: bool = True
    sort_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def display_name(self, language: str, default_language: str = "he") -> str:
        """Name of this language as written in another language."""
        return self.name.get(language) or self.name.get(default_language) or self.id


class TranslationMetadata(DBModel):
    id: Optional[str] = None
    entity_type: EntityType
    entity_id: str
    language_id: str
    is_original: bool = False
    translation_status: TranslationStatus = "draft"
    translator_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StoryTranslation(DBModel):
    id: Optional[str] = None
    story_id: str
    language_id: str
    title: Optional[str] = None
    content: str
    summary: Optional[str] = None
    emotion_tags: list[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductTranslation(DBModel):
    id: Optional[str] = None
    product_id: str
    language_id: str
    name: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    materials_description: Optional[str] = None
    care_instructions: Optional[str] = None
    style_tags: list[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JewelerTranslation(DBModel):
    id: Optional[str] = None
    jeweler_id: str
    language_id: str
    name: str
    bio: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    location_description: Optional[str] = None
    tagline: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SystemTranslation(DBModel):
    """UI string keyed by translation_key with all languages inline."""

    id: Optional[str] = None
    translation_key: str
    translations: dict[str, str] = Field(default_factory=dict)
    context: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EnumTranslation(DBModel):
    """Display labels for an enum value (e.g. order_status.shipped)."""

    id: Optional[str] = None
    enum_type: str
    enum_value: str
    translations: dict[str, str] = Field(default_factory=dict)
    sort_order: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# MULTILINGUAL VIEWS
# =============================================================================


class MultilingualRow(DBModel):
    """Columns every *_multilingual view adds to its entity."""

    id: str
    language_id: str
    requested_language: Optional[str] = None
    fallback_language: Optional[str] = None
    has_requested_translation: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("has_requested_translation", mode="before")
    @classmethod
    def _null_is_false(cls, v):
        return bool(v)

    @property
    def is_fallback(self) -> bool:
        """True when the content shown is not in the requested language."""
        return not self.has_requested_translation


class StoryMultilingual(MultilingualRow):
    user_id: Optional[str] = None
    title: Optional[str] = None
    content: str = ""
    summary: Optional[str] = None
    emotion_tags: list[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None

    # Null arrays come back from Postgres as None
    @field_validator("emotion_tags", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return v or []


class ProductMultilingual(MultilingualRow):
    jeweler_id: Optional[str] = None
    price: Optional[float] = None
    images: list[str] = Field(default_factory=list)
    name: str = ""
    description: Optional[str] = None
    short_description: Optional[str] = None
    materials_description: Optional[str] = None
    care_instructions: Optional[str] = None
    style_tags: list[str] = Field(default_factory=list)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None

    @field_validator("images", "style_tags", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return v or []


class JewelerMultilingual(MultilingualRow):
    user_id: Optional[str] = None
    portfolio_url: Optional[str] = None
    name: str = ""
    bio: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    location_description: Optional[str] = None
    tagline: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None

    @field_validator("specialties", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return v or []


# =============================================================================
# MANAGEMENT PAYLOADS
# =============================================================================


class TranslationCompleteness(DBModel):
    language_id: str
    language_name: str = ""
    is_complete: bool = False
    missing_fields: list[str] = Field(default_factory=list)


class CreateTranslationPayload(BaseModel):
    """Request to create or replace one entity translation."""

    entity_type: EntityType
    entity_id: str = Field(min_length=1)
    language_id: str = Field(min_length=2, max_length=8)
    translation_data: dict[str, Any]
    is_original: bool = False
    translation_status: TranslationStatus = "draft"


class BulkTranslationError(BaseModel):
    entity_id: str
    error: str


class BulkTranslationResult(BaseModel):
    success: int = 0
    failed: int = 0
    errors: list[BulkTranslationError] = Field(default_factory=list)


@dataclass(frozen=True)
class EntityTables:
    """Where an entity type's translations live."""

    translation_table: str
    foreign_key: str
    view: str
    translation_model: type
    row_model: type


ENTITY_TABLES: dict[str, EntityTables] = {
    "story": EntityTables(
        translation_table="story_translations",
        foreign_key="story_id",
        view="stories_multilingual",
        translation_model=StoryTranslation,
        row_model=StoryMultilingual,
    ),
    "product": EntityTables(
        translation_table="product_translations",
        foreign_key="product_id",
        view="products_multilingual",
        translation_model=ProductTranslation,
        row_model=ProductMultilingual,
    ),
    "jeweler": EntityTables(
        translation_table="jeweler_translations",
        foreign_key="jeweler_id",
        view="jewelers_multilingual",
        translation_model=JewelerTranslation,
        row_model=JewelerMultilingual,
    ),
}
