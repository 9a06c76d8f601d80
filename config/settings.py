"""
Configuration settings for the GemsAI i18n layer.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

# Load .env file from project root
load_dotenv(PROJECT_ROOT / ".env")


def _env(*names: str) -> Optional[str]:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass
class SupabaseConfig:
    """Configuration for the Supabase connection."""

    # The NEXT_PUBLIC_* names are what the web frontend's .env uses
    url: Optional[str] = field(
        default_factory=lambda: _env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    )
    key: Optional[str] = field(
        default_factory=lambda: _env("SUPABASE_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
    )
    schema: str = "public"
    application_name: str = "GemsAI"
    timeout_seconds: float = 10.0

    @property
    def is_configured(self) -> bool:
        """Whether both URL and key are available."""
        return bool(self.url and self.key)


@dataclass
class I18nConfig:
    """Configuration for language resolution and locale catalogs."""

    # Hebrew is the canonical source language
    default_language: str = "he"
    # Fallback for file-based UI catalogs
    fallback_language: str = "en"
    supported_languages: tuple = ("he", "en")
    rtl_languages: tuple = ("he", "ar", "fa", "ur")

    # System translations cache
    cache_ttl_seconds: float = 300.0  # 5 minutes
    cache_max_entries: int = 1000

    # UI catalogs: <locales_dir>/<lang>/<namespace>.json
    namespaces: tuple = (
        "common",
        "auth",
        "dashboard",
        "stories",
        "jewelry",
        "validation",
    )
    default_namespace: str = "common"
    locales_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "locales")

    def is_supported(self, language: str) -> bool:
        """Check whether a language code is supported."""
        return language in self.supported_languages


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    log_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "logs")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_to_file: bool = False
    log_to_console: bool = True

    def ensure_dirs(self) -> None:
        """Create log directory if it doesn't exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class ServerConfig:
    """Configuration for the JSON service."""

    host: str = "127.0.0.1"
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5001")))
    debug: bool = False


@dataclass
class AppConfig:
    """Main configuration combining all settings."""

    supabase: SupabaseConfig = field(default_factory=SupabaseConfig)
    i18n: I18nConfig = field(default_factory=I18nConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def __post_init__(self):
        """Ensure all necessary directories exist."""
        if self.logging.log_to_file:
            self.logging.ensure_dirs()


# Default configuration instance
config = AppConfig()
