"""
Current-language state with stale-result protection.

Language switches bump a version counter. A fetch started under one version
and finished under another is stale: its result belongs to a language the
user has already left, so it must not replace newer content.
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

from rich.console import Console

from .direction import text_direction

console = Console()

T = TypeVar("T")
Listener = Callable[[str, str], None]


class LanguageContext:
    """Holds the active language and notifies subscribers when it changes."""

    def __init__(self, default_language: str = "he", supported: tuple = ("he", "en")):
        if default_language not in supported:
            raise ValueError(
                f"Default language '{default_language}' is not in {supported}"
            )
        self.supported = tuple(supported)
        self._language = default_language
        self._version = 0
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    @property
    def language(self) -> str:
        return self._language

    @property
    def direction(self) -> str:
        return text_direction(self._language)

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    @property
    def version(self) -> int:
        return self._version

    def change_language(self, language: str) -> bool:
        """
        Switch the active language.

        Args:
            language: Supported language code

        Returns:
            True if the language changed, False if it was already active
        """
        if language not in self.supported:
            raise ValueError(
                f"Unsupported language '{language}'. Supported: {', '.join(self.supported)}"
            )

        with self._lock:
            if language == self._language:
                return False
            self._language = language
            self._version += 1
            listeners = list(self._listeners)

        direction = text_direction(language)
        for listener in listeners:
            try:
                listener(language, direction)
            except Exception as e:
                console.print(f"[red]Language change listener failed: {e}[/red]")
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a (language, direction) listener; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> tuple[str, int]:
        with self._lock:
            return self._language, self._version

    def is_current(self, version: int) -> bool:
        return version == self._version

    def fetch(self, loader: Callable[[str], T]) -> tuple[T, bool]:
        """
        Run a loader for the current language.

        Returns:
            (result, fresh) where fresh is False if the language changed
            while the loader was running
        """
        language, version = self.snapshot()
        result = loader(language)
        return result, self.is_current(version)


class LocalizedContent(Generic[T]):
    """
    Last good result of a language-dependent loader.

    Reloads when the context language changes; completions that arrive after
    a newer switch are discarded.
    """

    def __init__(
        self,
        context: LanguageContext,
        loader: Callable[[str], T],
        initial: Optional[T] = None,
        auto_reload: bool = True,
    ):
        self.context = context
        self.loader = loader
        self.value: Optional[T] = initial
        self.language: Optional[str] = None
        self.error: Optional[str] = None
        self.stale_discards = 0
        self._unsubscribe = context.subscribe(self._on_change) if auto_reload else None

    def _on_change(self, language: str, direction: str) -> None:
        self.reload()

    def reload(self) -> Optional[T]:
        """Load for the current language; keeps the previous value on error."""
        language, version = self.context.snapshot()
        try:
            result = self.loader(language)
        except Exception as e:
            if self.context.is_current(version):
                self.error = str(e)
            return self.value

        if not self.context.is_current(version):
            self.stale_discards += 1
            return self.value

        self.value = result
        self.language = language
        self.error = None
        return result

    def close(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def __repr__(self) -> str:
        return f"LocalizedContent(language={self.language!r}, error={self.error!r})"

