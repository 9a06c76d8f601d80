"""
Short-lived in-memory cache for translation lookups.
"""

import threading
import time
from typing import Any, Callable, Iterable, Optional

DEFAULT_TTL_SECONDS = 300.0  # 5 minutes
DEFAULT_MAX_ENTRIES = 1000


def cache_key(language: str, keys: Iterable[str]) -> str:
    """Build a stable cache key; the caller's key list is not modified."""
    return f"{language}:{','.join(sorted(set(keys)))}"


class TTLCache:
    """
    Thread-safe dict whose entries expire after a fixed time-to-live.

    Expired entries are treated as absent. Entries are kept in write order,
    so every set() drops the expired ones from the front, then evicts the
    oldest while more than max_entries remain.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, stored_at: float) -> bool:
        return self._clock() - stored_at < self.ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if not self._is_fresh(stored_at):
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            # Re-inserting moves the key to the end, keeping write order
            self._entries.pop(key, None)
            self._entries[key] = (value, self._clock())

            # The entry just written is fresh, so this stops at or before it
            while True:
                oldest = next(iter(self._entries))
                if self._is_fresh(self._entries[oldest][1]):
                    break
                del self._entries[oldest]

            while len(self._entries) > self.max_entries:
                del self._entries[next(iter(self._entries))]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            expired = [k for k, (_, t) in self._entries.items() if not self._is_fresh(t)]
            for k in expired:
                del self._entries[k]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
