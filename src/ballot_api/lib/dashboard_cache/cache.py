"""Bounded TTL cache for read-only voter dashboard responses.

Entries are keyed by voter id and expire after a fixed TTL. When the cache is
full, the oldest entry is evicted first. The cache is a display optimization
only and must never be consulted when casting votes.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters for a :class:`DashboardCache`."""

    size: int
    max_entries: int
    hits: int
    misses: int


class DashboardCache:
    """Thread-safe, size-bounded, TTL-based in-memory cache.

    Args:
        ttl_seconds: Entry time-to-live in seconds.
        max_entries: Maximum number of entries kept; oldest evicted first.
    """

    def __init__(self, ttl_seconds: float, max_entries: int = 1000) -> None:
        if max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._entries: OrderedDict[Hashable, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable) -> Any | None:
        """Return the cached value for ``key`` if present and within TTL, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            stored_at, value = entry
            if (time.monotonic() - stored_at) >= self._ttl_seconds:
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, evicting the oldest entries when full."""
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (time.monotonic(), value)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def invalidate(self, key: Hashable) -> None:
        """Drop the entry for ``key`` if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_entries=self._max_entries,
                hits=self._hits,
                misses=self._misses,
            )
