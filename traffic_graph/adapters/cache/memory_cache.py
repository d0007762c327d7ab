"""Thread-safe in-memory memoization cache.

Entries never expire: every query component caches results derived
from an immutable snapshot, so a stored value stays valid for the
lifetime of the component. An optional ``max_size`` bounds memory with
FIFO eviction; an evicted entry is simply recomputed on the next miss.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ...ports.cache import CacheKey

T = TypeVar("T")

_MISSING = object()


@dataclass
class InMemoryCache:
    """Thread-safe in-memory cache keyed by tuples.

    This cache implements the CachePort protocol and is injected into
    the traversal engine and the vertex encoder.

    Attributes:
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging

    Example:
        cache = InMemoryCache(name="traversal")
        route = cache.get_or_compute(("route", "a", "d"), compute_route)
    """

    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[CacheKey, Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _lookup(self, key: CacheKey) -> Any:
        with self._lock:
            value = self._store.get(key, _MISSING)
            if value is _MISSING:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def get(self, key: CacheKey) -> Optional[Any]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found.
        """
        value = self._lookup(key)
        return None if value is _MISSING else value

    def set(self, key: CacheKey, value: Any) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
        """
        with self._lock:
            if self.max_size is not None and len(self._store) >= self.max_size:
                if key not in self._store:
                    oldest_key = next(iter(self._store))
                    del self._store[oldest_key]
                    self._logger.debug(
                        "Cache evicted entry",
                        extra={"key": oldest_key, "reason": "max_size"},
                    )
            self._store[key] = value

    def get_or_compute(self, key: CacheKey, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Falsy results (``0``, ``False``, empty lists) are cached like any
        other value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        # Compute outside the lock; a concurrent duplicate computation
        # yields an equal value from the same snapshot.
        self._logger.debug("Cache miss, computing", extra={"key": key})
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def size(self) -> int:
        """Return the number of entries in the cache."""
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with hit/miss counts and size.
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }

    def keys(self) -> List[CacheKey]:
        """Return all keys in the cache."""
        with self._lock:
            return list(self._store.keys())
