"""Cache port - Injectable memoization abstraction.

Query components memoize their results through this protocol so the
caching behavior can be swapped (or disabled) without touching the
algorithms. Keys are tuples of the actual query parameters, e.g.
``("route", "a", "d")``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Optional, Protocol, Tuple, TypeVar

T = TypeVar("T")

CacheKey = Tuple[Hashable, ...]


class CachePort(Protocol):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Testing
    """

    def get(self, key: CacheKey) -> Optional[Any]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found.
        """
        ...

    def set(self, key: CacheKey, value: Any) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
        """
        ...

    def get_or_compute(self, key: CacheKey, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        This is the primary method for the cache-aside pattern:
        1. Check if key exists in cache
        2. If yes, return cached value
        3. If no, call compute_fn, cache result, return result

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss statistics."""
        ...
