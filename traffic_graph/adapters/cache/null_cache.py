"""Null cache implementation.

This cache always misses, so every query recomputes from the
snapshot. Selected when caching is disabled in the configuration and
handy in tests that assert on fresh computations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ...ports.cache import CacheKey

T = TypeVar("T")


@dataclass
class NullCache:
    """No-op cache - always misses.

    Implements the CachePort protocol but never stores anything.
    """

    name: str = "null"

    def get(self, key: CacheKey) -> Optional[Any]:
        return None

    def set(self, key: CacheKey, value: Any) -> None:
        pass

    def get_or_compute(self, key: CacheKey, compute_fn: Callable[[], T]) -> T:
        """Always calls compute_fn; the result is never cached."""
        return compute_fn()

    def clear(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, Any]:
        return {
            "size": 0,
            "hits": 0,
            "misses": 0,
            "hit_rate_percent": 0,
        }

    def keys(self) -> List[CacheKey]:
        return []
