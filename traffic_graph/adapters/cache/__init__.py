"""Cache adapters - Implementations of the CachePort.

Available implementations:
- InMemoryCache: Thread-safe in-memory cache keyed by tuples
- NullCache: No-op cache (always misses)
"""

from __future__ import annotations

from typing import Optional

from ...config import CacheConfig, get_config
from ...ports.cache import CachePort
from .memory_cache import InMemoryCache
from .null_cache import NullCache


def create_cache(name: str, config: Optional[CacheConfig] = None) -> CachePort:
    """Build the cache a query component should use.

    Args:
        name: Cache name, used for the logger (``cache.<name>``).
        config: Optional cache configuration override.

    Returns:
        An InMemoryCache, or a NullCache when caching is disabled.
    """
    config = config or get_config().cache
    if not config.enabled:
        return NullCache(name=name)
    return InMemoryCache(max_size=config.max_size, name=name)


__all__ = ["InMemoryCache", "NullCache", "create_cache"]
