"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the graph core and swappable
adapters, which keeps the query components testable.
"""

from .cache import CacheKey, CachePort

__all__ = [
    "CacheKey",
    "CachePort",
]
