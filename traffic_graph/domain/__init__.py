"""Domain layer - Core models, adjacency helpers and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .adjacency import Adjacency, FrozenAdjacency
from .errors import (
    ConfigurationError,
    GraphDataError,
    InconsistentStateError,
    InvalidExpressionError,
    TrafficGraphError,
    UnreachableError,
    UnsupportedModeError,
)
from .models import Absolute, Relative, Snapshot, UpdateLike, WeightUpdate, parse_update

__all__ = [
    # Models
    "Absolute",
    "Relative",
    "WeightUpdate",
    "UpdateLike",
    "parse_update",
    "Snapshot",
    "Adjacency",
    "FrozenAdjacency",
    # Errors
    "TrafficGraphError",
    "InvalidExpressionError",
    "UnreachableError",
    "UnsupportedModeError",
    "InconsistentStateError",
    "GraphDataError",
    "ConfigurationError",
]
