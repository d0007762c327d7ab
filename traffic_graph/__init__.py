"""Weighted directed graphs with shortest-route queries.

Mutate a :class:`TrafficGraph`, take a snapshot, then query it::

    graph = TrafficGraph().connect("a", {"b": 1, "c": 2}).connect("b", {"d": 2})
    traversal = TrafficTraversal(graph.snapshot())
    traversal.routes("a", "d")
"""

from .domain import (
    Absolute,
    GraphDataError,
    InconsistentStateError,
    InvalidExpressionError,
    Relative,
    Snapshot,
    TrafficGraphError,
    UnreachableError,
    UnsupportedModeError,
    parse_update,
)
from .graph import TrafficGraph, TrafficTraversal, VertexEncoder

__all__ = [
    "TrafficGraph",
    "TrafficTraversal",
    "VertexEncoder",
    "Snapshot",
    "Absolute",
    "Relative",
    "parse_update",
    "TrafficGraphError",
    "InvalidExpressionError",
    "UnreachableError",
    "UnsupportedModeError",
    "InconsistentStateError",
    "GraphDataError",
]
