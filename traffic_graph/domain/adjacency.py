"""Helpers for adjacency maps and vertex enumeration.

An adjacency map sends each source vertex to an insertion-ordered
mapping of destination vertex -> edge weight.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

Adjacency = Dict[str, Dict[str, float]]
FrozenAdjacency = Mapping[str, Mapping[str, float]]


def copy_adjacency(data: FrozenAdjacency) -> Adjacency:
    """Return a deep, mutable copy of an adjacency map."""
    return {source: dict(dests) for source, dests in data.items()}


def freeze_adjacency(data: FrozenAdjacency) -> FrozenAdjacency:
    """Return a deep, read-only copy of an adjacency map."""
    return MappingProxyType(
        {source: MappingProxyType(dict(dests)) for source, dests in data.items()}
    )


def enumerate_vertices(data: FrozenAdjacency) -> List[str]:
    """List every vertex referenced by ``data`` in first-seen order.

    Sources are visited in insertion order and each source is followed
    by its destinations, also in insertion order.
    """
    seen: Dict[str, None] = {}
    for source, dests in data.items():
        seen.setdefault(source)
        for dest in dests:
            seen.setdefault(dest)
    return list(seen)


def index_positions(vertices: Iterable[str]) -> Mapping[str, int]:
    """Map each vertex to its position in ``vertices``."""
    return MappingProxyType({vertex: i for i, vertex in enumerate(vertices)})
