"""Mutable store for a weighted directed graph.

The store owns the adjacency data and is mutated in place by a single
owner. Query components never read it directly: they are built from a
``Snapshot`` taken with :meth:`TrafficGraph.snapshot`.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from ..domain.adjacency import (
    Adjacency,
    copy_adjacency,
    enumerate_vertices,
    freeze_adjacency,
)
from ..domain.errors import GraphDataError
from ..domain.models import Snapshot, UpdateLike, parse_update

_ADJACENCY = TypeAdapter(Dict[str, Dict[str, float]])


class TrafficGraph:
    """Weighted directed graph with relative weight updates.

    Mutating methods return the store itself so calls can be chained::

        graph = TrafficGraph()
        graph.connect("a", {"b": 1, "c": 2}).connect("b", {"d": 2})
        graph.connect("a", {"b": "+=1"})

    At most one edge exists per ordered pair and self-loops are never
    stored.
    """

    def __init__(
        self, data: Optional[Mapping[str, Mapping[str, float]]] = None
    ) -> None:
        """Create an empty graph, or restore one from exported data.

        Args:
            data: Adjacency map as returned by :meth:`export_data`.

        Raises:
            GraphDataError: If ``data`` is not a mapping of mappings of numbers.
        """
        self._logger = logging.getLogger(__name__)
        self._data: Adjacency = {}
        if data is not None:
            self._data = self._load(data)

    def _load(self, data: Mapping[str, Mapping[str, float]]) -> Adjacency:
        try:
            validated = _ADJACENCY.validate_python(data)
        except ValidationError as e:
            raise GraphDataError("Invalid adjacency data", cause=e)

        adjacency = {
            source: {dest: w for dest, w in dests.items() if dest != source}
            for source, dests in validated.items()
        }
        self._logger.debug("Graph restored", extra={"sources": len(adjacency)})
        return adjacency

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, str) and self.has(vertex)

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return f"TrafficGraph(vertices={len(self)})"

    @property
    def vertices(self) -> List[str]:
        """Return every vertex in first-seen order."""
        return enumerate_vertices(self._data)

    def connect(
        self, source: str, destinations: Mapping[str, UpdateLike]
    ) -> TrafficGraph:
        """Create or update one-way edges from ``source``.

        Each value is an absolute weight or a relative update
        (``Relative("add", 1)`` or ``"+=1"``) evaluated against the current
        weight of that edge, ``0`` when the edge does not exist yet.
        Destinations equal to ``source`` are skipped.

        Args:
            source: The starting vertex.
            destinations: Mapping of destination vertex to weight update.

        Raises:
            InvalidExpressionError: If an update cannot be evaluated.
        """
        edges = self._data.setdefault(source, {})
        for dest, value in destinations.items():
            if dest == source:
                continue
            update = parse_update(value)
            edges[dest] = update.apply(edges.get(dest, 0.0))
        self._logger.debug(
            "Edges connected",
            extra={"source": source, "destinations": len(destinations)},
        )
        return self

    def connect_both(
        self, a: str, destinations: Mapping[str, UpdateLike]
    ) -> TrafficGraph:
        """Create or update edges between ``a`` and each destination, both ways.

        ``graph.connect_both("a", {"b": 1})`` is the same as
        ``graph.connect("a", {"b": 1}).connect("b", {"a": 1})``. Relative
        updates are evaluated separately against each direction's weight.
        """
        self.connect(a, destinations)
        for dest, value in destinations.items():
            if dest == a:
                continue
            self.connect(dest, {a: value})
        return self

    def connect_all(self, weights: Mapping[str, UpdateLike]) -> TrafficGraph:
        """Connect every named vertex to every other named vertex.

        ``graph.connect_all({"a": 1, "b": 2, "c": 3})`` is the same as
        ``connect("a", {"b": 2, "c": 3})``, ``connect("b", {"a": 1, "c": 3})``
        and ``connect("c", {"a": 1, "b": 2})``.
        """
        for vertex in weights:
            self.connect(vertex, weights)
        return self

    def disconnect(self, source: str, dest: str) -> TrafficGraph:
        """Delete the one-way edge ``source -> dest`` if it exists."""
        edges = self._data.get(source)
        if edges is not None:
            edges.pop(dest, None)
        return self

    def disconnect_both(self, a: str, b: str) -> TrafficGraph:
        """Delete the edges between ``a`` and ``b`` in both directions."""
        return self.disconnect(a, b).disconnect(b, a)

    def remove(self, vertex: str) -> TrafficGraph:
        """Delete a vertex and every edge leading to or from it."""
        for edges in self._data.values():
            edges.pop(vertex, None)
        self._data.pop(vertex, None)
        self._logger.debug("Vertex removed", extra={"vertex": vertex})
        return self

    def has(self, vertex: str) -> bool:
        """Return whether ``vertex`` appears anywhere in the graph."""
        return vertex in self.vertices

    def has_all(self, *vertices: str) -> bool:
        """Return whether every given vertex is in the graph."""
        known = set(self.vertices)
        return all(vertex in known for vertex in vertices)

    def invert(self) -> TrafficGraph:
        """Multiply every edge weight by ``-1``.

        Turns shortest routes into longest ones, e.g.::

            longest = TrafficTraversal(graph.invert().snapshot()).routes("A", "B")
        """
        for edges in self._data.values():
            for dest in edges:
                edges[dest] *= -1
        return self

    def export_data(self) -> Adjacency:
        """Return a deep copy of the adjacency data.

        The result can be fed back to the constructor to rebuild an
        equivalent graph.
        """
        return copy_adjacency(self._data)

    def snapshot(self) -> Snapshot:
        """Capture an immutable, timestamped view of the current graph."""
        data = freeze_adjacency(self._data)
        snapshot = Snapshot(
            data=data,
            vertices=tuple(enumerate_vertices(data)),
            timestamp=time.time(),
        )
        self._logger.debug(
            "Snapshot captured",
            extra={"vertices": snapshot.size, "timestamp": snapshot.timestamp},
        )
        return snapshot

    def clone(self) -> TrafficGraph:
        """Return an independent copy of this graph."""
        return TrafficGraph(self._data)
