"""Shortest-route and reachability queries over a graph snapshot.

Routes are found with a label-correcting relaxation (Bellman-Ford over
a FIFO queue) rather than Dijkstra, because edge weights may be
negative. A vertex is queued again whenever its distance improves after
it was expanded, so results are exact on graphs without negative
cycles. Each vertex is expanded at most once per vertex in the graph,
so the pass also terminates on negative cycles; such cycles are not
detected or reported and routes through them are arbitrary.

Results are memoized per engine under tuple keys such as
``("route", source, target)``. The snapshot never changes, so no entry
is ever invalidated.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Deque, Dict, Iterator, List, Literal, Optional, Set, Tuple, Union

from ..adapters.cache import create_cache
from ..domain.errors import UnreachableError, UnsupportedModeError
from ..domain.models import Snapshot
from ..ports.cache import CachePort

WeightMode = Literal["sum", "count", "mean"]

Predecessors = Dict[str, Optional[str]]


class TrafficTraversal:
    """Route, distance and weight queries bound to one snapshot.

    Example:
        traversal = TrafficTraversal(graph.snapshot())
        traversal.routes("a", "d")   # ['a', 'b', 'd']
        traversal.traffic("a", "d")  # 3.0
    """

    def __init__(self, snapshot: Snapshot, cache: Optional[CachePort] = None) -> None:
        self._snapshot = snapshot
        self._cache = cache if cache is not None else create_cache("traversal")
        self._logger = logging.getLogger(__name__)

    @property
    def snapshot(self) -> Snapshot:
        """The snapshot this engine answers queries for."""
        return self._snapshot

    def cache_stats(self) -> Dict[str, object]:
        """Return hit/miss statistics of the memoization cache."""
        return self._cache.stats()

    def _relax(self, source: str) -> Predecessors:
        return self._cache.get_or_compute(
            ("relax", source), lambda: self._compute_relax(source)
        )

    def _compute_relax(self, source: str) -> Predecessors:
        distance: Dict[str, float] = {v: math.inf for v in self._snapshot.vertices}
        previous: Predecessors = {v: None for v in self._snapshot.vertices}
        distance[source] = 0.0

        # A vertex expanded this many times lies on a negative cycle.
        cap = max(1, len(self._snapshot.vertices))
        expansions: Dict[str, int] = {}
        queue: Deque[str] = deque([source])
        pending: Set[str] = {source}
        while queue:
            u = queue.popleft()
            pending.discard(u)
            expansions[u] = expansions.get(u, 0) + 1
            d_u = distance[u]
            for v, w_uv in self._snapshot.outgoing(u).items():
                candidate = d_u + w_uv
                if candidate < distance.get(v, math.inf):
                    distance[v] = candidate
                    previous[v] = u
                    if v not in pending and expansions.get(v, 0) < cap:
                        pending.add(v)
                        queue.append(v)

        self._logger.debug(
            "Relaxation finished",
            extra={
                "source": source,
                "expanded": sum(expansions.values()),
                "capped": sum(1 for n in expansions.values() if n >= cap),
            },
        )
        return previous

    def _route(self, source: str, target: str) -> Tuple[str, ...]:
        return self._cache.get_or_compute(
            ("route", source, target), lambda: self._compute_route(source, target)
        )

    def _compute_route(self, source: str, target: str) -> Tuple[str, ...]:
        previous = self._relax(source)
        route = [target]
        visited = {target}
        current = target
        while current != source:
            prev = previous.get(current)
            # Unreached vertex, or a predecessor cycle left by negative weights.
            if prev is None or prev in visited:
                break
            route.append(prev)
            visited.add(prev)
            current = prev
        route.reverse()
        return tuple(route)

    @staticmethod
    def _is_valid(route: Tuple[str, ...], source: str, target: str) -> bool:
        return bool(route) and route[0] == source and route[-1] == target

    def routes(self, source: str, target: str) -> List[str]:
        """Find the lowest-weight route between two vertices.

        Args:
            source: The starting vertex.
            target: The target vertex.

        Returns:
            The vertices of the route, ``source`` and ``target`` included.

        Raises:
            UnreachableError: If ``target`` cannot be reached from ``source``.
        """
        route = self._route(source, target)
        if not self._is_valid(route, source, target):
            raise UnreachableError(
                f"Vertex '{target}' cannot be reached from '{source}'",
                source=source,
                target=target,
            )
        return list(route)

    def reachable(self, source: str, target: str) -> bool:
        """Return whether ``target`` can be reached from ``source``."""
        return self._is_valid(self._route(source, target), source, target)

    def traffic(self, source: str, target: str) -> float:
        """Return the summed weight of the lowest-weight route.

        Returns ``inf`` when ``target`` is unreachable and ``0`` when
        ``source == target``.
        """
        return self._cache.get_or_compute(
            ("traffic", source, target), lambda: self._compute_traffic(source, target)
        )

    def _compute_traffic(self, source: str, target: str) -> float:
        route = self._route(source, target)
        if not self._is_valid(route, source, target):
            return math.inf

        total = 0.0
        for u, v in zip(route, route[1:]):
            edges = self._snapshot.outgoing(u)
            if v not in edges:
                self._logger.warning(
                    "Route edge missing from snapshot, traffic truncated",
                    extra={"source": source, "target": target, "edge": (u, v)},
                )
                break
            total += edges[v]
        return total

    def depth(self, source: str, target: str) -> float:
        """Return the number of hops along the lowest-weight route.

        This is the hop count of the weight-shortest route, not of an
        unweighted search. Direction is taken into account; see
        :meth:`distance` for the undirected variant. Returns ``inf`` when
        unreachable.
        """
        return self._cache.get_or_compute(
            ("depth", source, target), lambda: self._compute_depth(source, target)
        )

    def _compute_depth(self, source: str, target: str) -> float:
        route = self._route(source, target)
        if not self._is_valid(route, source, target):
            return math.inf
        return len(route) - 1

    def distance(self, a: str, b: str) -> float:
        """Return the hop distance between two vertices in either direction."""
        return min(self.depth(a, b), self.depth(b, a))

    def edges_within(self, vertex: str, depth: int = -1) -> List[str]:
        """List the vertices reachable from ``vertex`` within ``depth`` hops.

        The search expands depth-first along outgoing edges and returns
        vertices in first-visited order, without ``vertex`` itself.

        Args:
            vertex: The vertex from which to start the search.
            depth: Maximum number of hops. A negative value means unlimited.
        """
        found = self._cache.get_or_compute(
            ("edges", vertex, depth), lambda: self._compute_edges(vertex, depth)
        )
        return list(found)

    def _compute_edges(self, vertex: str, depth: int) -> Tuple[str, ...]:
        limit = math.inf if depth < 0 else depth
        order: List[str] = []
        # Hops remaining when each vertex was last expanded.
        remaining: Dict[str, float] = {vertex: limit}

        stack: List[Tuple[Iterator[str], float]] = []
        if limit > 0:
            stack.append((iter(self._snapshot.outgoing(vertex)), limit))
        while stack:
            successors, left = stack[-1]
            v = next(successors, None)
            if v is None:
                stack.pop()
                continue
            if remaining.get(v, -1) >= left - 1:
                continue
            if v not in remaining:
                order.append(v)
            remaining[v] = left - 1
            if left - 1 > 0:
                stack.append((iter(self._snapshot.outgoing(v)), left - 1))
        return tuple(order)

    def weight_stats(
        self, vertex: str, mode: WeightMode = "sum"
    ) -> Union[int, float]:
        """Aggregate the weights of the edges entering ``vertex``.

        Args:
            vertex: The vertex whose incoming edges are aggregated.
            mode: ``"sum"`` for the total weight, ``"count"`` for the number
                of incoming edges, ``"mean"`` for the average weight (``0``
                when there are none).

        Raises:
            UnsupportedModeError: If ``mode`` is not one of the above.
        """
        total, count = self._cache.get_or_compute(
            ("weight", vertex), lambda: self._compute_weight(vertex)
        )
        if mode == "sum":
            return total
        if mode == "count":
            return count
        if mode == "mean":
            return total / count if count else 0.0
        raise UnsupportedModeError(
            f"The '{mode}' mode is unsupported, expected sum, count or mean",
            mode=str(mode),
        )

    def _compute_weight(self, vertex: str) -> Tuple[float, int]:
        total = 0.0
        count = 0
        for edges in self._snapshot.data.values():
            if vertex in edges:
                total += edges[vertex]
                count += 1
        return total, count
