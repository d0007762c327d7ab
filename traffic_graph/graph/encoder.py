"""Numeric encodings of vertex identity.

Positions come from the snapshot's positional index, which follows the
vertex enumeration order (sources in insertion order, each followed by
its destinations, first-seen wins).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..adapters.cache import create_cache
from ..domain.errors import InconsistentStateError
from ..domain.models import Snapshot
from ..ports.cache import CachePort


class VertexEncoder:
    """Zero-hot, one-hot and label encodings for one snapshot.

    Every method returns a fresh copy, so callers may mutate the result
    without affecting later calls.
    """

    def __init__(self, snapshot: Snapshot, cache: Optional[CachePort] = None) -> None:
        self._snapshot = snapshot
        self._cache = cache if cache is not None else create_cache("encoder")

    def _position(self, vertex: str) -> int:
        position = self._snapshot.positions.get(vertex)
        if position is None:
            raise InconsistentStateError(
                f"The '{vertex}' vertex is in the snapshot's vertex list "
                "but not in its positional index",
                vertex=vertex,
            )
        return position

    def zero_hot(self) -> List[int]:
        """Return a vector of zeros, one element per vertex.

        Pairs well with :meth:`one_hot`.
        """
        raw = self._cache.get_or_compute(
            ("zero_hot",), lambda: (0,) * self._snapshot.size
        )
        return list(raw)

    def one_hot(self) -> Dict[str, List[int]]:
        """Map each vertex to a one-hot vector as long as the vertex count.

        Raises:
            InconsistentStateError: If a vertex has no position.
        """
        raw = self._cache.get_or_compute(("one_hot",), self._compute_one_hot)
        return {vertex: list(vector) for vertex, vector in raw.items()}

    def _compute_one_hot(self) -> Dict[str, List[int]]:
        size = self._snapshot.size
        encoding: Dict[str, List[int]] = {}
        for vertex in self._snapshot.vertices:
            vector = [0] * size
            vector[self._position(vertex)] = 1
            encoding[vertex] = vector
        return encoding

    def label(self, start_from: int = 0) -> Dict[str, int]:
        """Map each vertex to an integer label.

        Args:
            start_from: The label of the first vertex. Default is ``0``.

        Raises:
            InconsistentStateError: If a vertex has no position.
        """
        raw = self._cache.get_or_compute(
            ("label", start_from), lambda: self._compute_label(start_from)
        )
        return dict(raw)

    def _compute_label(self, start_from: int) -> Dict[str, int]:
        return {v: start_from + self._position(v) for v in self._snapshot.vertices}
