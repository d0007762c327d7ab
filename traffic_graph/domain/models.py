"""Immutable domain models for the traffic graph.

Weight updates are a tagged variant: an update is either an
``Absolute`` weight or a ``Relative`` expression applied to the
current weight of an edge. ``Snapshot`` is the frozen point-in-time
view that every query component is built from.
"""

from __future__ import annotations

import operator
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from .adjacency import (
    FrozenAdjacency,
    enumerate_vertices,
    freeze_adjacency,
    index_positions,
)
from .errors import InvalidExpressionError

_OPERATORS: Dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}

_SYMBOLS: Dict[str, str] = {
    "+=": "add",
    "-=": "subtract",
    "*=": "multiply",
    "/=": "divide",
}


@dataclass(frozen=True, slots=True)
class Absolute:
    """Set the edge weight to ``weight`` regardless of its current value."""

    weight: float

    def apply(self, current: float) -> float:
        return float(self.weight)


@dataclass(frozen=True, slots=True)
class Relative:
    """Combine the current edge weight with ``operand``.

    Attributes:
        operator: One of ``add``, ``subtract``, ``multiply``, ``divide``
        operand: Right-hand side of the operation
    """

    operator: str
    operand: float

    def apply(self, current: float) -> float:
        """Evaluate the expression against ``current``.

        Raises:
            InvalidExpressionError: If the operator is unknown or the
                division has a zero operand.
        """
        fn = _OPERATORS.get(self.operator)
        if fn is None:
            raise InvalidExpressionError(
                f"Unknown operator '{self.operator}', expected one of: "
                + ", ".join(_OPERATORS),
                expression=self.operator,
            )
        try:
            return float(fn(current, self.operand))
        except ZeroDivisionError as e:
            raise InvalidExpressionError(
                f"Cannot divide weight {current} by zero",
                expression=self.operator,
                cause=e,
            )


WeightUpdate = Union[Absolute, Relative]
UpdateLike = Union[Absolute, Relative, int, float, str]


def parse_update(value: UpdateLike) -> WeightUpdate:
    """Normalize a caller-supplied value into a weight update.

    Numbers become ``Absolute``. Strings may be a plain number or use
    the compound form ``+=``, ``-=``, ``*=``, ``/=`` followed by the
    operand, e.g. ``"+=2"``.

    Raises:
        InvalidExpressionError: If the value cannot be interpreted.
    """
    if isinstance(value, (Absolute, Relative)):
        return value
    if isinstance(value, bool):
        raise InvalidExpressionError(
            f"Boolean {value!r} is not a weight", expression=repr(value)
        )
    if isinstance(value, (int, float)):
        return Absolute(float(value))
    if isinstance(value, str):
        text = value.strip()
        op = _SYMBOLS.get(text[:2])
        try:
            if op is not None:
                return Relative(op, float(text[2:]))
            return Absolute(float(text))
        except ValueError as e:
            raise InvalidExpressionError(
                f"Unparseable weight expression '{value}'",
                expression=value,
                cause=e,
            )
    raise InvalidExpressionError(
        f"Unsupported weight update of type {type(value).__name__}",
        expression=repr(value),
    )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Frozen view of a graph at a point in time.

    The adjacency data is deep-copied into read-only mappings, so a
    snapshot never observes later mutations of the store it came from.

    Attributes:
        data: Read-only adjacency map (source -> dest -> weight)
        vertices: Vertex enumeration in first-seen order
        timestamp: Capture time in seconds since the epoch
        positions: Positional index (vertex -> position) used for encodings
    """

    data: FrozenAdjacency
    vertices: Tuple[str, ...] = ()
    timestamp: float = field(default_factory=time.time)
    positions: Optional[Mapping[str, int]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", freeze_adjacency(self.data))
        vertices = tuple(self.vertices) or tuple(enumerate_vertices(self.data))
        object.__setattr__(self, "vertices", vertices)
        if self.positions is None:
            positions = index_positions(vertices)
        else:
            positions = MappingProxyType(dict(self.positions))
        object.__setattr__(self, "positions", positions)

    @property
    def size(self) -> int:
        """Return the number of vertices in the snapshot."""
        return len(self.vertices)

    def outgoing(self, vertex: str) -> Mapping[str, float]:
        """Return the outgoing edges of ``vertex`` (empty if none)."""
        return self.data.get(vertex, _EMPTY)


_EMPTY: Mapping[str, float] = MappingProxyType({})
