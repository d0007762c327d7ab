"""Typed domain errors for the traffic graph.

Every error inherits from TrafficGraphError and can optionally wrap
a root cause exception for debugging. Errors are raised at the call
that detects them; nothing in the package retries or swallows them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TrafficGraphError(Exception):
    """Base error for the traffic graph domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidExpressionError(TrafficGraphError):
    """A weight update could not be evaluated.

    Raised for operators other than add/subtract/multiply/divide,
    for unparseable update strings and for division by zero.

    Attributes:
        expression: The offending operator or raw expression
    """

    expression: str = ""


@dataclass
class UnreachableError(TrafficGraphError):
    """No valid route exists between the requested vertices.

    Attributes:
        source: Starting vertex
        target: Target vertex
    """

    source: str = ""
    target: str = ""


@dataclass
class UnsupportedModeError(TrafficGraphError):
    """Weight aggregation was requested with an unknown mode.

    Attributes:
        mode: The mode that was requested
    """

    mode: str = ""


@dataclass
class InconsistentStateError(TrafficGraphError):
    """A snapshot's vertex list disagrees with its positional index.

    Attributes:
        vertex: The vertex missing from the positional index
    """

    vertex: str = ""


@dataclass
class GraphDataError(TrafficGraphError):
    """Adjacency data handed to the store is malformed."""


@dataclass
class ConfigurationError(TrafficGraphError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
