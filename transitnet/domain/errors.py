"""Typed domain errors for the transit network analyzer.

Every failure the engine reports is one of these types. The core
algorithms never raise for a missing route (they return ``None``);
``NoRouteFoundError`` only exists for the solver adapter and service
layers that want an exception instead.

All errors inherit from TransitNetworkError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransitNetworkError(Exception):
    """Base error for the transit network domain.

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
class GraphError(TransitNetworkError):
    """Invalid input while building or mutating the graph.

    Raised for malformed network files, lines referencing unknown
    stops, empty stop sets and negative walking distances. A graph
    is never left partially constructed.

    Attributes:
        file_path: Path to the network data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class StopNotFoundError(TransitNetworkError):
    """Stop id not found in the graph.

    Attributes:
        stop_id: The stop id that was not found
    """

    stop_id: str = ""


@dataclass
class NoRouteFoundError(TransitNetworkError):
    """No path exists between the requested stops.

    Attributes:
        departure: Departure stop id
        arrival: Arrival stop id
    """

    departure: str = ""
    arrival: str = ""


@dataclass
class InvariantViolationError(TransitNetworkError):
    """The graph or a search structure is internally inconsistent.

    This points at a construction bug upstream, e.g. an edge whose
    endpoint is not part of the graph or a predecessor chain that
    loops during path reconstruction.

    Attributes:
        stop_id: Stop at which the inconsistency was detected
    """

    stop_id: Optional[str] = None


@dataclass
class ConfigurationError(TransitNetworkError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
