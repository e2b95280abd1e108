"""Domain layer - Core network models and errors.

This module contains the stop/line/edge graph entities, result types
and typed errors used throughout the application. No external
dependencies.
"""

from .errors import (
    ConfigurationError,
    GraphError,
    InvariantViolationError,
    NoRouteFoundError,
    StopNotFoundError,
    TransitNetworkError,
)
from .models import (
    MAX_TRANSPORT_SPEED_MPS,
    Edge,
    GisPoint,
    Line,
    RouteResult,
    Stop,
    StructureReport,
    TransportType,
)

__all__ = [
    # Models
    "GisPoint",
    "Stop",
    "Line",
    "Edge",
    "TransportType",
    "MAX_TRANSPORT_SPEED_MPS",
    "RouteResult",
    "StructureReport",
    # Errors
    "TransitNetworkError",
    "GraphError",
    "StopNotFoundError",
    "NoRouteFoundError",
    "InvariantViolationError",
    "ConfigurationError",
]
