"""Top-level package for the transit network analyzer.

The graph engine lives in :mod:`transitnet.graph`: the stop/line/edge
model, strongly connected components, articulation points and A*
routing with transfer penalties. The remaining packages wrap it for
applications (configuration, adapters, services, command line).
"""

from .domain.models import Edge, GisPoint, Line, Stop, TransportType
from .graph import (
    TransitGraph,
    find_articulation_points,
    find_components,
    find_shortest_path,
    load_graph,
)

__all__ = [
    "GisPoint",
    "Stop",
    "Line",
    "Edge",
    "TransportType",
    "TransitGraph",
    "load_graph",
    "find_components",
    "find_articulation_points",
    "find_shortest_path",
]
