"""Graph ports - Abstractions for network loading and analysis.

These protocols define the contracts for graph operations: loading the
transit network, computing routes and analysing its structure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import RouteResult, Stop, StructureReport
    from ..graph.network import TransitGraph


class GraphRepositoryPort(Protocol):
    """Port for loading the transit network.

    Implementation: adapters/graph/text_repository.py

    The repository is responsible for loading and caching the
    network graph from persistent storage.
    """

    def load(self) -> TransitGraph:
        """Load the transit graph.

        Returns:
            The graph with its transport edges built.
        """
        ...

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        """Get a stop by id.

        Args:
            stop_id: The stop id to look up.

        Returns:
            The stop, or None if not found.
        """
        ...

    def list_stops(self) -> Sequence[Stop]:
        """List all stops ordered by (name, id)."""
        ...


class RouteSolverPort(Protocol):
    """Port for route computation.

    Wraps: graph/astar.py
    """

    def solve(
        self,
        graph: TransitGraph,
        departure: str,
        arrival: str,
    ) -> RouteResult:
        """Find the fastest path between two stops.

        Args:
            graph: The transit network graph.
            departure: Departure stop id.
            arrival: Arrival stop id.

        Returns:
            RouteResult with the edges, total time and transfer count.
        """
        ...


class StructureAnalyzerPort(Protocol):
    """Port for structural analysis.

    Wraps: graph/components.py and graph/articulation.py
    """

    def analyze(self, graph: TransitGraph) -> StructureReport:
        """Label components and find articulation points."""
        ...
