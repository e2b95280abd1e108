"""Network analysis service - Main orchestrator.

This service wires the repository, the route solver and the structure
analyzer together behind one entry point used by the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import (
    GraphError,
    NoRouteFoundError,
    StopNotFoundError,
)
from ..domain.models import RouteResult, StructureReport
from ..graph.network import TransitGraph
from ..ports.graph import GraphRepositoryPort, RouteSolverPort, StructureAnalyzerPort


@dataclass
class NetworkAnalysisService:
    """Main service for analysing a transit network.

    Attributes:
        graph_repository: Loads the transit graph
        route_solver: Computes fastest paths
        structure_analyzer: Components and articulation points
    """

    graph_repository: GraphRepositoryPort
    route_solver: RouteSolverPort
    structure_analyzer: StructureAnalyzerPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def graph(self) -> TransitGraph:
        return self.graph_repository.load()

    def set_walking_distance(self, max_distance: float) -> int:
        """Replace the walking edges with those for ``max_distance``.

        A distance of zero removes walking edges altogether.

        Returns:
            The number of walking edges now in the graph.

        Raises:
            GraphError: If the distance is negative.
        """
        graph = self.graph
        if max_distance < 0:
            raise GraphError(f"Walking distance must not be negative, got {max_distance}")
        if max_distance == 0:
            graph.remove_walking_edges()
            count = 0
        else:
            count = graph.recompute_walking_edges(max_distance)
        self._logger.info(
            "Walking distance set",
            extra={"max_distance": max_distance, "walking_edges": count},
        )
        return count

    def route(self, departure: str, arrival: str) -> RouteResult:
        """Compute the fastest route between two stop ids.

        Raises:
            StopNotFoundError: If a stop id is unknown.
            NoRouteFoundError: If the arrival is unreachable.
        """
        self._logger.info(
            "Starting route computation",
            extra={"departure": departure, "arrival": arrival},
        )
        return self.route_solver.solve(self.graph, departure, arrival)

    def route_safe(
        self, departure: str, arrival: str
    ) -> tuple[Optional[RouteResult], Optional[str]]:
        """Compute a route, returning an error message instead of raising.

        Returns:
            Tuple of (RouteResult or None, error message or None).
        """
        try:
            return self.route(departure, arrival), None
        except StopNotFoundError as e:
            return None, f"Error: {e.message}"
        except NoRouteFoundError as e:
            return None, f"No path found between {e.departure} and {e.arrival}"
        except GraphError as e:
            self._logger.error("Graph unavailable", extra={"error": str(e)})
            return None, f"Graph error: {e}"

    def analyze(self) -> StructureReport:
        """Label components and find articulation points of the current graph."""
        return self.structure_analyzer.analyze(self.graph)
