"""A* Route Solver adapter.

This adapter wraps the A* search and adds:
- Stop id resolution
- Domain model output (RouteResult)
- Exceptions for unknown stops and unreachable goals
- Logging
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...config import RoutingConfig, get_config
from ...domain.errors import NoRouteFoundError, StopNotFoundError
from ...domain.models import RouteResult
from ...graph.astar import count_transfers, find_shortest_path, path_time
from ...graph.network import TransitGraph


@dataclass
class AStarRouteSolver:
    """Route solver using A* with transfer penalties.

    This adapter implements RouteSolverPort.

    Attributes:
        config: Routing configuration (penalty, heuristic speed)
    """

    config: RoutingConfig = field(default_factory=lambda: get_config().routing)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(self, graph: TransitGraph, departure: str, arrival: str) -> RouteResult:
        """Find the fastest path between two stops.

        Args:
            graph: The transit network graph.
            departure: Departure stop id.
            arrival: Arrival stop id.

        Returns:
            RouteResult with edges, total time and transfers. The result
            is empty when departure and arrival are the same stop.

        Raises:
            StopNotFoundError: If departure or arrival is not in the graph.
            NoRouteFoundError: If no path exists.
        """
        self._logger.debug(
            "Solving route",
            extra={"departure": departure, "arrival": arrival},
        )

        if not graph.has_stop(departure):
            raise StopNotFoundError(
                f"Departure stop not in graph: {departure}",
                stop_id=departure,
            )
        if not graph.has_stop(arrival):
            raise StopNotFoundError(
                f"Arrival stop not in graph: {arrival}",
                stop_id=arrival,
            )

        result = self._search(graph, departure, arrival)
        if result is None:
            self._logger.warning(
                "No route found",
                extra={"departure": departure, "arrival": arrival},
            )
            raise NoRouteFoundError(
                f"No path from {departure} to {arrival}",
                departure=departure,
                arrival=arrival,
            )

        self._logger.info(
            "Route found",
            extra={
                "departure": departure,
                "arrival": arrival,
                "stops": result.num_stops,
                "time_seconds": result.total_time_seconds,
                "transfers": result.transfers,
            },
        )
        return result

    def solve_safe(
        self, graph: TransitGraph, departure: str, arrival: str
    ) -> Optional[RouteResult]:
        """Find the fastest path, returning None on failure.

        Like solve(), but returns None instead of raising when a stop
        is unknown or the arrival is unreachable.
        """
        if not graph.has_stop(departure) or not graph.has_stop(arrival):
            return None
        return self._search(graph, departure, arrival)

    def _search(
        self, graph: TransitGraph, departure: str, arrival: str
    ) -> Optional[RouteResult]:
        start = graph.get_stop(departure)
        goal = graph.get_stop(arrival)
        edges = find_shortest_path(
            start,
            goal,
            transfer_penalty=self.config.transfer_penalty_seconds,
            max_speed_mps=self.config.max_transport_speed_mps,
        )
        if edges is None:
            return None
        return RouteResult(
            start=start,
            goal=goal,
            edges=tuple(edges),
            total_time_seconds=path_time(edges, self.config.transfer_penalty_seconds),
            transfers=count_transfers(edges),
        )
