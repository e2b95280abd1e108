"""Text Graph Repository adapter.

This adapter wraps the graph loading logic and adds:
- Configuration injection (paths from config)
- Caching of the loaded graph
- Default walking distance from config
- Better error handling
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...config import GraphConfig, RoutingConfig, get_config
from ...domain.errors import GraphError, StopNotFoundError
from ...domain.models import Stop
from ...graph.load_graph import load_graph
from ...graph.network import TransitGraph


@dataclass
class TextGraphRepository:
    """Graph repository that loads the tab-separated network files.

    This adapter implements GraphRepositoryPort.

    Attributes:
        config: Graph configuration (paths, file names, walking distance)
        routing: Routing configuration (walking speed)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    routing: RoutingConfig = field(default_factory=lambda: get_config().routing)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _graph: Optional[TransitGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> TransitGraph:
        """Load the transit graph from the network files.

        Returns:
            The graph, with walking edges for the configured default
            distance when it is positive.

        Raises:
            GraphError: If the graph cannot be loaded.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug(
            "Loading graph",
            extra={
                "stops_path": str(self.config.stops_path),
                "lines_path": str(self.config.lines_path),
            },
        )

        for path in (self.config.stops_path, self.config.lines_path):
            if not path.exists():
                raise GraphError("Network file not found", file_path=str(path))

        try:
            graph = load_graph(
                self.config.stops_path,
                self.config.lines_path,
                walking_speed_mps=self.routing.walking_speed_mps,
            )
        except (OSError, ValueError, IndexError) as e:
            raise GraphError(
                f"Failed to load graph: {e}",
                file_path=str(self.config.data_dir),
                cause=e,
            )

        if self.config.default_walking_distance > 0:
            graph.recompute_walking_edges(self.config.default_walking_distance)

        self._graph = graph
        self._logger.info(
            "Graph loaded",
            extra={
                "stops": len(graph),
                "lines": len(graph.lines),
                "edges": len(graph.edges),
            },
        )
        return graph

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        """Get a stop by id.

        Args:
            stop_id: The stop id to look up.

        Returns:
            The stop, or None if not found.
        """
        graph = self.load()
        if not graph.has_stop(stop_id):
            return None
        return graph.get_stop(stop_id)

    def get_stop_or_raise(self, stop_id: str) -> Stop:
        """Get a stop by id, raising if not found.

        Raises:
            StopNotFoundError: If the stop is not found.
        """
        stop = self.get_stop(stop_id)
        if stop is None:
            raise StopNotFoundError(f"Stop not found: {stop_id}", stop_id=stop_id)
        return stop

    def list_stops(self) -> Sequence[Stop]:
        """List all stops ordered by (name, id)."""
        return sorted(self.load().stops)

    def clear_cache(self) -> None:
        """Forget the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
