"""In-memory transit graph.

The graph owns every edge. Transport edges are built once from the
lines at construction and never change; walking edges are the only
mutable part and are rebuilt through ``recompute_walking_edges``.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..domain.errors import GraphError, InvariantViolationError, StopNotFoundError
from ..domain.models import (
    LAT_LON_RATIO,
    METERS_PER_DEGREE,
    Edge,
    GisPoint,
    Line,
    Stop,
    TransportType,
)

logger = logging.getLogger(__name__)


class TransitGraph:
    """Stops, lines and the edges derived from them.

    Args:
        stops: Every stop of the network (ids must be unique).
        lines: Scheduled lines; each must be non-empty and only
            reference stops from ``stops``.
        walking_speed_mps: Speed used to turn walking distances into
            travel times.

    Raises:
        GraphError: If the input is inconsistent.
    """

    def __init__(
        self,
        stops: Iterable[Stop],
        lines: Iterable[Line],
        walking_speed_mps: float = TransportType.WALKING.speed_mps,
    ) -> None:
        if walking_speed_mps <= 0:
            raise GraphError(f"Walking speed must be positive, got {walking_speed_mps}")

        self._stops: Dict[str, Stop] = {}
        for stop in stops:
            if stop.id in self._stops:
                raise GraphError(f"Duplicate stop id: {stop.id}")
            self._stops[stop.id] = stop

        self._lines: Tuple[Line, ...] = tuple(lines)
        if self._lines and not self._stops:
            raise GraphError("Lines given for an empty set of stops")

        self._walking_speed_mps = walking_speed_mps
        self._transport_edges: Tuple[Edge, ...] = self._build_transport_edges()
        self._walking_edges: List[Edge] = []
        self._walking_distance: Optional[float] = None

        logger.debug(
            "Graph built",
            extra={
                "stops": len(self._stops),
                "lines": len(self._lines),
                "edges": len(self._transport_edges),
            },
        )

    def __len__(self) -> int:
        return len(self._stops)

    def __contains__(self, stop: object) -> bool:
        if isinstance(stop, Stop):
            return self._stops.get(stop.id) is stop
        return stop in self._stops

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return tuple(self._stops.values())

    @property
    def lines(self) -> Tuple[Line, ...]:
        return self._lines

    @property
    def edges(self) -> Tuple[Edge, ...]:
        """Transport and walking edges."""
        return self._transport_edges + tuple(self._walking_edges)

    @property
    def transport_edges(self) -> Tuple[Edge, ...]:
        return self._transport_edges

    @property
    def walking_edges(self) -> Tuple[Edge, ...]:
        return tuple(self._walking_edges)

    @property
    def walking_distance(self) -> Optional[float]:
        """Threshold of the current walking edges, None when there are none."""
        return self._walking_distance

    def has_stop(self, stop_id: str) -> bool:
        return stop_id in self._stops

    def get_stop(self, stop_id: str) -> Stop:
        """Return the stop with the given id.

        Raises:
            StopNotFoundError: If no such stop exists.
        """
        try:
            return self._stops[stop_id]
        except KeyError:
            raise StopNotFoundError(f"Stop not found: {stop_id}", stop_id=stop_id)

    def find_closest_stop(self, point: GisPoint) -> Optional[Stop]:
        """Return the stop nearest to a point, None on an empty graph."""
        if not self._stops:
            return None
        return min(
            self._stops.values(),
            key=lambda stop: (stop.distance_to(point), stop.sort_key),
        )

    def find_stops_by_prefix(self, prefix: str) -> List[Stop]:
        """Return stops whose name starts with ``prefix``, ignoring case."""
        needle = prefix.strip().lower()
        return sorted(
            stop for stop in self._stops.values() if stop.name.lower().startswith(needle)
        )

    # ------------------------------------------------------------------
    # Walking edges
    # ------------------------------------------------------------------

    def remove_walking_edges(self) -> None:
        """Drop every walking edge and the matching neighbour entries."""
        for stop in self._stops.values():
            stop.remove_walking_edges()
        self._walking_edges.clear()
        self._walking_distance = None

    def recompute_walking_edges(self, max_distance: float) -> int:
        """Rebuild walking edges between stops at most ``max_distance`` apart.

        Any existing walking edges are removed first, so the resulting
        set only depends on the threshold and the stop locations.
        Each qualifying pair gets one edge in each direction.

        Returns:
            The number of walking edges created.

        Raises:
            GraphError: If ``max_distance`` is negative.
        """
        if max_distance < 0:
            raise GraphError(f"Walking distance must not be negative, got {max_distance}")

        self.remove_walking_edges()

        # Sweep over longitude; once the east-west gap alone exceeds the
        # threshold no later stop can qualify.
        ordered = sorted(self._stops.values(), key=lambda s: (s.location.lon, s.id))
        max_lon_gap = max_distance / (METERS_PER_DEGREE * LAT_LON_RATIO)
        for i, stop in enumerate(ordered):
            for other in ordered[i + 1 :]:
                if other.location.lon - stop.location.lon > max_lon_gap:
                    break
                distance = stop.distance_to(other)
                if distance <= max_distance:
                    self._add_walking_pair(stop, other, distance)

        self._walking_distance = max_distance
        logger.debug(
            "Walking edges recomputed",
            extra={"max_distance": max_distance, "edges": len(self._walking_edges)},
        )
        return len(self._walking_edges)

    def _add_walking_pair(self, a: Stop, b: Stop, distance: float) -> None:
        travel_time = max(1, round(distance / self._walking_speed_mps))
        for from_stop, to_stop in ((a, b), (b, a)):
            edge = Edge(
                from_stop=from_stop,
                to_stop=to_stop,
                transport_type=TransportType.WALKING,
                line=None,
                travel_time=travel_time,
                distance=distance,
            )
            self._attach(edge)
            self._walking_edges.append(edge)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _validate_lines(self) -> None:
        for line in self._lines:
            timepoints = line.timepoints
            if not timepoints:
                raise GraphError(f"Line {line.id} has no stops")
            for stop, _ in timepoints:
                if stop not in self:
                    raise GraphError(f"Line {line.id} references unknown stop {stop.id}")
            for (from_stop, t0), (to_stop, t1) in zip(timepoints, timepoints[1:]):
                if t1 < t0:
                    raise GraphError(
                        f"Line {line.id} goes back in time between "
                        f"{from_stop.id} and {to_stop.id}"
                    )

    def _build_transport_edges(self) -> Tuple[Edge, ...]:
        # Validate everything before touching any stop.
        self._validate_lines()
        edges: List[Edge] = []
        for line in self._lines:
            timepoints = line.timepoints
            for stop, _ in timepoints:
                stop.add_line(line)
            for (from_stop, t0), (to_stop, t1) in zip(timepoints, timepoints[1:]):
                edge = Edge(
                    from_stop=from_stop,
                    to_stop=to_stop,
                    transport_type=line.transport_type or TransportType.OTHER,
                    line=line,
                    travel_time=t1 - t0,
                    distance=from_stop.distance_to(to_stop),
                )
                self._attach(edge)
                edges.append(edge)
        return tuple(edges)

    def _attach(self, edge: Edge) -> None:
        if edge.from_stop not in self or edge.to_stop not in self:
            raise InvariantViolationError(
                f"Edge {edge!r} has an endpoint outside the graph",
                stop_id=edge.from_stop.id,
            )
        edge.from_stop.add_edge_out(edge)
        edge.to_stop.add_edge_in(edge)
