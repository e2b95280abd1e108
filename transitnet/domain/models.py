"""Domain models for the transit network analyzer.

The network is a graph of ``Stop`` nodes joined by directed ``Edge``
objects. Transport edges come from the scheduled ``Line`` sequences,
walking edges are derived from the distance between stops.

Stops and lines are plain mutable classes because the graph wires
edges into them after construction; points, edges and results are
frozen dataclasses. Equality of stops, lines and edges is identity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple, Union

# Local planar approximation, valid around one city (Wellington).
METERS_PER_DEGREE = 111_320.0
LAT_LON_RATIO = 0.73


class TransportType(Enum):
    """Mode of an edge."""

    BUS = "bus"
    TRAIN = "train"
    WALKING = "walking"
    OTHER = "other"

    @property
    def speed_mps(self) -> float:
        """Cruising speed of this mode in meters per second."""
        return _SPEEDS_MPS[self]

    @classmethod
    def from_label(cls, label: str) -> TransportType:
        """Parse a mode label such as ``"bus"`` or ``"Rail"``.

        Unknown labels map to OTHER.
        """
        text = label.strip().lower()
        if text in ("train", "rail"):
            return cls.TRAIN
        if text == "bus":
            return cls.BUS
        if text in ("walk", "walking"):
            return cls.WALKING
        return cls.OTHER

    @classmethod
    def from_line_id(cls, line_id: str) -> TransportType:
        """Infer the mode of a line from its identifier."""
        text = line_id.lower()
        if "train" in text or "rail" in text:
            return cls.TRAIN
        if "bus" in text:
            return cls.BUS
        return cls.OTHER


_SPEEDS_MPS = {
    TransportType.BUS: 30 / 3.6,
    TransportType.TRAIN: 80 / 3.6,
    TransportType.WALKING: 5 / 3.6,
    TransportType.OTHER: 30 / 3.6,
}

MAX_TRANSPORT_SPEED_MPS = max(_SPEEDS_MPS.values())


def format_duration(seconds: int) -> str:
    """Format seconds as ``H:MM:SS``."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02}:{secs:02}"


@dataclass(frozen=True, slots=True)
class GisPoint:
    """A (longitude, latitude) position."""

    lon: float
    lat: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.lat}")
        if not -180 <= self.lon <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.lon}"
            )

    def distance(self, other: GisPoint) -> float:
        """Return the distance in meters to another point.

        Uses a fixed latitude/longitude ratio instead of a geodesic
        computation, which is accurate enough within a city.
        """
        d_lat = (self.lat - other.lat) * METERS_PER_DEGREE
        d_lon = (self.lon - other.lon) * METERS_PER_DEGREE * LAT_LON_RATIO
        return math.hypot(d_lat, d_lon)

    def move(self, d_lon: float, d_lat: float) -> GisPoint:
        """Return a copy of this point translated by the given offsets."""
        return GisPoint(self.lon + d_lon, self.lat + d_lat)


@dataclass(eq=False)
class Stop:
    """A transit node.

    Edges are owned by the graph; a stop only references the ones that
    start or end at it. The neighbour views are computed from those
    references so they always agree with the edge sets.

    Attributes:
        id: Unique stop identifier
        name: Display name
        location: Geographic position
    """

    id: str
    name: str
    location: GisPoint

    _lines: List[Line] = field(default_factory=list, repr=False)
    _edges_out: List[Edge] = field(default_factory=list, repr=False)
    _edges_in: List[Edge] = field(default_factory=list, repr=False)

    @classmethod
    def at(cls, stop_id: str, name: str, lon: float, lat: float) -> Stop:
        return cls(id=stop_id, name=name, location=GisPoint(lon, lat))

    def __lt__(self, other: Stop) -> bool:
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return f"{self.id}: {self.name} at ({self.location.lon}, {self.location.lat})"

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.name, self.id)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def edges_out(self) -> Tuple[Edge, ...]:
        return tuple(self._edges_out)

    @property
    def edges_in(self) -> Tuple[Edge, ...]:
        return tuple(self._edges_in)

    @property
    def transport_neighbours(self) -> frozenset[Stop]:
        """Stops joined to this one by a transport edge, either direction."""
        return frozenset(self._neighbours(walking=False))

    @property
    def walking_neighbours(self) -> frozenset[Stop]:
        """Stops joined to this one by a walking edge, either direction."""
        return frozenset(self._neighbours(walking=True))

    @property
    def neighbours(self) -> frozenset[Stop]:
        """Undirected view over every edge touching this stop."""
        found = {edge.to_stop for edge in self._edges_out}
        found.update(edge.from_stop for edge in self._edges_in)
        found.discard(self)
        return frozenset(found)

    def _neighbours(self, walking: bool) -> Iterable[Stop]:
        for edge in self._edges_out:
            if edge.is_walking == walking and edge.to_stop is not self:
                yield edge.to_stop
        for edge in self._edges_in:
            if edge.is_walking == walking and edge.from_stop is not self:
                yield edge.from_stop

    def distance_to(self, other: Union[Stop, GisPoint]) -> float:
        """Return the distance in meters to a stop or a point."""
        point = other.location if isinstance(other, Stop) else other
        return self.location.distance(point)

    def at_location(self, point: GisPoint) -> bool:
        """Check if the stop sits exactly on the given point."""
        return self.location == point

    def add_line(self, line: Line) -> None:
        if line not in self._lines:
            self._lines.append(line)

    def add_edge_out(self, edge: Edge) -> None:
        self._edges_out.append(edge)

    def add_edge_in(self, edge: Edge) -> None:
        self._edges_in.append(edge)

    def remove_walking_edges(self) -> None:
        """Drop every walking edge reference held by this stop."""
        self._edges_out = [e for e in self._edges_out if not e.is_walking]
        self._edges_in = [e for e in self._edges_in if not e.is_walking]


@dataclass(eq=False)
class Line:
    """An ordered, scheduled sequence of stops.

    Attributes:
        id: Line identifier
        transport_type: Mode of the line, inferred from the id when omitted
    """

    id: str
    transport_type: Optional[TransportType] = None
    _timepoints: List[Tuple[Stop, int]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.transport_type is None:
            self.transport_type = TransportType.from_line_id(self.id)

    def add_stop(self, stop: Stop, time: int) -> None:
        """Append a stop reached at ``time`` seconds."""
        self._timepoints.append((stop, int(time)))

    @property
    def timepoints(self) -> Tuple[Tuple[Stop, int], ...]:
        return tuple(self._timepoints)

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return tuple(stop for stop, _ in self._timepoints)

    @property
    def times(self) -> Tuple[int, ...]:
        return tuple(time for _, time in self._timepoints)


@dataclass(frozen=True, eq=False, slots=True)
class Edge:
    """A directed connection between two stops.

    Attributes:
        from_stop: Origin stop
        to_stop: Destination stop
        transport_type: Mode used on this edge
        line: Owning line, None for walking edges
        travel_time: Travel time in whole seconds
        distance: Straight-line distance in meters
    """

    from_stop: Stop
    to_stop: Stop
    transport_type: TransportType
    line: Optional[Line]
    travel_time: int
    distance: float = 0.0

    def __repr__(self) -> str:
        line_id = self.line.id if self.line is not None else None
        return (
            f"Edge({self.from_stop.id}->{self.to_stop.id}, "
            f"{self.transport_type.value}, line={line_id}, {self.travel_time}s)"
        )

    @property
    def is_walking(self) -> bool:
        return self.transport_type is TransportType.WALKING


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a route computation between two stops.

    Attributes:
        start: Departure stop
        goal: Arrival stop
        edges: Ordered edges from start to goal
        total_time_seconds: Travel time including transfer penalties
        transfers: Number of penalised changes along the path
    """

    start: Stop
    goal: Stop
    edges: Tuple[Edge, ...] = field(default_factory=tuple)
    total_time_seconds: int = 0
    transfers: int = 0

    @property
    def is_empty(self) -> bool:
        """Check if the route has no edges (start equals goal)."""
        return len(self.edges) == 0

    @property
    def stops(self) -> Tuple[Stop, ...]:
        """Stops visited in order, start included."""
        return (self.start,) + tuple(edge.to_stop for edge in self.edges)

    @property
    def num_stops(self) -> int:
        return len(self.stops)

    def describe(self) -> str:
        """Human-readable itinerary, one line per edge."""
        if self.is_empty:
            return f"Already at {self.start.name} ({self.start.id})."

        legs: List[str] = []
        for edge in self.edges:
            via = edge.line.id if edge.line is not None else "walk"
            legs.append(
                f"  {edge.from_stop.name} -> {edge.to_stop.name} "
                f"[{edge.transport_type.value} {via}, {format_duration(edge.travel_time)}]"
            )
        path_str = " -> ".join(stop.id for stop in self.stops)
        return (
            f"Shortest path: {path_str}\n"
            + "\n".join(legs)
            + f"\nTotal time: {format_duration(self.total_time_seconds)}"
            f" ({self.transfers} transfers)"
        )


@dataclass(frozen=True)
class StructureReport:
    """Structural analysis of a graph snapshot.

    Attributes:
        components: Strongly connected component id for every stop
        articulation_points: Cut vertices of the undirected view
    """

    components: Mapping[Stop, int] = field(default_factory=dict)
    articulation_points: frozenset[Stop] = field(default_factory=frozenset)

    @property
    def component_count(self) -> int:
        return len(set(self.components.values()))

    def members(self, component_id: int) -> List[Stop]:
        """Return the stops of one component ordered by (name, id)."""
        return sorted(
            stop for stop, cid in self.components.items() if cid == component_id
        )

    def component_of(self, stop: Stop) -> Optional[int]:
        return self.components.get(stop)
