"""Shared fixtures for building small transit networks."""

from __future__ import annotations

import math
import os
import random
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from transitnet.config import reset_config
from transitnet.container import reset_container
from transitnet.domain.models import (
    LAT_LON_RATIO,
    MAX_TRANSPORT_SPEED_MPS,
    METERS_PER_DEGREE,
    Line,
    Stop,
    TransportType,
)
from transitnet.graph.network import TransitGraph

BASE_LON = 174.77
BASE_LAT = -41.28


def _make_stop(stop_id: str, x: float = 0.0, y: float = 0.0, name: Optional[str] = None) -> Stop:
    """Stop placed ``x`` meters east and ``y`` meters north of the base point."""
    lon = BASE_LON + x / (METERS_PER_DEGREE * LAT_LON_RATIO)
    lat = BASE_LAT + y / METERS_PER_DEGREE
    return Stop.at(stop_id, name or f"Stop {stop_id}", lon, lat)


def _make_line(
    line_id: str,
    stops: Sequence[Stop],
    times: Sequence[int],
    transport_type: Optional[TransportType] = TransportType.BUS,
) -> Line:
    line = Line(line_id, transport_type=transport_type)
    for stop, time in zip(stops, times):
        line.add_stop(stop, time)
    return line


@pytest.fixture(autouse=True)
def fresh_singletons(monkeypatch):
    for name in list(os.environ):
        if name.startswith("TNA_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def make_stop() -> Callable[..., Stop]:
    return _make_stop


@pytest.fixture
def make_line() -> Callable[..., Line]:
    return _make_line


@pytest.fixture
def chain_graph() -> TransitGraph:
    """A -> B -> C -> D on one bus line, 100 m apart, 60 s per hop."""
    stops = [_make_stop(s, x=100.0 * i) for i, s in enumerate("ABCD")]
    line = _make_line("bus1", stops, [0, 60, 120, 180])
    return TransitGraph(stops, [line])


@pytest.fixture
def two_triangles() -> TransitGraph:
    """Two directed 3-cycles 5 km apart sharing no stop."""
    left = [_make_stop(s, x=100.0 * i, y=50.0 * (i % 2)) for i, s in enumerate("ABC")]
    right = [_make_stop(s, x=5000.0 + 100.0 * i, y=50.0 * (i % 2)) for i, s in enumerate("XYZ")]
    lines = [
        _make_line("left", left + left[:1], [0, 60, 120, 180]),
        _make_line("right", right + right[:1], [0, 60, 120, 180]),
    ]
    return TransitGraph(left + right, lines)


def random_network(seed: int, n_stops: int = 7, n_lines: int = 4) -> TransitGraph:
    """Small random network whose travel times never beat the fastest mode."""
    rng = random.Random(seed)
    stops = [
        _make_stop(f"S{i}", x=rng.uniform(0, 1500), y=rng.uniform(0, 1500))
        for i in range(n_stops)
    ]
    modes = [TransportType.BUS, TransportType.TRAIN]
    lines: List[Line] = []
    for line_no in range(n_lines):
        sequence = rng.sample(stops, rng.randint(2, min(4, n_stops)))
        times = [0]
        for a, b in zip(sequence, sequence[1:]):
            minimum = math.ceil(a.distance_to(b) / MAX_TRANSPORT_SPEED_MPS)
            times.append(times[-1] + minimum + rng.randint(1, 120))
        lines.append(_make_line(f"L{line_no}", sequence, times, rng.choice(modes)))
    return TransitGraph(stops, lines)


@pytest.fixture
def network_factory() -> Callable[..., TransitGraph]:
    return random_network


def undirected_component_count(stops: Sequence[Stop], removed: Optional[Stop] = None) -> int:
    """Connected components of the neighbour view, optionally without one stop."""
    seen: Dict[Stop, bool] = {}
    count = 0
    for root in stops:
        if root is removed or root in seen:
            continue
        count += 1
        seen[root] = True
        stack = [root]
        while stack:
            stop = stack.pop()
            for neighbour in stop.neighbours:
                if neighbour is not removed and neighbour not in seen:
                    seen[neighbour] = True
                    stack.append(neighbour)
    return count


@pytest.fixture
def component_counter() -> Callable[..., int]:
    return undirected_component_count
