"""Shortest-time path search using A*.

The cost of a path is its elapsed time in seconds: the travel time of
every edge plus a fixed transfer penalty whenever the traveller changes
mode or line. The heuristic is the straight-line distance to the goal
at the fastest cruising speed of any mode, so it never overestimates.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from ..domain.errors import InvariantViolationError
from ..domain.models import MAX_TRANSPORT_SPEED_MPS, Edge, Stop

logger = logging.getLogger(__name__)

TRANSFER_PENALTY_SECONDS = 600


@dataclass(order=True, frozen=True)
class SearchQueueItem:
    """A partial path waiting in the fringe.

    Items order by estimated total cost, then by insertion sequence so
    equal estimates pop in a reproducible order.
    """

    estimated_total: float
    sequence: int
    stop: Stop = field(compare=False)
    from_edge: Optional[Edge] = field(compare=False)
    cost_so_far: float = field(compare=False)
    time_so_far: int = field(compare=False)


def needs_transfer_penalty(previous: Optional[Edge], following: Edge) -> bool:
    """Check if taking ``following`` after ``previous`` costs a transfer."""
    if previous is None:
        return False
    if previous.is_walking and not following.is_walking:
        return True
    if previous.transport_type is not following.transport_type:
        return True
    if (
        previous.line is not None
        and following.line is not None
        and previous.line is not following.line
    ):
        return True
    return False


def estimate_time(
    stop: Stop, goal: Stop, max_speed_mps: float = MAX_TRANSPORT_SPEED_MPS
) -> float:
    """Lower bound in seconds on the time needed from ``stop`` to ``goal``."""
    return stop.distance_to(goal) / max_speed_mps


def path_time(
    edges: Sequence[Edge], transfer_penalty: int = TRANSFER_PENALTY_SECONDS
) -> int:
    """Total elapsed time of a path, penalties included."""
    return sum(edge.travel_time for edge in edges) + transfer_penalty * count_transfers(
        edges
    )


def count_transfers(edges: Sequence[Edge]) -> int:
    """Number of adjacent edge pairs that break continuity."""
    return sum(
        1 for previous, following in zip(edges, edges[1:])
        if needs_transfer_penalty(previous, following)
    )


def find_shortest_path(
    start: Optional[Stop],
    goal: Optional[Stop],
    *,
    transfer_penalty: int = TRANSFER_PENALTY_SECONDS,
    max_speed_mps: float = MAX_TRANSPORT_SPEED_MPS,
) -> Optional[List[Edge]]:
    """Find the minimal-time path between two stops.

    Args:
        start: Departure stop.
        goal: Arrival stop.
        transfer_penalty: Seconds added for each change of mode or line.
        max_speed_mps: Speed used by the heuristic.

    Returns:
        The ordered list of edges from ``start`` to ``goal``; an empty
        list when they are the same stop; ``None`` when either stop is
        missing or the goal cannot be reached.

    Raises:
        InvariantViolationError: If the predecessor chain is corrupted.
    """
    if start is None or goal is None:
        return None
    if start is goal:
        return []

    back_pointer: Dict[Stop, Edge] = {}
    cost_so_far: Dict[Stop, float] = {start: 0.0}
    visited: Set[Stop] = set()
    counter = itertools.count()

    fringe: List[SearchQueueItem] = [
        SearchQueueItem(
            estimated_total=estimate_time(start, goal, max_speed_mps),
            sequence=next(counter),
            stop=start,
            from_edge=None,
            cost_so_far=0.0,
            time_so_far=0,
        )
    ]

    while fringe:
        item = heapq.heappop(fringe)
        current = item.stop
        if current in visited:
            continue
        visited.add(current)
        if current is goal:
            break

        for edge in current.edges_out:
            neighbour = edge.to_stop
            wait = transfer_penalty if needs_transfer_penalty(item.from_edge, edge) else 0
            new_time = item.time_so_far + wait + edge.travel_time
            new_cost = float(new_time)
            known = cost_so_far.get(neighbour)
            if known is None or new_cost < known:
                cost_so_far[neighbour] = new_cost
                back_pointer[neighbour] = edge
                heapq.heappush(
                    fringe,
                    SearchQueueItem(
                        estimated_total=new_cost
                        + estimate_time(neighbour, goal, max_speed_mps),
                        sequence=next(counter),
                        stop=neighbour,
                        from_edge=edge,
                        cost_so_far=new_cost,
                        time_so_far=new_time,
                    ),
                )

    logger.debug(
        "A* finished",
        extra={"start": start.id, "goal": goal.id, "expanded": len(visited)},
    )

    if goal not in back_pointer:
        return None
    return _reconstruct_path(start, goal, back_pointer)


def _reconstruct_path(start: Stop, goal: Stop, back_pointer: Dict[Stop, Edge]) -> List[Edge]:
    path: List[Edge] = []
    seen: Set[Stop] = set()
    current = goal
    while current is not start:
        if current in seen:
            raise InvariantViolationError(
                "Predecessor cycle during path reconstruction", stop_id=current.id
            )
        seen.add(current)
        edge = back_pointer.get(current)
        if edge is None:
            raise InvariantViolationError(
                "Predecessor chain does not lead back to the start", stop_id=current.id
            )
        path.append(edge)
        current = edge.from_stop
    path.reverse()
    return path
