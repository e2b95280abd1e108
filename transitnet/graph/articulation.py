"""Articulation points of the undirected neighbour view.

Uses the depth-first low-point method, started from every unvisited
stop so graphs that are already disconnected are handled: a stop is
reported only if removing it splits the component it belongs to.
The traversal keeps its own stack instead of recursing, as long line
chains would otherwise exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Set

from ..domain.models import Stop
from .network import TransitGraph

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    stop: Stop
    parent: Stop
    depth: int
    reach_back: int
    neighbours: Iterator[Stop]


def find_articulation_points(graph: TransitGraph) -> Set[Stop]:
    """Return every stop whose removal disconnects its component."""
    depth: Dict[Stop, int] = {}
    points: Set[Stop] = set()

    for root in graph.stops:
        if root in depth:
            continue
        depth[root] = 0
        subtrees = 0
        for neighbour in root.neighbours:
            if neighbour not in depth:
                _explore(neighbour, root, depth, points)
                subtrees += 1
        # A root is a cut vertex only if its neighbours fall into several subtrees.
        if subtrees > 1:
            points.add(root)

    logger.debug("Articulation points found", extra={"count": len(points)})
    return points


def _explore(start: Stop, root: Stop, depth: Dict[Stop, int], points: Set[Stop]) -> None:
    """Run the low-point search for the subtree hanging off ``root``."""
    depth[start] = 1
    frames: List[_Frame] = [_Frame(start, root, 1, 1, iter(start.neighbours))]

    while frames:
        frame = frames[-1]
        for neighbour in frame.neighbours:
            if neighbour is frame.parent:
                continue
            if neighbour in depth:
                frame.reach_back = min(frame.reach_back, depth[neighbour])
            else:
                child_depth = frame.depth + 1
                depth[neighbour] = child_depth
                frames.append(
                    _Frame(
                        neighbour,
                        frame.stop,
                        child_depth,
                        child_depth,
                        iter(neighbour.neighbours),
                    )
                )
                break
        else:
            frames.pop()
            if frames:
                parent = frames[-1]
                if frame.reach_back >= parent.depth:
                    points.add(parent.stop)
                parent.reach_back = min(parent.reach_back, frame.reach_back)
