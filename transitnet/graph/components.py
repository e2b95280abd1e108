"""Strongly connected components (Kosaraju).

Two stops share a component id if each can reach the other along
directed edges. Walking edges are stored as a pair of opposite edges,
so they count in both directions.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Set, Tuple

from ..domain.models import Edge, Stop
from .network import TransitGraph

logger = logging.getLogger(__name__)


def find_components(graph: TransitGraph) -> Dict[Stop, int]:
    """Label every stop with the id of its strongly connected component.

    Ids are consecutive integers starting at 0 and carry no meaning
    beyond one call. An empty graph yields an empty mapping.
    """
    order = _post_order(graph.stops)

    components: Dict[Stop, int] = {}
    component_id = 0
    for root in reversed(order):
        if root in components:
            continue
        _assign_component(root, component_id, components)
        component_id += 1

    logger.debug(
        "Components found",
        extra={"stops": len(components), "components": component_id},
    )
    return components


def _post_order(stops: Tuple[Stop, ...]) -> List[Stop]:
    """Depth-first finishing order following outgoing edges."""
    visited: Set[Stop] = set()
    order: List[Stop] = []
    for root in stops:
        if root in visited:
            continue
        visited.add(root)
        stack: List[Tuple[Stop, Iterator[Edge]]] = [(root, iter(root.edges_out))]
        while stack:
            stop, edges = stack[-1]
            for edge in edges:
                neighbour = edge.to_stop
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append((neighbour, iter(neighbour.edges_out)))
                    break
            else:
                # subtree exhausted
                stack.pop()
                order.append(stop)
    return order


def _assign_component(root: Stop, component_id: int, components: Dict[Stop, int]) -> None:
    """Flood the transposed graph from ``root`` with ``component_id``."""
    components[root] = component_id
    stack = [root]
    while stack:
        stop = stack.pop()
        for edge in stop.edges_in:
            neighbour = edge.from_stop
            if neighbour not in components:
                components[neighbour] = component_id
                stack.append(neighbour)
