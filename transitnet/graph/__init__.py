"""Graph engine for the transit network.

This subpackage builds the in-memory stop/edge graph from the network
files and runs the analysis algorithms on top of it: strongly
connected components, articulation points and A* routing.
"""

from .articulation import find_articulation_points
from .astar import find_shortest_path
from .components import find_components
from .load_graph import load_graph
from .network import TransitGraph

__all__ = [
    "TransitGraph",
    "load_graph",
    "find_components",
    "find_articulation_points",
    "find_shortest_path",
]
