"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- TextGraphRepository: Loads the network from tab-separated files
- AStarRouteSolver: Finds fastest paths using A*
- GraphStructureAnalyzer: Components and articulation points
"""

from .astar_solver import AStarRouteSolver
from .structure_analyzer import GraphStructureAnalyzer
from .text_repository import TextGraphRepository

__all__ = ["TextGraphRepository", "AStarRouteSolver", "GraphStructureAnalyzer"]
