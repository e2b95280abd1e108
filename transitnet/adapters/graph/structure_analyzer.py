"""Graph structure analyzer adapter.

Runs the component labeling and the articulation point search on one
graph snapshot and packs both into a StructureReport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.models import StructureReport
from ...graph.articulation import find_articulation_points
from ...graph.components import find_components
from ...graph.network import TransitGraph


@dataclass
class GraphStructureAnalyzer:
    """Structural analysis of the transit graph.

    This adapter implements StructureAnalyzerPort.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, graph: TransitGraph) -> StructureReport:
        """Label components and find articulation points.

        The graph is only read; walking edges present at call time are
        part of the analysis.
        """
        report = StructureReport(
            components=find_components(graph),
            articulation_points=frozenset(find_articulation_points(graph)),
        )
        self._logger.info(
            "Structure analyzed",
            extra={
                "stops": len(graph),
                "components": report.component_count,
                "articulation_points": len(report.articulation_points),
                "walking_distance": graph.walking_distance,
            },
        )
        return report
