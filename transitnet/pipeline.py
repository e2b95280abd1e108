"""High-level pipeline for the transit network analyzer.

The pipeline is organized in several stages:

1. Graph loading (from the network files to an in-memory structure).
2. Walking edges for the requested maximum distance.
3. Route computation with A* and/or structural analysis.

This module wires these stages together and turns the results into
text. Each step delegates work to the service resolved from the
container.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, GraphConfig, get_config, load_settings
from .container import Container, get_container
from .domain.errors import TransitNetworkError
from .domain.models import RouteResult, StructureReport
from .observability import configure_logging
from .services import NetworkAnalysisService

logger = logging.getLogger(__name__)


def format_route(route: RouteResult) -> str:
    return route.describe()


def format_structure(report: StructureReport) -> str:
    cut_ids = ", ".join(stop.id for stop in sorted(report.articulation_points))
    return (
        f"Components: {report.component_count}\n"
        f"Articulation points: {len(report.articulation_points)}"
        + (f" ({cut_ids})" if cut_ids else "")
    )


def describe_route(
    departure: str,
    arrival: str,
    *,
    walking_distance: Optional[float] = None,
    service: Optional[NetworkAnalysisService] = None,
) -> str:
    """Compute a route and return a message describing it.

    This helper is designed to be reused from other front-ends
    (CLI, tests, notebooks).
    """
    service = service or get_container().resolve(NetworkAnalysisService)
    if walking_distance is not None:
        service.set_walking_distance(walking_distance)

    route, error = service.route_safe(departure, arrival)
    if route is None:
        return error or f"No path found between {departure} and {arrival}"
    return format_route(route)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transitnet",
        description="Route and structure analysis of a transit network.",
    )
    parser.add_argument("departure", nargs="?", help="departure stop id")
    parser.add_argument("arrival", nargs="?", help="arrival stop id")
    parser.add_argument("--data-dir", type=Path, help="directory with stops.txt and lines.txt")
    parser.add_argument(
        "--walking", type=float, default=None, help="maximum walking distance in meters"
    )
    parser.add_argument(
        "--analyze", action="store_true", help="report components and articulation points"
    )
    return parser


def run_pipeline(argv: Optional[Sequence[str]] = None) -> int:
    """Run the analyzer from the command line.

    Returns:
        The process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if (args.departure is None) != (args.arrival is None):
        parser.error("departure and arrival must be given together")

    try:
        config = get_config()
        if args.data_dir is not None:
            config = AppConfig(
                graph=load_settings(GraphConfig, data_dir=args.data_dir),
                routing=config.routing,
                observability=config.observability,
            )
        configure_logging(config.observability)

        service = Container.create_default(config).resolve(NetworkAnalysisService)
        if args.walking is not None:
            service.set_walking_distance(args.walking)
        if args.analyze:
            print(format_structure(service.analyze()))
        if args.departure is not None:
            print(describe_route(args.departure, args.arrival, service=service))
    except TransitNetworkError as e:
        logger.error("Analysis failed", extra={"error": str(e)})
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(run_pipeline())
