"""Graph loading from the tab-separated network files.

``stops.txt`` holds one stop per row (``stop_id, stop_code, stop_name,
stop_desc, stop_lat, stop_lon, ...``) and ``lines.txt`` one timepoint
per row (``line_id, stop_id, timepoint[, transport]``). Both files
start with a header row.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Union

from ..domain.errors import GraphError
from ..domain.models import Line, Stop, TransportType
from .network import TransitGraph

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_stops(stops_path: PathLike) -> Dict[str, Stop]:
    stops: Dict[str, Stop] = {}
    with open(stops_path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter="\t")
        next(reader, None)  # header
        for row in reader:
            if len(row) < 6:
                continue
            stop_id = row[0].strip()
            lat = float(row[4])
            lon = float(row[5])
            stops[stop_id] = Stop.at(stop_id, row[2].strip(), lon, lat)
    return stops


def load_lines(lines_path: PathLike, stops: Mapping[str, Stop]) -> List[Line]:
    """Read the lines file, resolving stop ids through ``stops``.

    Broken rows and rows naming an unknown stop are skipped with a
    warning.

    Raises:
        GraphError: If ``stops`` is empty.
    """
    if not stops:
        raise GraphError("load_lines given an empty stop map", file_path=str(lines_path))

    lines: Dict[str, Line] = {}
    with open(lines_path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter="\t")
        next(reader, None)  # header
        for row in reader:
            if len(row) < 3:
                logger.warning("Line file has broken entry", extra={"row": row})
                continue
            line_id, stop_id = row[0].strip(), row[1].strip()
            time = int(row[2])
            line = lines.get(line_id)
            if line is None:
                mode = None
                if len(row) > 3 and row[3].strip():
                    mode = TransportType.from_label(row[3])
                line = lines[line_id] = Line(line_id, transport_type=mode)
            stop = stops.get(stop_id)
            if stop is None:
                logger.warning(
                    "Line has unknown stop",
                    extra={"line_id": line_id, "stop_id": stop_id, "time": time},
                )
                continue
            line.add_stop(stop, time)

    # a line whose stops were all unknown has nothing left to build
    return [line for line in lines.values() if line.timepoints]


def load_graph(
    stops_path: PathLike,
    lines_path: PathLike,
    walking_speed_mps: float = TransportType.WALKING.speed_mps,
) -> TransitGraph:
    stops = load_stops(stops_path)
    lines = load_lines(lines_path, stops)
    return TransitGraph(stops.values(), lines, walking_speed_mps=walking_speed_mps)
