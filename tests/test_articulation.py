from __future__ import annotations

import pytest

from transitnet.graph.articulation import find_articulation_points
from transitnet.graph.network import TransitGraph


def ids(stops):
    return {stop.id for stop in stops}


def test_triangles_have_no_articulation_points(two_triangles):
    assert find_articulation_points(two_triangles) == set()


def test_chain_inner_stops_are_cut_vertices(chain_graph):
    assert ids(find_articulation_points(chain_graph)) == {"B", "C"}


def test_direction_is_ignored(make_stop, make_line):
    # B is only entered, never left, yet still joins A and C
    a, b, c = make_stop("A"), make_stop("B", x=100), make_stop("C", x=200)
    lines = [make_line("1", [a, b], [0, 60]), make_line("2", [c, b], [0, 60])]
    graph = TransitGraph([a, b, c], lines)

    assert ids(find_articulation_points(graph)) == {"B"}


def test_star_centre_is_reported_once(make_stop, make_line):
    centre = make_stop("O")
    leaves = [make_stop(f"L{i}", x=100.0 * (i + 1)) for i in range(4)]
    lines = [make_line(f"l{i}", [centre, leaf], [0, 60]) for i, leaf in enumerate(leaves)]
    graph = TransitGraph([centre] + leaves, lines)

    assert ids(find_articulation_points(graph)) == {"O"}


def test_bridge_between_triangles(make_stop, make_line):
    a, b, c = make_stop("A"), make_stop("B", x=100), make_stop("C", y=100)
    x, y, z = make_stop("X", x=1000), make_stop("Y", x=1100), make_stop("Z", x=1000, y=100)
    lines = [
        make_line("t1", [a, b, c, a], [0, 60, 120, 180]),
        make_line("t2", [x, y, z, x], [0, 60, 120, 180]),
        make_line("bridge", [b, x], [0, 300]),
    ]
    graph = TransitGraph([a, b, c, x, y, z], lines)

    assert ids(find_articulation_points(graph)) == {"B", "X"}


def test_walking_edges_remove_cut_vertices(chain_graph):
    chain_graph.recompute_walking_edges(210)

    assert find_articulation_points(chain_graph) == set()


def test_isolated_stops_are_not_articulation_points(make_stop):
    graph = TransitGraph([make_stop("A"), make_stop("B", x=5000)], [])

    assert find_articulation_points(graph) == set()


def test_long_chain_does_not_hit_recursion_limit(make_stop, make_line):
    stops = [make_stop(f"S{i}", x=10.0 * i) for i in range(5000)]
    graph = TransitGraph(stops, [make_line("long", stops, list(range(0, 50000, 10)))])

    points = find_articulation_points(graph)

    # every stop except the two ends
    assert len(points) == 4998
    assert stops[0] not in points and stops[-1] not in points


@pytest.mark.parametrize("seed", range(15))
def test_matches_brute_force_removal(seed, network_factory, component_counter):
    graph = network_factory(seed, n_stops=9, n_lines=4)
    if seed % 3 == 0:
        graph.recompute_walking_edges(250)
    stops = graph.stops
    baseline = component_counter(stops)

    expected = {stop for stop in stops if component_counter(stops, removed=stop) > baseline}

    assert find_articulation_points(graph) == expected
