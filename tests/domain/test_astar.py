# tests/domain/test_astar.py
import math

import pytest

from waypoint_nav.app.hooks import NoopHooks
from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.domain.pathfinding.astar import PathFinder
from waypoint_nav.domain.pathfinding.frontiers import HeapFrontier, LinearScanFrontier
from waypoint_nav.errors import InvalidGoal, InvalidStart, NodeNotFound, NoPath

FRONTIERS = [LinearScanFrontier, HeapFrontier]


# --- hook that records search outcomes ---
class SearchTrace(NoopHooks):
    def __init__(self):
        self.ends, self.failures = [], []

    def search_end(self, **kw):
        self.ends.append(kw)

    def search_failed(self, **kw):
        self.failures.append(kw)


@pytest.mark.parametrize("frontier", FRONTIERS)
def test_diagonal_beats_two_hop_route(square, frontier):
    path = PathFinder(frontier_factory=frontier).find_path(square.graph, square.A, square.C)
    assert path.ids == (square.A, square.C)
    assert abs(path.length - math.sqrt(2)) < 1e-12


def test_trivial_path_for_same_start_and_goal(square):
    path = PathFinder().find_path(square.graph, square.B, square.B)
    assert path.ids == (square.B,)
    assert path.length == 0.0
    assert path.segments() == []


def test_isolated_goal_gives_no_path(square):
    g = square.graph
    e = g.add_node((5.0, 5.0, 0.0))
    finder = PathFinder()
    with pytest.raises(NoPath):
        finder.find_path(g, square.A, e)
    with pytest.raises(NoPath):
        finder.find_path(g, e, square.A)


def test_missing_ids_are_distinct_from_no_path(square):
    finder = PathFinder()
    with pytest.raises(InvalidStart) as ei:
        finder.find_path(square.graph, 42, square.A)
    assert not isinstance(ei.value, NoPath)
    assert isinstance(ei.value, NodeNotFound)

    with pytest.raises(InvalidGoal):
        finder.find_path(square.graph, square.A, 42)
    # start is validated first
    with pytest.raises(InvalidStart):
        finder.find_path(square.graph, 41, 42)


@pytest.mark.parametrize("frontier", FRONTIERS)
def test_equal_f_ties_break_on_h_then_lowest_id(frontier):
    # two equal-length routes A-B-D and A-C-D; B has the lower id
    g = GraphStore()
    A = g.add_node((0.0, 0.0, 0.0))
    B = g.add_node((1.0, 0.0, 0.0))
    C = g.add_node((0.0, 1.0, 0.0))
    D = g.add_node((1.0, 1.0, 0.0))
    for a, b in [(A, B), (A, C), (B, D), (C, D)]:
        g.connect(a, b)

    result = PathFinder(frontier_factory=frontier).search(g, A, D)
    assert result.path.ids == (A, B, D)
    # after B, goal D (h=0) wins the f-tie against C (h=1): C is never expanded
    assert result.extractions == 3


def test_returned_path_is_a_valid_walk(square):
    g = square.graph
    path = PathFinder().find_path(g, square.B, square.D)
    assert path.ids[0] == square.B and path.ids[-1] == square.D
    for a, b in zip(path.ids, path.ids[1:]):
        assert g.are_connected(a, b)
    assert [w.position for w in path] == [g.position(n) for n in path.ids]


def test_extractions_bounded_by_node_count(square):
    g = square.graph
    g.add_node((9.0, 9.0, 9.0))  # unreachable
    finder = PathFinder()
    for s in g.node_ids():
        for t in g.node_ids():
            try:
                r = finder.search(g, s, t)
            except NoPath:
                continue
            assert r.extractions <= len(g)


def test_search_over_snapshot_survives_graph_edits(square):
    g = square.graph
    snap = g.snapshot()
    g.clear()
    path = PathFinder().find_path(snap, square.B, square.D)
    assert len(path) == 3


def test_hooks_see_success_and_failure(square):
    trace = SearchTrace()
    finder = PathFinder(hooks=trace)
    finder.find_path(square.graph, square.A, square.C)
    e = square.graph.add_node((7.0, 0.0, 0.0))
    with pytest.raises(NoPath):
        finder.find_path(square.graph, square.A, e)

    assert trace.ends[0]["hops"] == 1
    assert abs(trace.ends[0]["length"] - math.sqrt(2)) < 1e-12
    assert trace.failures[0]["reason"] == "frontier_exhausted"
    # every reachable node popped once before giving up
    assert trace.failures[0]["extractions"] == 4


def test_vertical_axis_counts_in_cost():
    # a short horizontal hop that climbs a floor vs a longer flat detour
    g = GraphStore()
    s = g.add_node((0.0, 0.0, 0.0))
    up = g.add_node((1.0, 0.0, 10.0))
    flat = g.add_node((1.0, 3.0, 0.0))
    t = g.add_node((2.0, 0.0, 0.0))
    for a, b in [(s, up), (up, t), (s, flat), (flat, t)]:
        g.connect(a, b)
    assert PathFinder().find_path(g, s, t).ids == (s, flat, t)
