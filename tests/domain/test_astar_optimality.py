"""Brute-force checks of A* against exhaustive enumeration on small random venues."""

import numpy as np
import pytest

from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.domain.pathfinding.astar import PathFinder
from waypoint_nav.domain.pathfinding.frontiers import HeapFrontier, LinearScanFrontier
from waypoint_nav.errors import NoPath


def random_venue(seed: int, n: int = 7, p_edge: float = 0.35) -> GraphStore:
    rng = np.random.default_rng(seed)
    g = GraphStore()
    ids = [g.add_node(tuple(rng.uniform(-5.0, 5.0, size=3))) for _ in range(n)]
    for i, a in enumerate(ids):
        for b in ids[i + 1 :]:
            if rng.random() < p_edge:
                g.connect(a, b)
    return g


def shortest_by_enumeration(g: GraphStore, s: int, t: int) -> float | None:
    # positive edge weights: some simple path is always among the shortest walks
    best = None

    def dfs(node, seen, length):
        nonlocal best
        if node == t:
            best = length if best is None else min(best, length)
            return
        for nb in g.neighbors(node):
            if nb not in seen:
                seen.add(nb)
                dfs(nb, seen, length + g.position(node).distance_to(g.position(nb)))
                seen.discard(nb)

    dfs(s, {s}, 0.0)
    return best


@pytest.mark.parametrize("seed", range(6))
def test_astar_matches_exhaustive_shortest_length(seed):
    g = random_venue(seed)
    finder = PathFinder()
    for s in g.node_ids():
        for t in g.node_ids():
            expected = shortest_by_enumeration(g, s, t)
            if expected is None:
                with pytest.raises(NoPath):
                    finder.find_path(g, s, t)
                continue
            result = finder.search(g, s, t)
            assert abs(result.path.length - expected) < 1e-9
            assert result.extractions <= len(g)
            assert result.path.ids[0] == s and result.path.ids[-1] == t
            for a, b in zip(result.path.ids, result.path.ids[1:]):
                assert g.are_connected(a, b)


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_frontier_choice_does_not_change_results(seed):
    g = random_venue(seed, n=12, p_edge=0.3)
    linear = PathFinder(frontier_factory=LinearScanFrontier)
    heap = PathFinder(frontier_factory=HeapFrontier)
    for s in g.node_ids():
        for t in g.node_ids():
            try:
                a = linear.search(g, s, t)
            except NoPath:
                with pytest.raises(NoPath):
                    heap.search(g, s, t)
                continue
            b = heap.search(g, s, t)
            assert a.path.ids == b.path.ids
            assert a.extractions == b.extractions
