# waypoint_nav/domain/pathfinding/astar.py
"""A* shortest paths over a waypoint graph.

Edge cost and heuristic are both the 3D straight-line distance. Because edges
are straight segments, the heuristic is consistent (triangle inequality), so
the first time the goal leaves the frontier its path is a shortest one and no
node is extracted twice: a search never takes more than |V| extractions.

Frontier ties are broken by lower h, then lower node id, which makes results
reproducible whichever frontier implementation is plugged in.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from waypoint_nav.app.hooks import NavHooks, NoopHooks
from waypoint_nav.app.protocols import Frontier, GraphView
from waypoint_nav.domain.entities.geography import Path, Position, Waypoint
from waypoint_nav.domain.pathfinding.frontiers import LinearScanFrontier
from waypoint_nav.errors import InvalidGoal, InvalidStart, NoPath


def euclidean(a: Position, b: Position) -> float:
    return a.distance_to(b)


@dataclass(frozen=True)
class SearchResult:
    path: Path
    extractions: int  # frontier pops, goal pop included
    relaxations: int  # neighbor g-improvements pushed to the frontier


class PathFinder:
    """Stateless between calls; holds only its frontier strategy and hooks."""

    def __init__(
        self,
        frontier_factory: Callable[[], Frontier] = LinearScanFrontier,
        hooks: NavHooks | None = None,
    ):
        self.frontier_factory = frontier_factory
        self._hooks = hooks or NoopHooks()

    def find_path(self, graph: GraphView, start_id: int, goal_id: int) -> Path:
        return self.search(graph, start_id, goal_id).path

    def search(self, graph: GraphView, start_id: int, goal_id: int) -> SearchResult:
        if not graph.has_node(start_id):
            raise InvalidStart(start_id)
        if not graph.has_node(goal_id):
            raise InvalidGoal(goal_id)

        t0 = time.perf_counter()
        self._hooks.search_start(start_id=start_id, goal_id=goal_id, nodes=len(graph))

        goal_pos = graph.position(goal_id)
        h: dict[int, float] = {start_id: euclidean(graph.position(start_id), goal_pos)}
        g: dict[int, float] = {start_id: 0.0}
        came_from: dict[int, int] = {}

        frontier = self.frontier_factory()
        frontier.push(start_id, h[start_id], h[start_id])
        extractions = relaxations = 0

        while len(frontier):
            current = frontier.pop_min()
            extractions += 1
            if current == goal_id:
                path = _reconstruct(graph, came_from, current)
                self._hooks.search_end(
                    start_id=start_id,
                    goal_id=goal_id,
                    hops=len(path) - 1,
                    length=path.length,
                    extractions=extractions,
                    ms=(time.perf_counter() - t0) * 1000,
                )
                return SearchResult(path, extractions, relaxations)

            here = graph.position(current)
            for nb in graph.neighbors(current):
                there = graph.position(nb)
                tentative = g[current] + euclidean(here, there)
                if nb in g and tentative >= g[nb]:
                    continue
                g[nb] = tentative
                came_from[nb] = current
                if nb not in h:
                    h[nb] = euclidean(there, goal_pos)
                frontier.push(nb, tentative + h[nb], h[nb])
                relaxations += 1

        self._hooks.search_failed(
            start_id=start_id, goal_id=goal_id, reason="frontier_exhausted", extractions=extractions
        )
        raise NoPath(start_id, goal_id)


def _reconstruct(graph: GraphView, came_from: dict[int, int], current: int) -> Path:
    ids = [current]
    while current in came_from:
        current = came_from[current]
        ids.append(current)
    ids.reverse()
    return Path(tuple(Waypoint(n, graph.position(n)) for n in ids))
