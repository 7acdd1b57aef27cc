# waypoint_nav/domain/pathfinding/frontiers.py
import heapq

from waypoint_nav.app.protocols import Frontier


class LinearScanFrontier(Frontier):
    """O(V) minimum extraction; O(V^2) over a whole search.

    Fine for venue graphs (tens to low hundreds of waypoints).
    """

    def __init__(self):
        self._scores: dict[int, tuple[float, float]] = {}  # node_id -> (f, h)

    def push(self, node_id: int, f: float, h: float) -> None:
        self._scores[node_id] = (f, h)

    def pop_min(self) -> int:
        if not self._scores:
            raise IndexError("pop from an empty frontier")
        best = min(self._scores, key=lambda n: (*self._scores[n], n))
        del self._scores[best]
        return best

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._scores


class HeapFrontier(Frontier):
    """Binary heap with lazy invalidation; same ordering as LinearScanFrontier."""

    def __init__(self):
        self._q: list[tuple[float, float, int]] = []
        self._live: dict[int, tuple[float, float]] = {}

    def push(self, node_id: int, f: float, h: float) -> None:
        self._live[node_id] = (f, h)
        heapq.heappush(self._q, (f, h, node_id))

    def pop_min(self) -> int:
        while self._q:
            f, h, node_id = heapq.heappop(self._q)
            if self._live.get(node_id) == (f, h):
                del self._live[node_id]
                return node_id
            # stale entry superseded by a later push
        raise IndexError("pop from an empty frontier")

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._live
