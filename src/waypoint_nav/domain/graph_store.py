# waypoint_nav/domain/graph_store.py
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import count
from types import MappingProxyType

import numpy as np

from waypoint_nav.domain.entities.geography import Pos, Position, to_position
from waypoint_nav.errors import EmptyGraph, NodeNotFound, SelfLoop


@dataclass
class Node:
    id: int
    position: Position
    neighbors: set[int] = field(default_factory=set)
    label: str | None = None  # external waypoint id from the editor, if any


class GraphStore:
    """
    Arena of waypoints keyed by integer handles, with symmetric adjacency.

    Handles come from a counter that is never rewound, so an id is never
    handed out twice by the same store (clear() included).
    """

    def __init__(self):
        self._nodes: dict[int, Node] = {}
        self._ids = count()

    # ---------------- mutation ----------------

    def add_node(self, position: Pos, *, label: str | None = None) -> int:
        p = to_position(position)  # raises InvalidPosition before touching state
        nid = next(self._ids)
        self._nodes[nid] = Node(id=nid, position=p, label=label)
        return nid

    def connect(self, a: int, b: int) -> None:
        if a == b:
            raise SelfLoop(a)
        na, nb = self._node(a), self._node(b)
        na.neighbors.add(b)
        nb.neighbors.add(a)

    def connect_to_nearest(self, node_id: int) -> int | None:
        """Link node_id to the closest other node; returns that node's id."""
        origin = self._node(node_id).position
        others = [n for n in sorted(self._nodes) if n != node_id]
        if not others:
            return None
        nearest = self._argmin_distance(origin, others)
        self.connect(node_id, nearest)
        return nearest

    def clear(self) -> None:
        self._nodes.clear()

    # ---------------- queries ----------------

    def nearest_node(self, position: Pos) -> int:
        p = to_position(position)
        if not self._nodes:
            raise EmptyGraph("nearest_node() on an empty graph")
        return self._argmin_distance(p, sorted(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def node_ids(self) -> list[int]:
        return sorted(self._nodes)

    def position(self, node_id: int) -> Position:
        return self._node(node_id).position

    def neighbors(self, node_id: int) -> tuple[int, ...]:
        return tuple(sorted(self._node(node_id).neighbors))

    def label(self, node_id: int) -> str | None:
        return self._node(node_id).label

    def find_label(self, label: str) -> int:
        for nid in sorted(self._nodes):
            if self._nodes[nid].label == label:
                return nid
        raise NodeNotFound(label)

    def are_connected(self, a: int, b: int) -> bool:
        return b in self._node(a).neighbors

    def edges(self) -> Iterator[tuple[int, int]]:
        """Each undirected edge once, as (low_id, high_id)."""
        for nid in sorted(self._nodes):
            for other in sorted(self._nodes[nid].neighbors):
                if nid < other:
                    yield nid, other

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            positions=MappingProxyType({n.id: n.position for n in self._nodes.values()}),
            adjacency=MappingProxyType(
                {n.id: tuple(sorted(n.neighbors)) for n in self._nodes.values()}
            ),
        )

    # ---------------- helpers ----------------

    def _node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NodeNotFound(node_id) from None

    def _argmin_distance(self, origin: Position, candidates: list[int]) -> int:
        # same metric as Position.distance_to; candidates ascend by id, so
        # argmin keeps the lowest id on exact ties
        d = np.fromiter(
            (origin.distance_to(self._nodes[n].position) for n in candidates),
            dtype=float,
            count=len(candidates),
        )
        return candidates[int(np.argmin(d))]


@dataclass(frozen=True)
class GraphSnapshot:
    """Frozen copy of a GraphStore, safe to search while the store is edited."""

    positions: MappingProxyType
    adjacency: MappingProxyType

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.positions

    def has_node(self, node_id: int) -> bool:
        return node_id in self.positions

    def node_ids(self) -> list[int]:
        return sorted(self.positions)

    def position(self, node_id: int) -> Position:
        try:
            return self.positions[node_id]
        except KeyError:
            raise NodeNotFound(node_id) from None

    def neighbors(self, node_id: int) -> tuple[int, ...]:
        try:
            return self.adjacency[node_id]
        except KeyError:
            raise NodeNotFound(node_id) from None
