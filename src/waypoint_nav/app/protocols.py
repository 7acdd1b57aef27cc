# waypoint_nav/app/protocols.py
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from waypoint_nav.domain.entities.geography import Position


# ------------- Graph access --------------------
@runtime_checkable
class GraphView(Protocol):
    """
    Read-only view of a waypoint graph.
    Implemented by GraphStore (live) and GraphSnapshot (frozen copy).
    Neighbor ids come back in ascending order so searches are reproducible.
    """

    def __len__(self) -> int: ...
    def has_node(self, node_id: int) -> bool: ...
    def position(self, node_id: int) -> Position: ...
    def neighbors(self, node_id: int) -> tuple[int, ...]: ...
    def node_ids(self) -> Iterable[int]: ...


# ------------- Search --------------------
@runtime_checkable
class Frontier(Protocol):
    """
    Open set of an A* search, ordered by (f, h, node_id).
    push() on a node already present replaces its score.
    """

    def push(self, node_id: int, f: float, h: float) -> None: ...
    def pop_min(self) -> int: ...
    def __len__(self) -> int: ...
    def __contains__(self, node_id: object) -> bool: ...


# ------------- Outputs --------------------
@runtime_checkable
class Sink(Protocol):
    def write(self, ev) -> None: ...


@runtime_checkable
class EventPublisher(Protocol):
    def emit(self, ev) -> None: ...
