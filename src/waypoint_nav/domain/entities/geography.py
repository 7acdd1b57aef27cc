# waypoint_nav/domain/entities/geography.py
from __future__ import annotations

import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from waypoint_nav.errors import EmptyPath, InvalidPosition


# Core geometry types shared by the store, the search and the follower
@dataclass(frozen=True)
class Position:
    x: float  # venue length-units (meters in the AR scene)
    y: float
    z: float

    def __post_init__(self):
        for axis in ("x", "y", "z"):
            v = getattr(self, axis)
            try:
                f = float(v)
            except (TypeError, ValueError, OverflowError):
                raise InvalidPosition(f"{axis}={v!r} is not a number") from None
            if not math.isfinite(f):
                raise InvalidPosition(f"{axis}={v!r} is not finite")
            object.__setattr__(self, axis, f)

    def distance_to(self, other: Position) -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


Pos = Position | Sequence[float] | Mapping[str, float]


def to_position(p: Pos) -> Position:
    if isinstance(p, Position):
        return p
    if isinstance(p, Mapping):
        try:
            return Position(p["x"], p["y"], p["z"])
        except KeyError as e:
            raise InvalidPosition(f"missing coordinate {e.args[0]!r}") from None
    if hasattr(p, "x") and hasattr(p, "y") and hasattr(p, "z"):
        return Position(p.x, p.y, p.z)
    if isinstance(p, Sequence) and not isinstance(p, str) and len(p) == 3:
        return Position(*p)
    raise InvalidPosition(f"cannot read a 3D position from {p!r}")


@dataclass(frozen=True)
class Waypoint:
    id: int
    position: Position


@dataclass(frozen=True)
class Segment:
    start_id: int
    end_id: int
    start: Position
    end: Position
    length: float

    @property
    def midpoint(self) -> Position:
        return Position(
            (self.start.x + self.end.x) / 2,
            (self.start.y + self.end.y) / 2,
            (self.start.z + self.end.z) / 2,
        )

    @property
    def direction(self) -> tuple[float, float, float]:
        """Unit vector from start to end; zero vector for coincident endpoints."""
        if self.length == 0:
            return (0.0, 0.0, 0.0)
        return (
            (self.end.x - self.start.x) / self.length,
            (self.end.y - self.start.y) / self.length,
            (self.end.z - self.start.z) / self.length,
        )


@dataclass(frozen=True)
class Path:
    """Immutable start-to-goal waypoint sequence.

    Positions are copied in at search time, so a Path stays valid after the
    graph it came from is edited or cleared.
    """

    waypoints: tuple[Waypoint, ...]

    def __post_init__(self):
        object.__setattr__(self, "waypoints", tuple(self.waypoints))
        if not self.waypoints:
            raise EmptyPath("a path needs at least one waypoint")

    def __len__(self) -> int:
        return len(self.waypoints)

    def __getitem__(self, i: int) -> Waypoint:
        return self.waypoints[i]

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(w.id for w in self.waypoints)

    @property
    def positions(self) -> tuple[Position, ...]:
        return tuple(w.position for w in self.waypoints)

    @property
    def start(self) -> Waypoint:
        return self.waypoints[0]

    @property
    def goal(self) -> Waypoint:
        return self.waypoints[-1]

    @property
    def length(self) -> float:
        return sum(seg.length for seg in self.segments())

    def segments(self, first: int = 0) -> list[Segment]:
        out = []
        for a, b in zip(self.waypoints[first:], self.waypoints[first + 1 :]):
            length = a.position.distance_to(b.position)
            out.append(Segment(a.id, b.id, a.position, b.position, length))
        return out

    def to_records(self) -> list[dict]:
        return [{"id": w.id, "position": w.position.as_dict()} for w in self.waypoints]
