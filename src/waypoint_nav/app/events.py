# waypoint_nav/app/events.py
from dataclasses import dataclass


# Base type for follower output; seq orders events within one session, from 1
@dataclass(frozen=True)
class NavEvent:
    session_id: int
    seq: int


@dataclass(frozen=True)
class Started(NavEvent):
    goal_id: int
    target_id: int
    waypoints: int


@dataclass(frozen=True)
class Progress(NavEvent):
    target_id: int
    cursor: int
    distance_to_next: float


@dataclass(frozen=True)
class WaypointReached(NavEvent):
    node_id: int
    cursor: int  # index of the reached waypoint within the path


@dataclass(frozen=True)
class Arrived(NavEvent):
    goal_id: int


@dataclass(frozen=True)
class Cancelled(NavEvent):
    reason: str | None = None
