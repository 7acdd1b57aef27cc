# waypoint_nav/app/follower.py
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from itertools import count

from waypoint_nav.app.events import (
    Arrived,
    Cancelled,
    NavEvent,
    Progress,
    Started,
    WaypointReached,
)
from waypoint_nav.app.hooks import NavHooks, NoopHooks
from waypoint_nav.app.protocols import EventPublisher
from waypoint_nav.domain.entities.geography import Path, Pos, Segment, Waypoint, to_position
from waypoint_nav.errors import EmptyPath, InvalidPosition, NotFollowing

DEFAULT_ARRIVAL_THRESHOLD = 0.5


class FollowState(Enum):
    IDLE = "idle"
    FOLLOWING = "following"
    ARRIVED = "arrived"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (FollowState.ARRIVED, FollowState.CANCELLED)


@dataclass
class FollowSession:
    id: int
    path: Path | None
    cursor: int  # index of the next target; == len(path) once arrived
    state: FollowState

    @property
    def target(self) -> Waypoint | None:
        if self.state is not FollowState.FOLLOWING:
            return None
        return self.path[self.cursor]


class PathFollower:
    """
    Advances along one Path as position samples come in.

    IDLE -> FOLLOWING -> ARRIVED, or CANCELLED from IDLE/FOLLOWING.
    A target counts as reached when the sample is strictly closer than
    arrival_threshold; at most one waypoint is consumed per sample.
    """

    def __init__(
        self,
        arrival_threshold: float = DEFAULT_ARRIVAL_THRESHOLD,
        *,
        recorder: EventPublisher | None = None,
        hooks: NavHooks | None = None,
    ):
        if not (math.isfinite(arrival_threshold) and arrival_threshold > 0):
            raise ValueError(f"arrival_threshold must be finite and > 0, got {arrival_threshold!r}")
        self.arrival_threshold = float(arrival_threshold)
        self.recorder = recorder
        self._hooks = hooks or NoopHooks()
        self._session = FollowSession(id=0, path=None, cursor=0, state=FollowState.IDLE)
        self._session_ids = count(1)
        self._seq = count(1)

    # ---------------- read API ----------------

    @property
    def state(self) -> FollowState:
        return self._session.state

    @property
    def session(self) -> FollowSession:
        return replace(self._session)

    @property
    def current_target(self) -> Waypoint | None:
        return self._session.target

    def remaining_path(self) -> tuple[Waypoint, ...]:
        """Last reached waypoint plus everything still ahead."""
        s = self._session
        if s.state is not FollowState.FOLLOWING:
            return ()
        return s.path.waypoints[s.cursor - 1 :]

    def remaining_segments(self) -> list[Segment]:
        s = self._session
        if s.state is not FollowState.FOLLOWING:
            return []
        return s.path.segments(first=s.cursor - 1)

    # ---------------- transitions ----------------

    def start_following(self, path: Path | Sequence[Waypoint]) -> list[NavEvent]:
        if path is None or len(path) == 0:
            raise EmptyPath("cannot follow an empty path")
        if not isinstance(path, Path):
            path = Path(tuple(path))

        sid = next(self._session_ids)
        self._seq = count(1)
        if len(path) == 1:
            self._session = FollowSession(sid, path, cursor=1, state=FollowState.ARRIVED)
            return self._publish([self._ev(Arrived, goal_id=path.goal.id)])

        self._session = FollowSession(sid, path, cursor=1, state=FollowState.FOLLOWING)
        return self._publish(
            [self._ev(Started, goal_id=path.goal.id, target_id=path[1].id, waypoints=len(path))]
        )

    def on_position_update(self, position: Pos) -> list[NavEvent]:
        s = self._session
        if s.state is not FollowState.FOLLOWING:
            raise NotFollowing(s.state.value)
        try:
            p = to_position(position)
        except InvalidPosition as exc:
            self._hooks.error("on_position_update", exc=exc, session_id=s.id)
            raise

        target = s.path[s.cursor]
        d = p.distance_to(target.position)
        if d >= self.arrival_threshold:
            return self._publish(
                [self._ev(Progress, target_id=target.id, cursor=s.cursor, distance_to_next=d)]
            )

        out = [self._ev(WaypointReached, node_id=target.id, cursor=s.cursor)]
        s.cursor += 1
        if s.cursor >= len(s.path):
            s.state = FollowState.ARRIVED
            out.append(self._ev(Arrived, goal_id=target.id))
        else:
            nxt = s.path[s.cursor]
            out.append(
                self._ev(
                    Progress,
                    target_id=nxt.id,
                    cursor=s.cursor,
                    distance_to_next=p.distance_to(nxt.position),
                )
            )
        return self._publish(out)

    def cancel(self, reason: str | None = None) -> list[NavEvent]:
        s = self._session
        if s.state.terminal:
            return []
        ev = self._ev(Cancelled, reason=reason)
        self._session = FollowSession(s.id, path=None, cursor=0, state=FollowState.CANCELLED)
        return self._publish([ev])

    # ---------------- helpers ----------------

    def _ev(self, etype: type[NavEvent], **fields) -> NavEvent:
        return etype(session_id=self._session.id, seq=next(self._seq), **fields)

    def _publish(self, events: list[NavEvent]) -> list[NavEvent]:
        for ev in events:
            self._hooks.session_event(ev, state=self._session.state.value)
            if self.recorder is not None:
                self.recorder.emit(ev)
        return events
