# waypoint_nav/app/navigator.py
from waypoint_nav.app.events import NavEvent
from waypoint_nav.app.follower import FollowState, PathFollower
from waypoint_nav.app.hooks import NavHooks, NoopHooks
from waypoint_nav.domain.entities.geography import Path, Pos, Segment
from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.domain.pathfinding.astar import PathFinder
from waypoint_nav.errors import NavError


class Navigator:
    """
    One navigating agent: picks the waypoint nearest to where the agent stands,
    routes to the chosen destination and follows the result.
    """

    def __init__(
        self,
        store: GraphStore,
        finder: PathFinder,
        follower: PathFollower,
        hooks: NavHooks | None = None,
    ):
        self.store = store
        self.finder = finder
        self.follower = follower
        self._hooks = hooks or NoopHooks()

    @property
    def state(self) -> FollowState:
        return self.follower.state

    def route(self, start_id: int, goal_id: int) -> Path:
        return self.finder.find_path(self.store.snapshot(), start_id, goal_id)

    def navigate_to(self, goal_id: int, current_position: Pos) -> Path:
        # search completes before the follower is touched; a failure keeps the old session
        try:
            start_id = self.store.nearest_node(current_position)
            path = self.route(start_id, goal_id)
        except NavError as exc:
            self._hooks.error("navigate_to", exc=exc, goal_id=goal_id)
            raise
        self.follower.start_following(path)
        return path

    def on_position_update(self, position: Pos) -> list[NavEvent]:
        return self.follower.on_position_update(position)

    def stop(self, reason: str | None = "user") -> list[NavEvent]:
        return self.follower.cancel(reason)

    def current_path_records(self) -> list[dict]:
        return [
            {"id": w.id, "position": w.position.as_dict()} for w in self.follower.remaining_path()
        ]

    def remaining_segments(self) -> list[Segment]:
        return self.follower.remaining_segments()
