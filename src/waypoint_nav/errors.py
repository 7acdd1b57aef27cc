# waypoint_nav/errors.py


class NavError(Exception):
    """Base class for every recoverable navigation failure."""


# ------------- Graph store --------------------


class InvalidPosition(NavError, ValueError):
    pass


class NodeNotFound(NavError, LookupError):
    def __init__(self, node_id):
        super().__init__(f"node {node_id!r} not found")
        self.node_id = node_id


class SelfLoop(NavError, ValueError):
    def __init__(self, node_id):
        super().__init__(f"cannot connect node {node_id!r} to itself")
        self.node_id = node_id


class EmptyGraph(NavError):
    pass


# ------------- Search --------------------


class InvalidStart(NodeNotFound):
    pass


class InvalidGoal(NodeNotFound):
    pass


class NoPath(NavError):
    def __init__(self, start_id, goal_id):
        super().__init__(f"no path from {start_id!r} to {goal_id!r}")
        self.start_id, self.goal_id = start_id, goal_id


# ------------- Following --------------------


class EmptyPath(NavError, ValueError):
    pass


class NotFollowing(NavError):
    def __init__(self, state):
        super().__init__(f"position updates need an active session (state={state})")
        self.state = state


# ------------- Snapshot ingestion --------------------


class AsymmetricConnection(NavError, ValueError):
    def __init__(self, a, b):
        super().__init__(f"{a!r} lists {b!r} but {b!r} does not list {a!r}")
        self.a, self.b = a, b


class DuplicateWaypoint(NavError, ValueError):
    def __init__(self, waypoint_id):
        super().__init__(f"waypoint {waypoint_id!r} appears more than once")
        self.waypoint_id = waypoint_id
