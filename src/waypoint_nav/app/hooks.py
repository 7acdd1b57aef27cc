# waypoint_nav/app/hooks.py
from typing import Protocol


class NavHooks(Protocol):
    def search_start(self, *, start_id, goal_id, nodes): ...
    def search_end(self, *, start_id, goal_id, hops, length, extractions, ms): ...
    def search_failed(self, *, start_id, goal_id, reason: str, extractions): ...
    def session_event(self, ev, *, state): ...
    def error(self, op: str, *, exc: BaseException, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def search_failed(self, **_):
        pass

    def session_event(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
