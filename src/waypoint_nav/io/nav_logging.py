# waypoint_nav/io/nav_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from waypoint_nav.app.hooks import NoopHooks


def _default_json_logger(name="waypoint_nav", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class NavLogging(NoopHooks):
    """
    Structured logs for searches and follow sessions.
    Search timing is DEBUG noise unless debug=True; session milestones are INFO.
    """

    MILESTONES = {"Started", "WaypointReached", "Arrived", "Cancelled"}

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _shape_event(self, ev):
        name = type(ev).__name__
        base = asdict(ev) if is_dataclass(ev) else {}
        return name, base

    # --------------------------------------------------------

    # search

    def search_start(self, *, start_id, goal_id, nodes):
        if self.debug:
            self._emit("DEBUG", "search_start", start_id=start_id, goal_id=goal_id, nodes=nodes)

    def search_end(self, *, start_id, goal_id, hops, length, extractions, ms):
        level = "INFO" if self.debug else "DEBUG"
        self._emit(
            level,
            "search_end",
            start_id=start_id,
            goal_id=goal_id,
            hops=hops,
            length=round(length, 6),
            extractions=extractions,
            ms=ms,
        )

    def search_failed(self, *, start_id, goal_id, reason, extractions):
        self._emit(
            "WARNING",
            "search_failed",
            start_id=start_id,
            goal_id=goal_id,
            reason=reason,
            extractions=extractions,
        )

    # follow sessions

    def session_event(self, ev, *, state):
        name, extra = self._shape_event(ev)
        level = "INFO" if name in self.MILESTONES else ("DEBUG" if self.debug else None)
        if level:
            self._emit(level, name, state=state, **extra)

    def error(self, op: str, *, exc: BaseException, **extra):
        self._emit("WARNING", "rejected", op=op, error=type(exc).__name__, detail=str(exc), **extra)
