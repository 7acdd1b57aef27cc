# waypoint_nav/io/recorder.py
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import asdict

from waypoint_nav.app.protocols import Sink

logger = logging.getLogger(__name__)


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ev) -> None:
        self.fp.write(json.dumps({"event": type(ev).__name__, **asdict(ev)}) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)

    def of_type(self, etype: type) -> list:
        return [e for e in self.events if isinstance(e, etype)]


# Adapter for rendering/status collaborators that want a plain callback
class CallbackSink:
    def __init__(self, fn: Callable[[object], None]):
        self.fn = fn

    def write(self, ev) -> None:
        self.fn(ev)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = list(sinks) or [MemorySink()]

    def add(self, sink: Sink) -> None:
        self.sinks.append(sink)

    def emit(self, ev) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # sink failures never reach the caller; remaining sinks still get ev
                logger.exception("sink %s failed on %s", type(s).__name__, type(ev).__name__)
