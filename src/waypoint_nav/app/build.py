# waypoint_nav/app/build.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from waypoint_nav.app.follower import PathFollower
from waypoint_nav.app.hooks import NavHooks, NoopHooks
from waypoint_nav.app.navigator import Navigator
from waypoint_nav.app.protocols import Sink
from waypoint_nav.config.models import NavigatorModel
from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.domain.pathfinding.astar import PathFinder
from waypoint_nav.io.nav_logging import NavLogging  # JSON logs
from waypoint_nav.io.recorder import MemorySink, Recorder
from waypoint_nav.runtime.registries import make_frontier_factory, resolve_graph


@dataclass
class App:
    config: NavigatorModel
    hooks: NavHooks
    recorder: Recorder
    store: GraphStore
    finder: PathFinder
    follower: PathFollower
    navigator: Navigator


def build(
    cfg: NavigatorModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: Sequence[Sink] | None = None,
    graph: GraphStore | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, NavigatorModel) else NavigatorModel.model_validate(cfg)

    # 1) Event stream for rendering/status collaborators
    recorder = Recorder(*(sinks or [MemorySink()]))

    hooks = (
        NavLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Graph
    store = resolve_graph(model.graph, deps={"graph": graph})

    # 3) Search & follower (inject deps explicitly)
    finder = PathFinder(frontier_factory=make_frontier_factory(model.search.frontier), hooks=hooks)
    follower = PathFollower(
        model.follower.arrival_threshold,
        recorder=recorder,
        hooks=hooks,
    )
    navigator = Navigator(store, finder, follower, hooks=hooks)

    return App(model, hooks, recorder, store, finder, follower, navigator)
