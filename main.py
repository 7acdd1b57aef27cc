# main.py
from waypoint_nav.app.build import build
from waypoint_nav.io.recorder import JsonlSink


def _wp(name, x, y, connections):
    return {"id": name, "position": {"x": x, "y": y, "z": 0}, "connections": connections}


def run(frontier: str = "linear_scan"):
    cfg = {
        "name": "demo",
        "run_id": "demo-1",
        "search": {"frontier": {"kind": frontier}},
        "graph": {
            "by": "inline",
            "document": {
                "name": "square",
                "waypoints": [
                    _wp("A", 0, 0, ["B", "D", "C"]),
                    _wp("B", 1, 0, ["A", "C"]),
                    _wp("C", 1, 1, ["B", "D", "A"]),
                    _wp("D", 0, 1, ["C", "A"]),
                ],
            },
        },
    }
    app = build(cfg, sinks=[JsonlSink()])

    goal = app.store.find_label("C")
    path = app.navigator.navigate_to(goal, (0.1, 0.0, 0.0))
    print("route:", [app.store.label(n) for n in path.ids], f"length={path.length:.3f}")

    # walk the diagonal in 0.25 steps
    for k in range(1, 6):
        if app.navigator.state.terminal:
            break
        s = 0.25 * k
        app.navigator.on_position_update((s, s, 0.0))


if __name__ == "__main__":
    run()
