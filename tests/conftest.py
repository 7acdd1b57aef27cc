"""Shared fixtures: the square-with-diagonal venue and small path builders."""

from types import SimpleNamespace

import pytest

from waypoint_nav.domain.entities.geography import Path, Position, Waypoint
from waypoint_nav.domain.graph_store import GraphStore


def make_path(*points) -> Path:
    return Path(tuple(Waypoint(i, Position(*p)) for i, p in enumerate(points)))


@pytest.fixture
def path_of():
    return make_path


@pytest.fixture
def square():
    # A(0,0,0) B(1,0,0) C(1,1,0) D(0,1,0): cycle A-B-C-D-A plus diagonal A-C
    g = GraphStore()
    A = g.add_node((0.0, 0.0, 0.0), label="A")
    B = g.add_node((1.0, 0.0, 0.0), label="B")
    C = g.add_node((1.0, 1.0, 0.0), label="C")
    D = g.add_node((0.0, 1.0, 0.0), label="D")
    for a, b in [(A, B), (B, C), (C, D), (D, A), (A, C)]:
        g.connect(a, b)
    return SimpleNamespace(graph=g, A=A, B=B, C=C, D=D)


@pytest.fixture
def square_doc() -> dict:
    return {
        "name": "square",
        "waypoints": [
            {"id": "A", "position": {"x": 0, "y": 0, "z": 0}, "connections": ["B", "D", "C"]},
            {"id": "B", "position": {"x": 1, "y": 0, "z": 0}, "connections": ["A", "C"]},
            {"id": "C", "position": {"x": 1, "y": 1, "z": 0}, "connections": ["B", "D", "A"]},
            {"id": "D", "position": {"x": 0, "y": 1, "z": 0}, "connections": ["C", "A"]},
        ],
    }
