# waypoint_nav/runtime/registries.py
import os
from collections.abc import Callable

from waypoint_nav.app.protocols import Frontier
from waypoint_nav.config.models import (
    FrontierUnion,
    GraphByPath,
    GraphInline,
    GraphRef,
    HeapFrontierModel,
    LinearScanFrontierModel,
)
from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.domain.pathfinding.frontiers import HeapFrontier, LinearScanFrontier
from waypoint_nav.io.snapshot import load_graph, load_graph_from_path

FrontierFactory = Callable[[FrontierUnion], Callable[[], Frontier]]

_frontier_registry: dict[str, FrontierFactory] = {}


# ------------------- Frontier registry ---------------------------


def register_frontier(kind: str):
    def deco(fn: FrontierFactory):
        _frontier_registry[kind] = fn
        return fn

    return deco


def make_frontier_factory(cfg: FrontierUnion) -> Callable[[], Frontier]:
    try:
        factory = _frontier_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown frontier kind {cfg.kind!r}") from None
    return factory(cfg)


@register_frontier("linear_scan")
def _make_linear_scan(cfg: LinearScanFrontierModel):
    return LinearScanFrontier


@register_frontier("heap")
def _make_heap(cfg: HeapFrontierModel):
    return HeapFrontier


# ----- Graph sources --------------------------


def resolve_graph(ref: GraphRef | None, *, deps: dict) -> GraphStore:
    """
    deps can include:
      - 'graph': GraphStore   # a prebuilt store, used when ref is None
    """
    if ref is None:
        g = deps.get("graph")
        return g if g is not None else GraphStore()
    if isinstance(ref, GraphByPath):
        if not os.path.exists(ref.file):
            if ref.must_exist:
                raise FileNotFoundError(ref.file)
            return GraphStore()
        return load_graph_from_path(ref.file, symmetrize=ref.symmetrize)
    if isinstance(ref, GraphInline):
        return load_graph(ref.document, symmetrize=ref.symmetrize)
    raise TypeError(ref)
