# waypoint_nav/io/snapshot.py
"""Graph snapshots exchanged with the map editor.

A document is a list of ``{id, position: {x, y, z}, connections: [id, ...]}``
records. Editor ids (strings or ints) become node labels in the GraphStore;
every connection goes through ``GraphStore.connect`` so the loaded graph is
symmetric by construction.
"""

from __future__ import annotations

import math
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waypoint_nav.domain.graph_store import GraphStore
from waypoint_nav.errors import AsymmetricConnection, DuplicateWaypoint, NodeNotFound, SelfLoop


class PositionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    x: float
    y: float
    z: float

    @field_validator("x", "y", "z")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinates must be finite")
        return v


class WaypointRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str | int
    position: PositionModel
    connections: list[str | int] = Field(default_factory=list)


class GraphDocument(BaseModel):
    # saved maps also carry editor-only keys (e.g. AR "features"); ignore them
    model_config = ConfigDict(extra="ignore")
    name: str | None = None
    waypoints: list[WaypointRecord] = Field(default_factory=list)


def load_graph(doc: GraphDocument | dict, *, symmetrize: bool = False) -> GraphStore:
    doc = doc if isinstance(doc, GraphDocument) else GraphDocument.model_validate(doc)

    listed: dict[str, set[str]] = {}
    for rec in doc.waypoints:
        key = str(rec.id)
        if key in listed:
            raise DuplicateWaypoint(rec.id)
        listed[key] = {str(c) for c in rec.connections}

    # validate everything before building, so a bad document yields no store at all
    for key, conns in listed.items():
        for other in sorted(conns):
            if other == key:
                raise SelfLoop(key)
            if other not in listed:
                raise NodeNotFound(other)
            if key not in listed[other] and not symmetrize:
                raise AsymmetricConnection(key, other)

    store = GraphStore()
    ids = {str(rec.id): store.add_node(rec.position, label=str(rec.id)) for rec in doc.waypoints}
    for key, conns in listed.items():
        for other in sorted(conns):
            store.connect(ids[key], ids[other])
    return store


def dump_graph(store: GraphStore, *, name: str | None = None) -> GraphDocument:
    # external ids must stay unique: unlabeled nodes get a prefixed key, and a
    # clash with an earlier key gets a numeric suffix
    keys: dict[int, str] = {}
    used: set[str] = set()
    for nid in store.node_ids():
        lbl = store.label(nid)
        base = lbl if lbl is not None else f"node-{nid}"
        k, i = base, 1
        while k in used:
            k, i = f"{base}~{i}", i + 1
        keys[nid] = k
        used.add(k)

    def key(nid: int) -> str:
        return keys[nid]

    return GraphDocument(
        name=name,
        waypoints=[
            WaypointRecord(
                id=key(nid),
                position=PositionModel(**store.position(nid).as_dict()),
                connections=[key(n) for n in store.neighbors(nid)],
            )
            for nid in store.node_ids()
        ],
    )


def load_graph_from_path(file: str | Path, *, symmetrize: bool = False) -> GraphStore:
    text = Path(file).read_text(encoding="utf-8")
    return load_graph(GraphDocument.model_validate_json(text), symmetrize=symmetrize)


def save_graph(store: GraphStore, file: str | Path, *, name: str | None = None) -> None:
    Path(file).write_text(dump_graph(store, name=name).model_dump_json(indent=2), encoding="utf-8")
