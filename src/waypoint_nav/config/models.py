# waypoint_nav/config/models.py
import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waypoint_nav.io.snapshot import GraphDocument


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- SEARCH ---------------------


class LinearScanFrontierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["linear_scan"] = "linear_scan"


class HeapFrontierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["heap"] = "heap"


FrontierUnion = Annotated[
    LinearScanFrontierModel | HeapFrontierModel,
    Field(discriminator="kind"),
]


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    frontier: FrontierUnion = Field(default_factory=LinearScanFrontierModel)


# ----------------- FOLLOWER ---------------------


class FollowerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    arrival_threshold: float = 0.5  # same length-units as waypoint positions

    @field_validator("arrival_threshold")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError("arrival_threshold must be finite and > 0")
        return v


# ----------------- GRAPH SOURCE ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    symmetrize: bool = False
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class GraphInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    document: GraphDocument
    symmetrize: bool = False


GraphRef = Annotated[GraphByPath | GraphInline, Field(discriminator="by")]


# ------------------------------------------------------------------


class NavigatorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    search: SearchModel = SearchModel()
    follower: FollowerModel = FollowerModel()
    graph: GraphRef | None = None
