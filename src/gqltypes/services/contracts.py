"""Typed payload contracts for service boundaries.

These models validate payload shapes before they leave the service
layer so that key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

type Severity = Literal["warning", "error"]


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class SchemaIssue(BaseModel):
    """One finding returned by ``CheckService.check``."""

    model_config = ConfigDict(extra="allow")

    category: str
    severity: Severity
    code: str
    message: str
    type_name: str | None = None
    field_name: str | None = None


class CheckResultData(BaseModel):
    """Payload contract for ``CheckService.check``."""

    issues: list[SchemaIssue]
    count: int
    error_count: int
    warning_count: int
    healthy: bool
    types_checked: int


class TypeSummary(BaseModel):
    name: str
    kind: str
    fields: int | None = None
    resolved: bool | None = None


class SdlResultData(BaseModel):
    """Payload contract for ``ExportService.sdl``."""

    sdl: str
    type_count: int
    types: list[TypeSummary] = Field(default_factory=list)


class GraphEdge(BaseModel):
    source: str
    target: str
    via: list[str]


class GraphResultData(BaseModel):
    """Payload contract for ``GraphService.summary``."""

    nodes: list[str]
    edges: list[GraphEdge]
    node_count: int
    edge_count: int


class CyclesResultData(BaseModel):
    cycles: list[list[str]]
    count: int


class ReachableResultData(BaseModel):
    source: str
    reachable: list[str]
    count: int
