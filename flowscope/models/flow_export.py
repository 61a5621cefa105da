"""
Data models for exported support models (flows).

Export files are camelCase JSON. Every model accepts both the camelCase
alias and the snake_case field name, and keeps unknown fields around
without looking at them.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


FlowKind = Literal["root", "component"]
ReferenceType = Literal["ResolveFlowOperation", "FlowLinkOperation"]

RESOLVE_FLOW_OPERATION = "ResolveFlowOperation"
FLOW_LINK_OPERATION = "FlowLinkOperation"


def _as_text(value: Any) -> str | None:
    """Best-effort string for free-text export fields; anything else is dropped."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class ExportModel(BaseModel):
    """base for models read from export files."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Operation(ExportModel):
    """a single step inside a flow's logic graph."""

    id: str
    type: str

    # ResolveFlowOperation
    flow_id: str | None = None
    # FlowLinkOperation
    target_flow_id: str | None = None

    name: str | None = None
    prompt: str | None = None
    details: str | None = None
    text: str | None = None

    # layout coordinates, opaque, only meaningful to a renderer
    cx: Any = None
    cy: Any = None

    @field_validator("flow_id", "target_flow_id", "name", "prompt", "details", "text", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> Any:
        return _as_text(value)

    @property
    def linked_flow_id(self) -> str | None:
        return self.flow_id or self.target_flow_id


class Connection(ExportModel):
    """a directed edge between two operations of the same flow."""

    id: str
    source_operation_id: str
    target_operation_id: str


class FlowRecord(ExportModel):
    """one support model, as ingested from an export file."""

    id: str
    name: str = ""
    kind: FlowKind
    source_file: str = "unknown"
    operations: list[Operation] = Field(default_factory=list)
    connections: list[Connection] = Field(default_factory=list)
    product_id: int = 0
    created_at: str = ""
    updated_at: str = ""

    # set on stand-ins synthesized for referenced-but-missing flows
    is_placeholder: bool = False

    @field_validator("operations", "connections", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("name", "created_at", "updated_at", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        return _as_text(value) or ""

    @field_validator("product_id", mode="before")
    @classmethod
    def _int_or_zero(cls, value: Any) -> Any:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @property
    def display_name(self) -> str:
        return self.name or self.id


class FlowReference(BaseModel):
    """a cross-flow edge derived from a resolve or link operation."""

    source_flow_id: str
    target_flow_id: str
    operation_type: ReferenceType
    operation_id: str
    operation_name: str | None = None


class ParsedData(BaseModel):
    """the normalized dataset built from a batch of export files.

    `flows` keeps ingestion order. `warnings` lists every document or entry
    that was skipped while parsing.
    """

    flows: dict[str, FlowRecord] = Field(default_factory=dict)
    references: list[FlowReference] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def get_flow(self, flow_id: str) -> FlowRecord | None:
        return self.flows.get(flow_id)
