"""Data model for renderable graphs.

Both the flow overview and the per-flow operation view are expressed as a
GraphData value. A renderer only needs the nodes and edges; anything
layout or style related is its own business.
"""

from typing import Literal

from pydantic import BaseModel, Field


NodeKind = Literal["root", "component", "unknown"]


class GraphNode(BaseModel):
    """a node in either graph view."""

    id: str
    label: str
    kind: NodeKind | None = None  # flow view only
    type: str | None = None  # operation view: the operation type tag
    source_file: str | None = None  # flow view: origin file
    flow_id: str | None = None  # operation view: flow referenced by the operation
    degree: int | None = None  # only set for size-by-degree rendering


class GraphEdge(BaseModel):
    """a directed edge between two nodes."""

    id: str
    source: str
    target: str
    label: str | None = None
    operation_type: str | None = None


class GraphData(BaseModel):
    """a set of nodes and edges, as handed to a renderer."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def to_elements(self) -> list[dict]:
        """Flatten into the `{"group", "data"}` element list renderers expect."""
        elements = [
            {"group": "nodes", "data": node.model_dump(exclude_none=True)}
            for node in self.nodes
        ]
        elements.extend(
            {"group": "edges", "data": edge.model_dump(exclude_none=True)}
            for edge in self.edges
        )
        return elements
