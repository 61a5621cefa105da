"""Core data models for flowscope."""

from flowscope.models.flow_export import (
    FLOW_LINK_OPERATION,
    RESOLVE_FLOW_OPERATION,
    Connection,
    FlowKind,
    FlowRecord,
    FlowReference,
    Operation,
    ParsedData,
)
from flowscope.models.graph_topology import (
    GraphData,
    GraphEdge,
    GraphNode,
    NodeKind,
)
from flowscope.models.graph_settings import (
    DEFAULT_GRAPH_SETTINGS,
    GraphSettings,
    LayoutType,
)

__all__ = [
    # Export records
    "FLOW_LINK_OPERATION",
    "RESOLVE_FLOW_OPERATION",
    "Connection",
    "FlowKind",
    "FlowRecord",
    "FlowReference",
    "Operation",
    "ParsedData",
    # Graphs
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "NodeKind",
    # Settings
    "DEFAULT_GRAPH_SETTINGS",
    "GraphSettings",
    "LayoutType",
]
