"""Flowscope - reference graphs and operation graphs for flow export files."""

from flowscope.models import (
    DEFAULT_GRAPH_SETTINGS,
    FlowRecord,
    FlowReference,
    GraphData,
    GraphEdge,
    GraphNode,
    GraphSettings,
    ParsedData,
)
from flowscope.analysis import (
    apply_filters,
    build_flow_graph,
    build_operations_graph,
    get_operation_category,
    parse_flow_files,
    resolve_flow_graph,
)
from flowscope.sdk import FlowSession

__all__ = [
    # Models
    "DEFAULT_GRAPH_SETTINGS",
    "FlowRecord",
    "FlowReference",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "GraphSettings",
    "ParsedData",
    # Core functions
    "apply_filters",
    "build_flow_graph",
    "build_operations_graph",
    "get_operation_category",
    "parse_flow_files",
    "resolve_flow_graph",
    # High-level APIs
    "FlowSession",
]
