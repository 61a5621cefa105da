"""Parsing, graph building and filtering for flow exports."""

from flowscope.analysis.flow_parser import (
    FlowExportWarning,
    extract_flow_reference,
    parse_flow_files,
)
from flowscope.analysis.graph_builder import (
    build_flow_graph,
    build_operations_graph,
    get_operation_category,
    get_operation_label,
    make_placeholder_flow,
    resolve_flow_graph,
    with_degrees,
)
from flowscope.analysis.graph_filters import (
    apply_filters,
    apply_search,
    filter_by_degree,
    filter_by_kind,
    isolate_component,
    restrict_edges,
)
from flowscope.analysis.dataset_summary import (
    DatasetStats,
    FlowDetails,
    OperationDetails,
    ReferenceEntry,
    VisibleStats,
    dataset_stats,
    flow_details,
    format_stats,
    operation_details,
    visible_stats,
)

__all__ = [
    # flow_parser exports
    "FlowExportWarning",
    "extract_flow_reference",
    "parse_flow_files",
    # graph_builder exports
    "build_flow_graph",
    "build_operations_graph",
    "get_operation_category",
    "get_operation_label",
    "make_placeholder_flow",
    "resolve_flow_graph",
    "with_degrees",
    # graph_filters exports
    "apply_filters",
    "apply_search",
    "filter_by_degree",
    "filter_by_kind",
    "isolate_component",
    "restrict_edges",
    # dataset_summary exports
    "DatasetStats",
    "FlowDetails",
    "OperationDetails",
    "ReferenceEntry",
    "VisibleStats",
    "dataset_stats",
    "flow_details",
    "format_stats",
    "operation_details",
    "visible_stats",
]
