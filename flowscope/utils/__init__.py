"""Utility functions for flowscope."""

from flowscope.utils.adjacency import (
    build_adjacency,
    compute_degrees,
    connected_nodes,
)
from flowscope.utils.identifiers import (
    flow_edge_id,
    placeholder_name,
    short_id,
    truncate,
)

__all__ = [
    "build_adjacency",
    "compute_degrees",
    "connected_nodes",
    "flow_edge_id",
    "placeholder_name",
    "short_id",
    "truncate",
]
