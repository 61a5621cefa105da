"""Helper functions that get basic statistics and detail views from a dataset.

These back the stats bar and the details panel of a viewer: counts per
flow kind, and for a selected flow or operation, what it references and
what references it.
"""

from dataclasses import dataclass, field

from flowscope.models.flow_export import (
    Connection,
    FlowRecord,
    FlowReference,
    Operation,
    ParsedData,
)
from flowscope.models.graph_topology import GraphData


@dataclass
class DatasetStats:
    """Counts over a whole dataset.

    Placeholders are stored as components, so they are part of
    `components` as well as `external`.
    """

    total: int
    roots: int
    components: int
    external: int
    references: int


@dataclass
class VisibleStats:
    """Size of the graph currently shown."""

    nodes: int
    edges: int


@dataclass
class ReferenceEntry:
    """A reference seen from one of its ends."""

    flow_id: str  # the flow at the other end
    display_name: str
    operation_type: str
    operation_id: str


@dataclass
class FlowDetails:
    """Everything the details panel shows for a flow."""

    flow: FlowRecord
    incoming: list[ReferenceEntry] = field(default_factory=list)
    outgoing: list[ReferenceEntry] = field(default_factory=list)

    @property
    def operation_count(self) -> int:
        return len(self.flow.operations)

    @property
    def connection_count(self) -> int:
        return len(self.flow.connections)


@dataclass
class OperationDetails:
    """Everything the details panel shows for an operation."""

    operation: Operation
    flow_id: str
    incoming: list[Connection] = field(default_factory=list)
    outgoing: list[Connection] = field(default_factory=list)
    linked_flow: FlowRecord | None = None


def dataset_stats(data: ParsedData) -> DatasetStats:
    """Count flows per kind and references in a dataset."""
    flows = list(data.flows.values())
    return DatasetStats(
        total=len(flows),
        roots=sum(1 for f in flows if f.kind == "root"),
        components=sum(1 for f in flows if f.kind == "component"),
        external=sum(1 for f in flows if f.is_placeholder),
        references=len(data.references),
    )


def visible_stats(graph: GraphData) -> VisibleStats:
    return VisibleStats(nodes=len(graph.nodes), edges=len(graph.edges))


def reference_display_name(data: ParsedData, flow_id: str) -> str:
    """Name of a flow for listings, or the tail of its id when unknown."""
    flow = data.flows.get(flow_id)
    if flow and flow.name:
        return flow.name
    return flow_id[-8:]


def _entry(data: ParsedData, ref: FlowReference, other_flow_id: str) -> ReferenceEntry:
    return ReferenceEntry(
        flow_id=other_flow_id,
        display_name=reference_display_name(data, other_flow_id),
        operation_type=ref.operation_type,
        operation_id=ref.operation_id,
    )


def flow_details(data: ParsedData, flow_id: str) -> FlowDetails | None:
    """Collect a flow together with its incoming and outgoing references.

    Every reference is listed, including several between the same pair of
    flows, which the flow graph collapses into one edge.
    """
    flow = data.flows.get(flow_id)
    if flow is None:
        return None

    incoming = [
        _entry(data, ref, ref.source_flow_id)
        for ref in data.references
        if ref.target_flow_id == flow_id
    ]
    outgoing = [
        _entry(data, ref, ref.target_flow_id)
        for ref in data.references
        if ref.source_flow_id == flow_id
    ]
    return FlowDetails(flow=flow, incoming=incoming, outgoing=outgoing)


def operation_details(
    data: ParsedData,
    flow: FlowRecord,
    operation_id: str,
) -> OperationDetails | None:
    """Collect an operation with its connections and the flow it links to."""
    operation = next((op for op in flow.operations if op.id == operation_id), None)
    if operation is None:
        return None

    linked_flow_id = operation.linked_flow_id
    return OperationDetails(
        operation=operation,
        flow_id=flow.id,
        incoming=[c for c in flow.connections if c.target_operation_id == operation_id],
        outgoing=[c for c in flow.connections if c.source_operation_id == operation_id],
        linked_flow=data.flows.get(linked_flow_id) if linked_flow_id else None,
    )


def format_stats(stats: DatasetStats, warnings: list[str] | None = None) -> str:
    """Format dataset statistics for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append("FLOW EXPORT SUMMARY")
    lines.append("=" * 60)
    lines.append("")
    lines.append(f"Flows:       {stats.total}")
    lines.append(f"  Root:      {stats.roots}")
    lines.append(f"  Component: {stats.components}")
    lines.append(f"  External:  {stats.external}")
    lines.append(f"References:  {stats.references}")
    lines.append("")

    if warnings:
        lines.append("-" * 40)
        lines.append("SKIPPED")
        lines.append("-" * 40)
        for message in warnings:
            lines.append(f"  • {message}")
        lines.append("")

    return "\n".join(lines)
