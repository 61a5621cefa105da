"""Build renderable graphs from a parsed dataset.

Two views are supported:

- the flow graph, one node per flow and one edge per distinct
  (source flow, target flow) reference pair;
- the operations graph of a single flow, one node per operation and one
  edge per connection.
"""

from flowscope.models.flow_export import (
    FLOW_LINK_OPERATION,
    RESOLVE_FLOW_OPERATION,
    FlowRecord,
    Operation,
    ParsedData,
)
from flowscope.models.graph_topology import GraphData, GraphEdge, GraphNode
from flowscope.utils.adjacency import compute_degrees
from flowscope.utils.identifiers import (
    flow_edge_id,
    placeholder_name,
    short_id,
    truncate,
)


LABEL_MAX_LENGTH = 30

# friendly labels for operation types that usually carry no name
OPERATION_TYPE_LABELS = {
    "StartOperation": "Start",
    "SuccessHandlerExitOperation": "Success Exit",
    "NoAcceptedSolutionsHandlerExitOperation": "No Solution Exit",
    "SuccessHandlerEnterOperation": "Success Handler",
    "NoAcceptedSolutionsHandlerEnterOperation": "No Solution Handler",
}

# (substrings, category), checked in order, first match wins
OPERATION_CATEGORIES = (
    (("Start",), "start"),
    (("Exit", "Handler"), "handler"),
    (("ResolveFlow", "FlowLink"), "flow"),
    (("Choice", "Search"), "interaction"),
    (("Note",), "note"),
    (("Symptom", "Check"), "check"),
)


def make_placeholder_flow(flow_id: str) -> FlowRecord:
    """Stand-in record for a flow that is referenced but was never ingested.

    The record is stored as a component, while its graph node is shown
    with kind "unknown".
    """
    return FlowRecord(
        id=flow_id,
        name=placeholder_name(flow_id),
        kind="component",
        source_file="unknown",
        operations=[],
        connections=[],
        product_id=0,
        created_at="",
        updated_at="",
        is_placeholder=True,
    )


def _flow_node(flow: FlowRecord) -> GraphNode:
    if flow.is_placeholder:
        return GraphNode(id=flow.id, label=flow.display_name, kind="unknown")
    return GraphNode(
        id=flow.id,
        label=flow.display_name,
        kind=flow.kind,
        source_file=flow.source_file,
    )


def resolve_flow_graph(data: ParsedData) -> tuple[ParsedData, GraphData]:
    """Build the flow graph and the dataset it refers to.

    References to flows missing from the dataset get a placeholder, created
    once per missing id. The returned dataset is a copy of `data` with those
    placeholders added, so later lookups by id resolve the same way the
    graph does. `data` itself is left untouched.

    Returns:
        (dataset including placeholders, flow graph)
    """
    flows = dict(data.flows)
    nodes = [_flow_node(flow) for flow in flows.values()]
    edges: list[GraphEdge] = []
    seen_pairs: set[tuple[str, str]] = set()

    for ref in data.references:
        pair = (ref.source_flow_id, ref.target_flow_id)
        if pair in seen_pairs:
            continue
        seen_pairs.add(pair)

        if ref.target_flow_id not in flows:
            placeholder = make_placeholder_flow(ref.target_flow_id)
            flows[placeholder.id] = placeholder
            nodes.append(_flow_node(placeholder))

        edges.append(GraphEdge(
            id=flow_edge_id(ref.operation_id),
            source=ref.source_flow_id,
            target=ref.target_flow_id,
            operation_type=ref.operation_type,
            label="link" if ref.operation_type == FLOW_LINK_OPERATION else "resolve",
        ))

    resolved = data.model_copy(update={"flows": flows})
    return resolved, GraphData(nodes=nodes, edges=edges)


def build_flow_graph(data: ParsedData) -> GraphData:
    """Build the flow-to-flow graph of a dataset.

    Use resolve_flow_graph when the placeholder records are needed too.
    """
    return resolve_flow_graph(data)[1]


def get_operation_label(op: Operation) -> str:
    """Pick a short human-readable label for an operation.

    Priority: name, then prompt, then text (both truncated), then a label
    derived from the operation type.
    """
    if op.name:
        return op.name
    if op.prompt:
        return truncate(op.prompt, LABEL_MAX_LENGTH)
    if op.text:
        return truncate(op.text, LABEL_MAX_LENGTH)

    if op.type in OPERATION_TYPE_LABELS:
        return OPERATION_TYPE_LABELS[op.type]
    if op.type == RESOLVE_FLOW_OPERATION:
        return f"Resolve: {short_id(op.flow_id)}"
    if op.type == FLOW_LINK_OPERATION:
        return f"Link: {short_id(op.target_flow_id)}"
    return op.type.removesuffix("Operation")


def build_operations_graph(flow: FlowRecord) -> GraphData:
    """Build the operation graph of one flow.

    Connections are passed through as they are: no deduplication and no
    check that both operations exist.
    """
    nodes = [
        GraphNode(
            id=op.id,
            label=get_operation_label(op),
            type=op.type,
            flow_id=op.linked_flow_id,
        )
        for op in flow.operations
    ]
    edges = [
        GraphEdge(
            id=conn.id,
            source=conn.source_operation_id,
            target=conn.target_operation_id,
        )
        for conn in flow.connections
    ]
    return GraphData(nodes=nodes, edges=edges)


def get_operation_category(type_tag: str) -> str:
    """Style category of an operation type tag."""
    for needles, category in OPERATION_CATEGORIES:
        if any(needle in type_tag for needle in needles):
            return category
    return "default"


def with_degrees(graph: GraphData) -> GraphData:
    """Copy of a graph with each node's degree filled in, for sizing."""
    degrees = compute_degrees(graph.edges)
    nodes = [
        node.model_copy(update={"degree": degrees.get(node.id, 0)})
        for node in graph.nodes
    ]
    return GraphData(nodes=nodes, edges=list(graph.edges))
