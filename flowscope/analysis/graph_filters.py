"""Filter pipeline turning a full graph into the visible subgraph.

Filters run in a fixed order, each on the previous step's output:

1. text search on node labels
2. node kind visibility
3. minimum degree
4. isolation of the selected node's connected component

Every step only removes nodes, then drops edges that lost an endpoint.
Inputs are never modified; each step returns a new GraphData.
"""

from collections.abc import Iterable

from flowscope.models.graph_settings import GraphSettings
from flowscope.models.graph_topology import GraphData, GraphEdge, GraphNode
from flowscope.utils.adjacency import compute_degrees, connected_nodes


def restrict_edges(nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> list[GraphEdge]:
    """Keep only edges whose source and target are both among `nodes`."""
    node_ids = {node.id for node in nodes}
    return [e for e in edges if e.source in node_ids and e.target in node_ids]


def _subgraph(graph: GraphData, keep: set[str]) -> GraphData:
    nodes = [node for node in graph.nodes if node.id in keep]
    return GraphData(nodes=nodes, edges=restrict_edges(nodes, graph.edges))


def apply_search(graph: GraphData, search_term: str) -> GraphData:
    """Keep nodes whose label contains the search term, ignoring case."""
    if not search_term:
        return _subgraph(graph, graph.node_ids())
    needle = search_term.lower()
    matching = {node.id for node in graph.nodes if needle in node.label.lower()}
    return _subgraph(graph, matching)


def filter_by_kind(graph: GraphData, settings: GraphSettings) -> GraphData:
    """Drop root, component or external nodes the settings hide."""
    hidden: set[str] = set()
    if not settings.show_roots:
        hidden.add("root")
    if not settings.show_components:
        hidden.add("component")
    if not settings.show_external:
        hidden.add("unknown")

    keep = {node.id for node in graph.nodes if node.kind not in hidden}
    return _subgraph(graph, keep)


def filter_by_degree(graph: GraphData, min_connections: int) -> GraphData:
    """Drop nodes touched by fewer than `min_connections` edges."""
    if min_connections <= 0:
        return _subgraph(graph, graph.node_ids())
    degrees = compute_degrees(graph.edges)
    keep = {
        node.id
        for node in graph.nodes
        if degrees.get(node.id, 0) >= min_connections
    }
    return _subgraph(graph, keep)


def isolate_component(graph: GraphData, selected_node_id: str | None) -> GraphData:
    """Keep only the connected component containing the selected node.

    Does nothing when no node is selected or the selection is not part of
    the graph anymore.
    """
    if not selected_node_id or selected_node_id not in graph.node_ids():
        return _subgraph(graph, graph.node_ids())
    return _subgraph(graph, connected_nodes(selected_node_id, graph.edges))


def apply_filters(
    graph: GraphData,
    settings: GraphSettings,
    selected_node_id: str | None = None,
    search_term: str = "",
) -> GraphData:
    """Run the full filter pipeline.

    Args:
        graph: the unfiltered graph.
        settings: current graph settings. Cosmetic options are ignored.
        selected_node_id: node the user selected, used for isolation.
        search_term: label search, applied before everything else. Callers
            pass it for the flow view only.

    Returns:
        the visible subgraph.
    """
    result = apply_search(graph, search_term)
    result = filter_by_kind(result, settings)
    result = filter_by_degree(result, settings.min_connections)
    if settings.isolate_selected:
        result = isolate_component(result, selected_node_id)
    return result
