"""Degree and reachability helpers over an edge list."""

from collections import defaultdict, deque
from collections.abc import Iterable

from flowscope.models.graph_topology import GraphEdge


def compute_degrees(edges: Iterable[GraphEdge]) -> dict[str, int]:
    """Count how many edges touch each node.

    A node gains one for every edge it is the source of and one for every
    edge it is the target of, so a self-loop counts twice. Nodes without
    edges are absent from the result.
    """
    degrees: dict[str, int] = defaultdict(int)
    for edge in edges:
        degrees[edge.source] += 1
        degrees[edge.target] += 1
    return dict(degrees)


def build_adjacency(edges: Iterable[GraphEdge]) -> dict[str, list[str]]:
    """Undirected adjacency lists: every edge is walkable both ways."""
    adjacency: dict[str, list[str]] = defaultdict(list)
    for edge in edges:
        adjacency[edge.source].append(edge.target)
        adjacency[edge.target].append(edge.source)
    return dict(adjacency)


def connected_nodes(start_node_id: str, edges: Iterable[GraphEdge]) -> set[str]:
    """Breadth-first search for the connected component of a node.

    Args:
        start_node_id: node to start from. Always part of the result, even
            when no edge touches it.
        edges: edges to walk, direction ignored.

    Returns:
        ids of every node reachable from the start node.
    """
    adjacency = build_adjacency(edges)
    connected = {start_node_id}
    queue = deque([start_node_id])

    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, []):
            if neighbor not in connected:
                connected.add(neighbor)
                queue.append(neighbor)

    return connected
