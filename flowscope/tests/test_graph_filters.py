"""Tests for the graph filter pipeline."""

import itertools

import pytest

from flowscope.analysis.graph_filters import (
    apply_filters,
    apply_search,
    filter_by_degree,
    filter_by_kind,
    isolate_component,
    restrict_edges,
)
from flowscope.models.graph_settings import DEFAULT_GRAPH_SETTINGS, GraphSettings
from flowscope.models.graph_topology import GraphData, GraphEdge, GraphNode


def _node(node_id: str, kind: str = "root", label: str | None = None) -> GraphNode:
    return GraphNode(id=node_id, label=label or node_id.upper(), kind=kind)


def _edge(source: str, target: str) -> GraphEdge:
    return GraphEdge(id=f"edge-{source}-{target}", source=source, target=target)


def _sample_graph() -> GraphData:
    """
    root1 -> comp1 -> comp2
    root1 -> ext1
    root2 -> comp2
    comp3 (isolated)
    """
    return GraphData(
        nodes=[
            _node("root1", "root", "Billing root"),
            _node("root2", "root", "Shipping root"),
            _node("comp1", "component", "Billing address"),
            _node("comp2", "component", "Refunds"),
            _node("comp3", "component", "Orphan"),
            _node("ext1", "unknown", "External: ext1"),
        ],
        edges=[
            _edge("root1", "comp1"),
            _edge("comp1", "comp2"),
            _edge("root1", "ext1"),
            _edge("root2", "comp2"),
        ],
    )


def _ids(graph: GraphData) -> set[str]:
    return {n.id for n in graph.nodes}


def _edge_pairs(graph: GraphData) -> set[tuple[str, str]]:
    return {(e.source, e.target) for e in graph.edges}


class TestSearch:
    """Test the label search step."""

    def test_case_insensitive_match(self):
        result = apply_search(_sample_graph(), "BILLING")
        assert _ids(result) == {"root1", "comp1"}
        assert _edge_pairs(result) == {("root1", "comp1")}

    def test_empty_term_keeps_everything(self):
        graph = _sample_graph()
        result = apply_search(graph, "")
        assert result == graph
        assert result is not graph

    def test_no_match(self):
        result = apply_search(_sample_graph(), "nothing like this")
        assert result == GraphData()


class TestKindFilter:
    """Test node kind visibility."""

    def test_hide_roots(self):
        result = filter_by_kind(_sample_graph(), GraphSettings(show_roots=False))
        assert _ids(result) == {"comp1", "comp2", "comp3", "ext1"}
        assert _edge_pairs(result) == {("comp1", "comp2")}

    def test_hide_components(self):
        result = filter_by_kind(_sample_graph(), GraphSettings(show_components=False))
        assert _ids(result) == {"root1", "root2", "ext1"}
        assert _edge_pairs(result) == {("root1", "ext1")}

    def test_hide_external(self):
        result = filter_by_kind(_sample_graph(), GraphSettings(show_external=False))
        assert "ext1" not in _ids(result)
        assert ("root1", "ext1") not in _edge_pairs(result)

    def test_nodes_without_kind_are_kept(self):
        """Operation nodes carry no kind and are never hidden by kind."""
        graph = GraphData(nodes=[GraphNode(id="op-1", label="Start", type="StartOperation")])
        settings = GraphSettings(show_roots=False, show_components=False, show_external=False)
        assert _ids(filter_by_kind(graph, settings)) == {"op-1"}


class TestDegreeFilter:
    """Test the minimum-degree step."""

    def test_threshold_zero_keeps_everything(self):
        graph = _sample_graph()
        assert filter_by_degree(graph, 0) == graph

    def test_threshold_two(self):
        result = filter_by_degree(_sample_graph(), 2)
        assert _ids(result) == {"root1", "comp1", "comp2"}
        assert _edge_pairs(result) == {("root1", "comp1"), ("comp1", "comp2")}

    def test_degree_is_computed_before_removal(self):
        """Nodes are judged on the incoming edge set, not a shrinking one."""
        graph = GraphData(
            nodes=[_node("a"), _node("b"), _node("c")],
            edges=[_edge("a", "b"), _edge("b", "c")],
        )
        result = filter_by_degree(graph, 2)
        assert _ids(result) == {"b"}
        assert result.edges == []


class TestIsolation:
    """Test connected-component isolation."""

    def test_two_disjoint_components(self):
        graph = GraphData(
            nodes=[_node("A"), _node("B"), _node("C"), _node("D")],
            edges=[_edge("A", "B"), _edge("C", "D")],
        )
        result = isolate_component(graph, "A")

        assert _ids(result) == {"A", "B"}
        assert _edge_pairs(result) == {("A", "B")}

    def test_unconnected_selected_node(self):
        graph = GraphData(nodes=[_node("A"), _node("B")])
        result = isolate_component(graph, "A")
        assert _ids(result) == {"A"}
        assert result.edges == []

    def test_edges_walked_in_both_directions(self):
        result = isolate_component(_sample_graph(), "comp2")
        assert _ids(result) == {"root1", "root2", "comp1", "comp2", "ext1"}

    def test_selection_not_in_graph(self):
        graph = _sample_graph()
        assert isolate_component(graph, "gone") == graph

    def test_no_selection(self):
        graph = _sample_graph()
        assert isolate_component(graph, None) == graph


class TestApplyFilters:
    """Test the full pipeline."""

    def test_default_settings_keep_everything(self):
        graph = _sample_graph()
        assert apply_filters(graph, DEFAULT_GRAPH_SETTINGS) == graph

    def test_isolation_needs_the_setting(self):
        graph = _sample_graph()
        result = apply_filters(graph, DEFAULT_GRAPH_SETTINGS, selected_node_id="comp3")
        assert result == graph

    def test_isolation_enabled(self):
        settings = GraphSettings(isolate_selected=True)
        result = apply_filters(_sample_graph(), settings, selected_node_id="comp3")
        assert _ids(result) == {"comp3"}

    def test_search_runs_first(self):
        settings = GraphSettings(isolate_selected=True)
        result = apply_filters(
            _sample_graph(), settings, selected_node_id="root1", search_term="billing"
        )
        assert _ids(result) == {"root1", "comp1"}

    def test_kind_filter_runs_before_degree(self):
        """Hiding roots lowers the degree of the components they pointed to."""
        settings = GraphSettings(show_roots=False, min_connections=1)
        result = apply_filters(_sample_graph(), settings)
        assert _ids(result) == {"comp1", "comp2"}

    def test_isolation_ignored_when_selection_filtered_out(self):
        settings = GraphSettings(show_external=False, isolate_selected=True)
        result = apply_filters(_sample_graph(), settings, selected_node_id="ext1")
        assert _ids(result) == {"root1", "root2", "comp1", "comp2", "comp3"}

    def test_degree_runs_before_isolation(self):
        settings = GraphSettings(min_connections=2, isolate_selected=True)
        result = apply_filters(_sample_graph(), settings, selected_node_id="comp2")
        assert _ids(result) == {"root1", "comp1", "comp2"}

    def test_input_is_not_mutated(self):
        graph = _sample_graph()
        before = graph.model_copy(deep=True)
        apply_filters(
            graph,
            GraphSettings(show_roots=False, min_connections=1, isolate_selected=True),
            selected_node_id="comp1",
            search_term="b",
        )
        assert graph == before

    @pytest.mark.parametrize(
        ("show_roots", "show_components", "show_external", "min_connections", "isolate"),
        list(itertools.product([True, False], [True, False], [True, False], [0, 1, 2], [True, False])),
    )
    def test_output_is_consistent_subgraph(
        self, show_roots, show_components, show_external, min_connections, isolate
    ):
        """Output nodes are a subset of the input, and every edge has both endpoints."""
        graph = _sample_graph()
        settings = GraphSettings(
            show_roots=show_roots,
            show_components=show_components,
            show_external=show_external,
            min_connections=min_connections,
            isolate_selected=isolate,
        )
        result = apply_filters(graph, settings, selected_node_id="comp1")

        assert _ids(result) <= _ids(graph)
        assert {e.id for e in result.edges} <= {e.id for e in graph.edges}
        for edge in result.edges:
            assert edge.source in _ids(result)
            assert edge.target in _ids(result)


class TestRestrictEdges:
    def test_drops_edges_with_missing_endpoint(self):
        nodes = [_node("a"), _node("b")]
        edges = [_edge("a", "b"), _edge("a", "c"), _edge("c", "d")]
        assert restrict_edges(nodes, edges) == [_edge("a", "b")]
