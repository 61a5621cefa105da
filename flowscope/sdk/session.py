"""Session state for a flow viewer.

A FlowSession holds everything a viewer shell needs between user actions:
the loaded dataset, the current view, the selection, the search term and
the graph settings. It is immutable; every action returns a new session
and the previous one stays valid.

Example:
    from flowscope.sdk import FlowSession

    session = FlowSession().load(documents)
    session = session.handle_node_click("flow-1").drill_down("flow-1")
    graph = session.graph()
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from flowscope.analysis.dataset_summary import (
    DatasetStats,
    FlowDetails,
    OperationDetails,
    VisibleStats,
    dataset_stats,
    flow_details,
    operation_details,
    visible_stats,
)
from flowscope.analysis.flow_parser import parse_flow_files
from flowscope.analysis.graph_builder import (
    build_flow_graph,
    build_operations_graph,
    resolve_flow_graph,
)
from flowscope.analysis.graph_filters import apply_filters
from flowscope.models.flow_export import FlowRecord, ParsedData
from flowscope.models.graph_settings import DEFAULT_GRAPH_SETTINGS, GraphSettings
from flowscope.models.graph_topology import GraphData


ViewMode = Literal["flows", "operations"]


class FlowNotFoundError(LookupError):
    """Raised when an action names a flow that is not in the dataset."""


class FlowSession(BaseModel):
    """Immutable snapshot of a viewer's state."""

    model_config = ConfigDict(frozen=True)

    data: ParsedData | None = None
    view_mode: ViewMode = "flows"
    selected_node_id: str | None = None
    selected_flow_id: str | None = None
    search_term: str = ""
    settings: GraphSettings = DEFAULT_GRAPH_SETTINGS

    def _replace(self, **changes: Any) -> FlowSession:
        return self.model_copy(update=changes)

    # actions

    def load(self, files: list[tuple[str, Any]]) -> FlowSession:
        """Parse a batch of export documents, replacing any loaded dataset."""
        return self.load_dataset(parse_flow_files(files))

    def load_dataset(self, data: ParsedData) -> FlowSession:
        """Use an already parsed dataset, replacing any loaded one.

        Placeholders for missing flows are added right away, so details of
        external nodes can be looked up like any other flow.
        """
        resolved, _ = resolve_flow_graph(data)
        return self._replace(
            data=resolved,
            view_mode="flows",
            selected_node_id=None,
            selected_flow_id=None,
        )

    def reset(self) -> FlowSession:
        """Discard the dataset and go back to default settings."""
        return FlowSession()

    def handle_node_click(self, node_id: str) -> FlowSession:
        """React to a node being tapped in the renderer."""
        return self._replace(selected_node_id=node_id)

    def drill_down(self, flow_id: str) -> FlowSession:
        """Switch to the operations view of a flow.

        Raises:
            FlowNotFoundError: if no dataset is loaded or the flow is unknown.
        """
        if self.data is None or flow_id not in self.data.flows:
            raise FlowNotFoundError(f"Flow not found: {flow_id}")
        return self._replace(
            view_mode="operations",
            selected_flow_id=flow_id,
            selected_node_id=None,
        )

    def back_to_flows(self) -> FlowSession:
        """Return to the flow view with the flow just viewed selected."""
        return self._replace(view_mode="flows", selected_node_id=self.selected_flow_id)

    def change_view(self, mode: ViewMode) -> FlowSession:
        """Switch view mode.

        Asking for the operations view while a flow node is selected opens
        that flow's operations.
        """
        if (
            mode == "operations"
            and self.selected_node_id
            and self.data is not None
            and self.selected_node_id in self.data.flows
        ):
            return self.drill_down(self.selected_node_id)
        return self._replace(view_mode=mode)

    def with_search(self, search_term: str) -> FlowSession:
        return self._replace(search_term=search_term)

    def with_settings(self, settings: GraphSettings) -> FlowSession:
        return self._replace(settings=settings)

    # queries

    @property
    def selected_flow(self) -> FlowRecord | None:
        if self.data is None or self.selected_flow_id is None:
            return None
        return self.data.flows.get(self.selected_flow_id)

    def graph(self) -> GraphData | None:
        """The graph to render for the current view, filters applied.

        The operations view is shown unfiltered.
        """
        if self.data is None:
            return None

        if self.view_mode == "flows":
            return apply_filters(
                build_flow_graph(self.data),
                self.settings,
                self.selected_node_id,
                search_term=self.search_term,
            )

        flow = self.selected_flow
        if flow is None:
            return None
        return build_operations_graph(flow)

    def stats(self) -> DatasetStats | None:
        if self.data is None:
            return None
        return dataset_stats(self.data)

    def visible_stats(self) -> VisibleStats | None:
        graph = self.graph()
        if graph is None:
            return None
        return visible_stats(graph)

    def selected_details(self) -> FlowDetails | OperationDetails | None:
        """Details of the selected node in the current view."""
        if self.data is None or self.selected_node_id is None:
            return None
        if self.view_mode == "flows":
            return flow_details(self.data, self.selected_node_id)
        flow = self.selected_flow
        if flow is None:
            return None
        return operation_details(self.data, flow, self.selected_node_id)
