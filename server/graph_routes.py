"""API routes for graphs and flow/operation details."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from flowscope.analysis.dataset_summary import (
    FlowDetails,
    OperationDetails,
    flow_details,
    operation_details,
)
from flowscope.analysis.graph_builder import (
    build_operations_graph,
    get_operation_category,
    with_degrees,
)
from flowscope.models.flow_export import FlowRecord
from flowscope.models.graph_topology import GraphData
from flowscope.sdk.session import FlowNotFoundError
from server.session_routes import SessionState, require_loaded, session_state
from server.session_store import get_session, update_session

router = APIRouter()


def _flow_to_dict(flow: FlowRecord) -> dict:
    d = flow.model_dump(
        mode="json",
        include={
            "id", "name", "kind", "source_file", "product_id",
            "created_at", "updated_at", "is_placeholder",
        },
    )
    d["operation_count"] = len(flow.operations)
    d["connection_count"] = len(flow.connections)
    return d


def _flow_details_to_dict(details: FlowDetails) -> dict:
    return {
        "flow": _flow_to_dict(details.flow),
        "incoming": [asdict(entry) for entry in details.incoming],
        "outgoing": [asdict(entry) for entry in details.outgoing],
    }


def _operation_details_to_dict(details: OperationDetails) -> dict:
    linked = details.linked_flow
    return {
        "operation": details.operation.model_dump(mode="json", by_alias=True),
        "flow_id": details.flow_id,
        "category": get_operation_category(details.operation.type),
        "incoming": len(details.incoming),
        "outgoing": len(details.outgoing),
        "linked_flow": {"id": linked.id, "name": linked.name} if linked else None,
    }


def _render(graph: GraphData, elements: bool) -> GraphData | list[dict]:
    return graph.to_elements() if elements else graph


def _get_flow(flow_id: str) -> FlowRecord:
    data = require_loaded(get_session()).data
    flow = data.flows.get(flow_id)
    if flow is None:
        raise HTTPException(status_code=404, detail=f"Flow not found: {flow_id}")
    return flow


@router.get("/graph")
def get_graph(elements: bool = False) -> GraphData | list[dict]:
    """the graph of the current view, with filters applied.

    Node degrees are filled in when the settings ask for size-by-degree.
    Pass `elements=true` for the flat renderer element list.
    """
    session = require_loaded(get_session())
    graph = session.graph()
    if graph is None:
        raise HTTPException(status_code=404, detail="No flow selected")
    if session.settings.size_by_connections:
        graph = with_degrees(graph)
    return _render(graph, elements)


@router.get("/details")
def get_selected_details() -> dict | None:
    """details of the selected node in the current view."""
    details = require_loaded(get_session()).selected_details()
    if isinstance(details, FlowDetails):
        return _flow_details_to_dict(details)
    if isinstance(details, OperationDetails):
        return _operation_details_to_dict(details)
    return None


@router.get("/flows/{flow_id}")
def get_flow(flow_id: str) -> dict:
    """a flow with the references into and out of it."""
    data = require_loaded(get_session()).data
    details = flow_details(data, flow_id)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Flow not found: {flow_id}")
    return _flow_details_to_dict(details)


@router.get("/flows/{flow_id}/operations")
def get_operations_graph(flow_id: str, elements: bool = False) -> GraphData | list[dict]:
    """the operation graph of any flow, unfiltered."""
    return _render(build_operations_graph(_get_flow(flow_id)), elements)


@router.get("/flows/{flow_id}/operations/{operation_id}")
def get_operation(flow_id: str, operation_id: str) -> dict:
    flow = _get_flow(flow_id)
    details = operation_details(get_session().data, flow, operation_id)
    if details is None:
        raise HTTPException(
            status_code=404,
            detail=f"Operation not found: {flow_id}/{operation_id}",
        )
    return _operation_details_to_dict(details)


@router.post("/flows/{flow_id}/drill-down")
def drill_down(flow_id: str) -> SessionState:
    """switch the session to the operations view of a flow."""
    try:
        session = update_session(
            lambda session: require_loaded(session).drill_down(flow_id)
        )
    except FlowNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return session_state(session)


@router.get("/operation-category/{type_tag}")
def operation_category(type_tag: str) -> dict:
    return {"type": type_tag, "category": get_operation_category(type_tag)}
