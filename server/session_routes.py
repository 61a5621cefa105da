"""API routes for loading exports and driving the viewer session."""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from flowscope.analysis.flow_parser import parse_flow_files
from flowscope.models.graph_settings import GraphSettings
from flowscope.sdk.session import FlowSession, ViewMode
from server.session_store import get_session, reset_session, update_session

router = APIRouter()


class ExportDocumentIn(BaseModel):
    """one export file: its name and decoded JSON content."""

    name: str
    content: Any = None


class LoadDatasetRequest(BaseModel):
    """request body for replacing the loaded dataset."""

    documents: list[ExportDocumentIn]


class SelectRequest(BaseModel):
    node_id: str


class SearchRequest(BaseModel):
    term: str = ""


class ViewRequest(BaseModel):
    mode: ViewMode


class SessionState(BaseModel):
    """what a shell needs to restore its controls."""

    loaded: bool
    view_mode: ViewMode
    selected_node_id: str | None
    selected_flow_id: str | None
    search_term: str
    settings: GraphSettings
    warnings: list[str]


def session_state(session: FlowSession) -> SessionState:
    return SessionState(
        loaded=session.data is not None,
        view_mode=session.view_mode,
        selected_node_id=session.selected_node_id,
        selected_flow_id=session.selected_flow_id,
        search_term=session.search_term,
        settings=session.settings,
        warnings=session.data.warnings if session.data else [],
    )


def require_loaded(session: FlowSession) -> FlowSession:
    if session.data is None:
        raise HTTPException(status_code=409, detail="No export files loaded")
    return session


@router.get("/session")
def get_session_state() -> SessionState:
    """current view, selection, search and settings."""
    return session_state(get_session())


@router.put("/dataset")
def load_dataset(request: LoadDatasetRequest) -> SessionState:
    """replace the dataset with a new batch of export documents.

    Documents that cannot be used are skipped and listed in `warnings`.
    """
    files = [(doc.name, doc.content) for doc in request.documents]
    data = parse_flow_files(files)
    return session_state(update_session(lambda session: session.load_dataset(data)))


@router.delete("/dataset")
def delete_dataset() -> SessionState:
    """discard the dataset and reset search and settings."""
    return session_state(reset_session())


@router.get("/stats")
def get_stats() -> dict:
    """flow counts for the whole dataset and for the visible graph."""
    session = require_loaded(get_session())
    visible = session.visible_stats()
    return {
        "dataset": asdict(session.stats()),
        "visible": asdict(visible) if visible else None,
    }


@router.put("/settings")
def update_settings(settings: GraphSettings) -> SessionState:
    return session_state(update_session(lambda session: session.with_settings(settings)))


@router.put("/search")
def update_search(request: SearchRequest) -> SessionState:
    return session_state(update_session(lambda session: session.with_search(request.term)))


@router.post("/select")
def select_node(request: SelectRequest) -> SessionState:
    """record a node tapped in the renderer."""
    return session_state(update_session(
        lambda session: require_loaded(session).handle_node_click(request.node_id)
    ))


@router.put("/view")
def change_view(request: ViewRequest) -> SessionState:
    return session_state(update_session(
        lambda session: require_loaded(session).change_view(request.mode)
    ))


@router.post("/back")
def back_to_flows() -> SessionState:
    return session_state(update_session(
        lambda session: require_loaded(session).back_to_flows()
    ))
