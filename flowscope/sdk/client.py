"""HTTP client for a running flowscope server.

so a script or notebook can push exports and pull graphs with a few calls:
client.upload(documents); graph = client.graph()
"""

from __future__ import annotations

from typing import Any

import httpx

from flowscope.models.graph_settings import GraphSettings
from flowscope.models.graph_topology import GraphData


class FlowscopeClientError(Exception):
    """Exception raised when a request to the server fails."""
    pass


class FlowscopeClient:
    """Talk to the flowscope API server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the flowscope server
            timeout: HTTP request timeout in seconds
            transport: optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}/api{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            raise FlowscopeClientError(
                f"{method} {path} failed with status {e.response.status_code}: "
                f"{e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise FlowscopeClientError(
                f"Failed to connect to server at {self.base_url}: {e}"
            ) from e

    def upload(self, documents: list[tuple[str, Any]]) -> list[str]:
        """Replace the server's dataset.

        Args:
            documents: (file name, decoded JSON) pairs, in order

        Returns:
            warnings for documents the server skipped
        """
        body = {
            "documents": [
                {"name": name, "content": content} for name, content in documents
            ]
        }
        return self._request("PUT", "/dataset", json=body).json()["warnings"]

    def graph(self) -> GraphData:
        """Get the filtered graph of the current view."""
        return GraphData.model_validate(self._request("GET", "/graph").json())

    def operations_graph(self, flow_id: str) -> GraphData:
        data = self._request("GET", f"/flows/{flow_id}/operations").json()
        return GraphData.model_validate(data)

    def stats(self) -> dict:
        return self._request("GET", "/stats").json()

    def update_settings(self, settings: GraphSettings) -> dict:
        return self._request("PUT", "/settings", json=settings.model_dump()).json()

    def search(self, term: str) -> dict:
        return self._request("PUT", "/search", json={"term": term}).json()

    def select(self, node_id: str) -> dict:
        """Tell the server a node was tapped."""
        return self._request("POST", "/select", json={"node_id": node_id}).json()

    def flow_details(self, flow_id: str) -> dict | None:
        """Get a flow with its references, or None if the server does not know it."""
        try:
            return self._request("GET", f"/flows/{flow_id}").json()
        except FlowscopeClientError as e:
            cause = e.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                return None
            raise
