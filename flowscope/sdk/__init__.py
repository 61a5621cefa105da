"""SDK for driving a flow viewer: session state and the HTTP client."""

from flowscope.sdk.client import FlowscopeClient, FlowscopeClientError
from flowscope.sdk.session import (
    FlowNotFoundError,
    FlowSession,
    ViewMode,
)

__all__ = [
    "FlowscopeClient",
    "FlowscopeClientError",
    "FlowNotFoundError",
    "FlowSession",
    "ViewMode",
]
