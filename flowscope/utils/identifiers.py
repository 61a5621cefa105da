"""ID and label helpers."""


def flow_edge_id(operation_id: str) -> str:
    """Deterministic id of the flow-level edge created by an operation."""
    return f"edge-{operation_id}"


def short_id(identifier: str | None, length: int = 6) -> str:
    """Last `length` characters of an id, or "?" when there is none."""
    if not identifier:
        return "?"
    return identifier[-length:]


def placeholder_name(flow_id: str) -> str:
    """Display name of a stand-in for a flow that was never ingested."""
    return f"External: {flow_id}"


def truncate(value: str, max_length: int) -> str:
    """Cut a string to `max_length` characters, ending it with "..." if cut."""
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."
