"""In-memory storage for the viewer session.

There is one session per server process. Every request that changes it
swaps in a new FlowSession snapshot; nothing is written to disk.
"""

import os
import threading
from collections.abc import Callable
from pathlib import Path

from flowscope.adapters.file_reader import process_files
from flowscope.sdk.session import FlowSession


_lock = threading.Lock()
_session = FlowSession()


def get_session() -> FlowSession:
    return _session


def update_session(change: Callable[[FlowSession], FlowSession]) -> FlowSession:
    """Apply `change` to the current session and store the result.

    Read, change and store happen under one lock, so concurrent requests
    never overwrite each other's updates. Exceptions raised by `change`
    leave the stored session as it was.
    """
    global _session
    with _lock:
        _session = change(_session)
        return _session


def set_session(session: FlowSession) -> FlowSession:
    """Replace the current session snapshot."""
    return update_session(lambda _: session)


def reset_session() -> FlowSession:
    return set_session(FlowSession())


async def init_store(export_dir: str | Path | None = None) -> None:
    """Load the export folder from FLOWSCOPE_EXPORT_DIR, if configured."""
    export_dir = export_dir or os.getenv("FLOWSCOPE_EXPORT_DIR")
    if not export_dir:
        return
    data = await process_files([export_dir])
    set_session(FlowSession().load_dataset(data))
