"""Read export files and folders from disk.

Files are read concurrently, but results always come back in the order
the paths were given, so parsing stays deterministic. A file that cannot
be read or decoded is reported and left out; it never stops the batch.
"""

import asyncio
import json
import warnings
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from flowscope.analysis.flow_parser import FlowExportWarning, parse_flow_files
from flowscope.models.flow_export import ParsedData


ExportDocument = tuple[str, Any]


class ExportReadError(Exception):
    """Raised when an export file cannot be read or decoded."""


def collect_export_paths(paths: Iterable[Path | str]) -> list[Path]:
    """Expand folders into the JSON files they contain.

    Folders are searched recursively and their files sorted by path. Plain
    paths are kept in the given order if they end in `.json`.
    """
    collected: list[Path] = []
    for path in map(Path, paths):
        if path.is_dir():
            collected.extend(sorted(p for p in path.rglob("*.json") if p.is_file()))
        elif path.suffix.lower() == ".json":
            collected.append(path)
    return collected


def load_json_document(path: Path) -> ExportDocument:
    """Read and decode one export file.

    Raises:
        ExportReadError: if the file is unreadable or not valid JSON.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ExportReadError(f"Failed to parse {path.name}: {exc}") from exc
    return path.name, content


def _try_load(path: Path) -> tuple[ExportDocument | None, str | None]:
    try:
        return load_json_document(path), None
    except ExportReadError as exc:
        return None, str(exc)


def read_json_file(path: Path | str, problems: list[str] | None = None) -> ExportDocument | None:
    """Read one export file, or return None and warn if that fails."""
    document, error = _try_load(Path(path))
    if error is not None:
        if problems is not None:
            problems.append(error)
        warnings.warn(error, FlowExportWarning, stacklevel=2)
    return document


async def read_export_files(
    paths: Iterable[Path | str],
    problems: list[str] | None = None,
) -> list[ExportDocument]:
    """Read export files concurrently, keeping the input order.

    Failures are reported after all reads finish, in input order too.

    Args:
        paths: files to read.
        problems: if given, a message is appended for every failed file.

    Returns:
        (file name, decoded document) for every file that could be read.
    """
    results = await asyncio.gather(
        *(asyncio.to_thread(_try_load, Path(path)) for path in paths)
    )

    documents: list[ExportDocument] = []
    for document, error in results:
        if error is not None:
            if problems is not None:
                problems.append(error)
            warnings.warn(error, FlowExportWarning, stacklevel=2)
            continue
        documents.append(document)
    return documents


async def process_files(paths: Iterable[Path | str]) -> ParsedData:
    """Read export files and folders and parse them into one dataset."""
    read_problems: list[str] = []
    documents = await read_export_files(collect_export_paths(paths), read_problems)
    data = parse_flow_files(documents)
    return data.model_copy(update={"warnings": read_problems + data.warnings})


def load_exports(paths: Iterable[Path | str]) -> ParsedData:
    """Blocking version of process_files."""
    return asyncio.run(process_files(paths))
