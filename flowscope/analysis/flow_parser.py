"""Turn raw export documents into a normalized ParsedData dataset.

Parsing is best-effort: a document or support model that does not look
right is skipped and reported, and the rest of the batch still goes
through. Nothing here raises because of one bad input.
"""

import warnings
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from flowscope.models.flow_export import (
    FLOW_LINK_OPERATION,
    RESOLVE_FLOW_OPERATION,
    Connection,
    ExportModel,
    FlowRecord,
    FlowReference,
    Operation,
    ParsedData,
)


class FlowExportWarning(UserWarning):
    """Issued when an export document or entry is skipped."""


def report_skipped(problems: list[str], message: str, stacklevel: int = 2) -> None:
    """Record a non-fatal parsing problem and surface it as a warning.

    `stacklevel` is counted from the function calling report_skipped, as
    for warnings.warn.
    """
    problems.append(message)
    warnings.warn(message, FlowExportWarning, stacklevel=stacklevel + 1)


def extract_flow_reference(
    source_flow_id: str,
    operation: Operation,
) -> FlowReference | None:
    """Return the flow reference an operation carries, if any.

    Only ResolveFlowOperation (via flowId) and FlowLinkOperation (via
    targetFlowId) point at other flows, and each carries at most one.
    """
    if operation.type == RESOLVE_FLOW_OPERATION and operation.flow_id:
        target_flow_id = operation.flow_id
    elif operation.type == FLOW_LINK_OPERATION and operation.target_flow_id:
        target_flow_id = operation.target_flow_id
    else:
        return None

    return FlowReference(
        source_flow_id=source_flow_id,
        target_flow_id=target_flow_id,
        operation_type=operation.type,
        operation_id=operation.id,
        operation_name=operation.name,
    )


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "entry"
    return f"{location}: {first['msg']}"


def _parse_items(
    model: type[ExportModel],
    items: Any,
    location: str,
    file_name: str,
    problems: list[str],
) -> list:
    """Validate operations or connections one by one, skipping unusable ones."""
    if items is None:
        return []
    if not isinstance(items, list):
        report_skipped(
            problems,
            f"Ignoring {location} in {file_name}: not a list",
            stacklevel=4,
        )
        return []

    parsed = []
    for index, item in enumerate(items):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as exc:
            report_skipped(
                problems,
                f"Skipping {location}[{index}] in {file_name}: "
                f"{_describe_validation_error(exc)}",
                stacklevel=4,
            )
    return parsed


def _parse_support_model(
    file_name: str,
    index: int,
    entry: Any,
    problems: list[str],
) -> FlowRecord | None:
    """Build a FlowRecord from one supportModels entry.

    Only the flow itself must be valid (an `id` and a known `kind`). A bad
    operation or connection is skipped on its own and the flow is kept.
    """
    if not isinstance(entry, dict):
        report_skipped(
            problems,
            f"Skipping supportModels[{index}] in {file_name}: not an object",
            stacklevel=3,
        )
        return None

    raw = dict(entry)
    operations = raw.pop("operations", None)
    connections = raw.pop("connections", None)
    raw["sourceFile"] = file_name
    raw["isPlaceholder"] = False
    try:
        flow = FlowRecord.model_validate(raw)
    except ValidationError as exc:
        report_skipped(
            problems,
            f"Skipping supportModels[{index}] in {file_name}: "
            f"{_describe_validation_error(exc)}",
            stacklevel=3,
        )
        return None

    location = f"supportModels[{index}]"
    return flow.model_copy(update={
        "operations": _parse_items(
            Operation, operations, f"{location}.operations", file_name, problems
        ),
        "connections": _parse_items(
            Connection, connections, f"{location}.connections", file_name, problems
        ),
    })


def parse_flow_files(files: Iterable[tuple[str, Any]]) -> ParsedData:
    """Parse export documents into flows and cross-flow references.

    Args:
        files: (name, document) pairs in the order they were supplied. The
            document is the decoded JSON content of one export file.

    Returns:
        ParsedData with flows keyed by id, references in file, support
        model and operation order, and one warning per skipped item.
    """
    flows: dict[str, FlowRecord] = {}
    references: list[FlowReference] = []
    problems: list[str] = []

    for file_name, content in files:
        support_models = content.get("supportModels") if isinstance(content, dict) else None
        if not isinstance(support_models, list):
            report_skipped(problems, f"No supportModels found in {file_name}")
            continue

        for index, entry in enumerate(support_models):
            flow = _parse_support_model(file_name, index, entry, problems)
            if flow is None:
                continue

            # first write wins
            if flow.id in flows:
                report_skipped(
                    problems,
                    f"Ignoring duplicate flow {flow.id} in {file_name}; "
                    f"already loaded from {flows[flow.id].source_file}",
                )
                continue
            flows[flow.id] = flow

            for operation in flow.operations:
                reference = extract_flow_reference(flow.id, operation)
                if reference:
                    references.append(reference)

    return ParsedData(flows=flows, references=references, warnings=problems)
