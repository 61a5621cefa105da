"""Adapters for getting export files into the parser."""

from flowscope.adapters.file_reader import (
    ExportReadError,
    collect_export_paths,
    load_exports,
    load_json_document,
    process_files,
    read_export_files,
    read_json_file,
)

__all__ = [
    "ExportReadError",
    "collect_export_paths",
    "load_exports",
    "load_json_document",
    "process_files",
    "read_export_files",
    "read_json_file",
]
