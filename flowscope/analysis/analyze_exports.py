#!/usr/bin/env python3
"""CLI script to analyze flow export files.

Usage:
    flowscope-analyze exports/

    # flow graph as JSON, filtered
    flowscope-analyze exports/ --graph flows --search billing --min-connections 2

    # operation graph of one flow
    flowscope-analyze exports/ --graph operations --flow <flow-id>
"""

import argparse
import json
import sys
import warnings
from dataclasses import asdict
from pathlib import Path

from flowscope.adapters.file_reader import collect_export_paths, load_exports
from flowscope.analysis.dataset_summary import dataset_stats, format_stats
from flowscope.analysis.flow_parser import FlowExportWarning
from flowscope.analysis.graph_builder import (
    build_operations_graph,
    resolve_flow_graph,
    with_degrees,
)
from flowscope.analysis.graph_filters import apply_filters
from flowscope.models.graph_settings import GraphSettings


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize flow export files or print their graphs as JSON."
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="export JSON files or folders containing them",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output the summary as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--graph",
        choices=["flows", "operations"],
        help="print a graph as JSON instead of the summary",
    )
    parser.add_argument("--flow", help="flow id for --graph operations")
    parser.add_argument("--search", default="", help="keep flows whose name contains this")
    parser.add_argument("--select", help="selected node id, isolates its component")
    parser.add_argument("--min-connections", type=non_negative_int, default=0)
    parser.add_argument("--hide-roots", action="store_true")
    parser.add_argument("--hide-components", action="store_true")
    parser.add_argument("--hide-external", action="store_true")
    parser.add_argument(
        "--degrees",
        action="store_true",
        help="include node degrees in graph output",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> GraphSettings:
    return GraphSettings(
        show_roots=not args.hide_roots,
        show_components=not args.hide_components,
        show_external=not args.hide_external,
        min_connections=args.min_connections,
        isolate_selected=args.select is not None,
        size_by_connections=args.degrees,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    paths = collect_export_paths(args.paths)
    if not paths:
        print("Error: no JSON export files found", file=sys.stderr)
        return 1

    # problems are reported in the output, not as Python warnings
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FlowExportWarning)
        data = load_exports(paths)

    if not data.flows:
        print("Error: no flows found in export files", file=sys.stderr)
        for message in data.warnings:
            print(f"  {message}", file=sys.stderr)
        return 1

    resolved, flow_graph = resolve_flow_graph(data)

    if args.graph == "operations":
        flow = resolved.flows.get(args.flow or "")
        if flow is None:
            print(f"Error: flow not found: {args.flow}", file=sys.stderr)
            return 1
        graph = build_operations_graph(flow)
    elif args.graph == "flows":
        graph = apply_filters(
            flow_graph,
            settings_from_args(args),
            args.select,
            search_term=args.search,
        )
    else:
        stats = dataset_stats(resolved)
        if args.json:
            print(json.dumps({"stats": asdict(stats), "warnings": data.warnings}, indent=2))
        else:
            print(format_stats(stats, data.warnings))
        return 0

    if args.degrees:
        graph = with_degrees(graph)
    print(graph.model_dump_json(indent=2, exclude_none=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
