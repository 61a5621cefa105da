"""Tests for reading export files and folders."""

import asyncio
import json

import pytest

from flowscope.adapters.file_reader import (
    ExportReadError,
    collect_export_paths,
    load_exports,
    load_json_document,
    read_export_files,
    read_json_file,
)
from flowscope.analysis.flow_parser import FlowExportWarning


def _write_export(path, flow_id: str) -> None:
    path.write_text(json.dumps({
        "supportModels": [{"id": flow_id, "name": flow_id, "kind": "root"}],
    }))


class TestCollectExportPaths:
    """Test expansion of folders and filtering of non-JSON files."""

    def test_folder_expanded_recursively_and_sorted(self, tmp_path):
        (tmp_path / "nested").mkdir()
        _write_export(tmp_path / "b.json", "b")
        _write_export(tmp_path / "a.json", "a")
        _write_export(tmp_path / "nested" / "c.json", "c")
        (tmp_path / "notes.txt").write_text("not an export")

        paths = collect_export_paths([tmp_path])

        assert [p.relative_to(tmp_path).as_posix() for p in paths] == [
            "a.json",
            "b.json",
            "nested/c.json",
        ]

    def test_files_keep_given_order(self, tmp_path):
        second = tmp_path / "z.json"
        first = tmp_path / "a.json"
        assert collect_export_paths([second, first]) == [second, first]

    def test_non_json_files_dropped(self, tmp_path):
        assert collect_export_paths([tmp_path / "readme.md"]) == []


class TestReadJsonFile:
    """Test reading single files."""

    def test_reads_document(self, tmp_path):
        path = tmp_path / "one.json"
        _write_export(path, "a")

        name, content = load_json_document(path)

        assert name == "one.json"
        assert content["supportModels"][0]["id"] == "a"

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ExportReadError, match="bad.json"):
            load_json_document(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ExportReadError):
            load_json_document(tmp_path / "missing.json")

    def test_read_json_file_warns_and_returns_none(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        problems: list[str] = []

        with pytest.warns(FlowExportWarning, match="Failed to parse bad.json"):
            assert read_json_file(path, problems) is None
        assert len(problems) == 1


class TestReadExportFiles:
    """Test concurrent reading."""

    def test_results_keep_input_order(self, tmp_path):
        paths = []
        for index in range(20):
            path = tmp_path / f"export-{index:02d}.json"
            _write_export(path, f"flow-{index}")
            paths.append(path)
        paths.reverse()

        documents = asyncio.run(read_export_files(paths))

        assert [name for name, _ in documents] == [p.name for p in paths]

    def test_failed_files_left_out(self, tmp_path):
        good = tmp_path / "good.json"
        bad = tmp_path / "bad.json"
        _write_export(good, "a")
        bad.write_text("]")
        problems: list[str] = []

        documents = asyncio.run(read_export_files([bad, good], problems))

        assert [name for name, _ in documents] == ["good.json"]
        assert len(problems) == 1

    def test_failures_reported_in_input_order(self, tmp_path):
        paths = []
        for index in range(12):
            path = tmp_path / f"bad-{index:02d}.json"
            path.write_text("{" * (index + 1))
            paths.append(path)
        paths.reverse()
        problems: list[str] = []

        with pytest.warns(FlowExportWarning) as record:
            documents = asyncio.run(read_export_files(paths, problems))

        assert documents == []
        expected = [f"Failed to parse {p.name}" for p in paths]
        assert [m.split(":")[0] for m in problems] == expected
        assert [str(w.message).split(":")[0] for w in record] == expected


class TestLoadExports:
    def test_read_failures_listed_before_parse_warnings(self, tmp_path):
        (tmp_path / "a_bad.json").write_text("nope")
        (tmp_path / "b_empty.json").write_text("{}")
        _write_export(tmp_path / "c_good.json", "c")

        data = load_exports([tmp_path])

        assert list(data.flows) == ["c"]
        assert data.warnings[0].startswith("Failed to parse a_bad.json")
        assert data.warnings[1] == "No supportModels found in b_empty.json"

    def test_empty_input(self):
        data = load_exports([])
        assert data.flows == {}
        assert data.warnings == []
