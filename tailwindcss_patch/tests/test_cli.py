"""Tests for the tw-patch command line."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from tailwindcss_patch.__main__ import build_parser, main
from tailwindcss_patch.core.config import CONFIG_FILE
from tailwindcss_patch.core.errors import BuildExecutionError
from tailwindcss_patch.core.patching import PatchReport
from tailwindcss_patch.core.runtime import NodeBridge

BUILD_OUTPUT = {"contexts": [{"classCache": ["flex", "p-4"], "candidateRuleCache": []}]}


@pytest.fixture
def scanned_project(project):
    (project / "index.html").write_text('<div class="flex p-4"></div>\n', encoding="utf-8")
    (project / "broken.html").write_bytes(b"\xff\xfe")
    return project


class TestParser:
    def test_tokens_defaults(self):
        args = build_parser().parse_args(["tokens"])
        assert args.output == ".tw-patch/tw-token-report.json"
        assert args.format == "json"
        assert args.group_key == "relative"
        assert args.write is True

    def test_extract_write_defaults_to_config(self):
        assert build_parser().parse_args(["extract"]).write is None
        assert build_parser().parse_args(["extract", "--no-write"]).write is False

    def test_invalid_format(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["tokens", "--format", "xml"])


class TestInit:
    def test_creates_config(self, tmp_path):
        assert main(["init", "--cwd", str(tmp_path)]) == 0
        assert (tmp_path / CONFIG_FILE).exists()


class TestInstall:
    def test_runs_patcher(self, project):
        with patch("tailwindcss_patch.core.patcher.apply_tailwind_patches", return_value=PatchReport(3)) as runner:
            assert main(["install", "--cwd", str(project)]) == 0
        runner.assert_called_once()

    def test_missing_package_fails(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["install", "--cwd", str(tmp_path)]) == 1
        assert 'Unable to locate Tailwind CSS package "tailwindcss"' in caplog.text


class TestExtract:
    def test_writes_output(self, project):
        with patch.object(NodeBridge, "run_script", return_value=BUILD_OUTPUT):
            assert main(["extract", "--cwd", str(project), "--output", "classes.txt", "--format", "lines"]) == 0
        assert (project / "classes.txt").read_text(encoding="utf-8") == "flex\np-4\n"

    def test_no_write(self, project):
        with patch.object(NodeBridge, "run_script", return_value=BUILD_OUTPUT):
            assert main(["extract", "--cwd", str(project), "--no-write"]) == 0
        assert not (project / ".tw-patch").exists()

    def test_build_failure(self, project, caplog):
        with patch.object(NodeBridge, "run_script", side_effect=BuildExecutionError("node exploded")):
            with caplog.at_level(logging.ERROR):
                assert main(["extract", "--cwd", str(project)]) == 1
        assert "node exploded" in caplog.text


class TestTokens:
    def test_json_report(self, scanned_project):
        assert main(["tokens", "--cwd", str(scanned_project)]) == 0

        path = scanned_project / ".tw-patch" / "tw-token-report.json"
        report = json.loads(path.read_text(encoding="utf-8"))
        assert [entry["raw_candidate"] for entry in report["entries"]] == ["div", "class", "flex", "p-4"]
        assert report["files_scanned"] == 1
        assert report["skipped_files"][0]["file"] == str(scanned_project / "broken.html")

    def test_grouped_json(self, scanned_project):
        assert main(["tokens", "--cwd", str(scanned_project), "--format", "grouped-json"]) == 0

        path = scanned_project / ".tw-patch" / "tw-token-report.json"
        grouped = json.loads(path.read_text(encoding="utf-8"))
        assert list(grouped) == ["index.html"]
        assert grouped["index.html"][2]["raw_candidate"] == "flex"

    def test_lines(self, scanned_project):
        args = ["tokens", "--cwd", str(scanned_project), "--format", "lines", "--output", "tokens.txt"]
        assert main(args) == 0

        lines = (scanned_project / "tokens.txt").read_text(encoding="utf-8").splitlines()
        assert lines[2] == "index.html:1:13 flex (12-16)"

    def test_preview_and_skipped_warning(self, scanned_project, caplog):
        with caplog.at_level(logging.INFO):
            assert main(["tokens", "--cwd", str(scanned_project), "--format", "lines", "--no-write"]) == 0

        assert "Collected 4 tokens from 1 files." in caplog.text
        assert "index.html:1:13 flex (12-16)" in caplog.text
        assert "Skipped files:" in caplog.text
        assert not os.path.exists(scanned_project / ".tw-patch")
