"""Unit tests for the Typer CLI."""

from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from pinbump.cli.app import app
from pinbump.models.request import Snapshots

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The app callback reconfigures the root logger; undo it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def snapshot_file(tmp_path, snapshots):
    path = tmp_path / "snapshots.json"
    path.write_text(snapshots.model_dump_json(), encoding="utf-8")
    return path


@pytest.fixture
def workspace(make_tree):
    return make_tree({"Dockerfile": "FROM python:3.13.0-slim\n"})


class TestHelp:
    def test_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("bump", "scan", "resolve"):
            assert command in result.stdout

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "bump" in result.output


class TestBump:
    """``pinbump bump``"""

    def test_json_outcome(self, workspace, snapshot_file):
        result = runner.invoke(
            app,
            [
                "--log-level", "WARNING",
                "bump", str(workspace),
                "--path", "**/Dockerfile",
                "--dry-run",
                "--no-network",
                "--snapshots", str(snapshot_file),
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        outcome = json.loads(result.stdout)
        assert outcome["status"] == "success"
        assert outcome["target_version"] == "3.13.1"
        assert outcome["files_changed"] == ["Dockerfile"]
        assert outcome["dry_run"] is True

    def test_rich_outcome(self, workspace, snapshot_file):
        result = runner.invoke(
            app,
            [
                "--log-level", "WARNING",
                "bump", str(workspace),
                "--path", "**/Dockerfile",
                "--dry-run",
                "--no-network",
                "--snapshots", str(snapshot_file),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "3.13.1" in result.stdout

    def test_bad_track_exits_2(self, workspace, snapshot_file):
        result = runner.invoke(
            app,
            ["bump", str(workspace), "--track", "3", "--no-network", "--snapshots", str(snapshot_file)],
        )
        assert result.exit_code == 2

    @pytest.mark.parametrize("content", [None, "{not json", '{"cpython_tags": "v3.13.1"}'])
    def test_bad_snapshots_file_exits_2(self, workspace, tmp_path, content):
        path = tmp_path / "snapshots.json"
        if content is not None:
            path.write_text(content, encoding="utf-8")
        result = runner.invoke(
            app,
            ["bump", str(workspace), "--no-network", "--snapshots", str(path)],
        )
        assert result.exit_code == 2
        assert not isinstance(result.exception, (ValueError, OSError))

    def test_unresolvable_exits_1(self, workspace, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(
            Snapshots(cpython_tags=[], python_org_html="").model_dump_json(), encoding="utf-8"
        )
        result = runner.invoke(
            app,
            [
                "--log-level", "WARNING",
                "bump", str(workspace),
                "--path", "**/Dockerfile",
                "--no-network",
                "--snapshots", str(path),
            ],
        )
        assert result.exit_code == 1


class TestScan:
    def test_lists_occurrences(self, workspace):
        result = runner.invoke(
            app, ["--log-level", "WARNING", "scan", str(workspace), "--path", "**/Dockerfile"]
        )
        assert result.exit_code == 0, result.output
        assert "Dockerfile" in result.stdout
        assert "3.13.0" in result.stdout
        assert "Track" in result.stdout


class TestResolve:
    def test_from_tag_snapshot(self, tmp_path, tag_factory):
        path = tmp_path / "tags.json"
        path.write_text(
            json.dumps([tag_factory("3.13.1").model_dump(), tag_factory("3.13.0").model_dump()]),
            encoding="utf-8",
        )
        result = runner.invoke(
            app,
            ["--log-level", "WARNING", "resolve", "3.13", "--tags-snapshot", str(path), "--no-network"],
        )
        assert result.exit_code == 0, result.output
        assert "3.13.1" in result.stdout
        assert "v3.13.1" in result.stdout

    def test_bad_tags_snapshot_exits_2(self, tmp_path):
        path = tmp_path / "tags.json"
        path.write_text('[{"tag_name": "v3.13.1"}]', encoding="utf-8")
        result = runner.invoke(app, ["resolve", "3.13", "--tags-snapshot", str(path)])
        assert result.exit_code == 2

    def test_offline_without_snapshot_exits_2(self):
        result = runner.invoke(app, ["--log-level", "WARNING", "resolve", "3.13", "--no-network"])
        assert result.exit_code == 2
