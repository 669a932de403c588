"""Unit tests for the subprocess-backed git collaborator.

The repository tests drive a real ``git`` binary inside ``tmp_path`` and
are skipped when git is not installed.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest

from pinbump.git import branch as branch_module
from pinbump.git.branch import (
    GitCommandError,
    SubprocessGit,
    branch_name_for,
    commit_message_for,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return proc.stdout.strip()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A git repository with one commit holding a Dockerfile."""
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "--quiet")
    _git(path, "config", "user.name", "Test User")
    _git(path, "config", "user.email", "test@example.com")
    _git(path, "config", "commit.gpgsign", "false")
    (path / "Dockerfile").write_text("FROM python:3.13.0-slim\n")
    _git(path, "add", "Dockerfile")
    _git(path, "commit", "--quiet", "-m", "initial")
    return path


class TestNaming:
    def test_branch_name(self):
        assert branch_name_for("3.13") == "chore/bump-python-3.13"
        assert branch_name_for("3.12", prefix="deps/python-") == "deps/python-3.12"

    def test_commit_message(self):
        assert commit_message_for("3.13", "3.13.1") == "chore: bump python 3.13 to 3.13.1"


class TestCommandConstruction:
    """Argument lists and environment, without a git binary."""

    def test_push_arguments(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        seen: list[dict[str, Any]] = []

        def fake_run(args, **kwargs):
            seen.append({"args": args, **kwargs})
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        monkeypatch.setattr(branch_module.subprocess, "run", fake_run)
        SubprocessGit().push_branch(tmp_path, "chore/bump-python-3.13")

        assert seen[0]["args"] == [
            "git",
            "push",
            "--set-upstream",
            "--force-with-lease",
            "origin",
            "chore/bump-python-3.13",
        ]
        assert seen[0]["env"]["LC_ALL"] == "C"
        assert seen[0]["cwd"] == tmp_path

    def test_push_without_flags(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        seen: list[list[str]] = []

        def fake_run(args, **kwargs):
            seen.append(args)
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        monkeypatch.setattr(branch_module.subprocess, "run", fake_run)
        SubprocessGit(remote="upstream").push_branch(
            tmp_path, "b", force_with_lease=False, set_upstream=False
        )
        assert seen == [["git", "push", "upstream", "b"]]

    def test_failure_raises(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        def fake_run(args, **kwargs):
            return subprocess.CompletedProcess(args, 128, stdout="", stderr="fatal: no remote")

        monkeypatch.setattr(branch_module.subprocess, "run", fake_run)
        with pytest.raises(GitCommandError, match="fatal: no remote") as excinfo:
            SubprocessGit().push_branch(tmp_path, "b")
        assert excinfo.value.returncode == 128


@requires_git
class TestCreateBranchAndCommit:
    """Against a real repository."""

    def test_commits_on_new_branch(self, repo: Path):
        (repo / "Dockerfile").write_text("FROM python:3.13.1-slim\n")
        result = SubprocessGit().create_branch_and_commit(
            repo, "3.13", ["Dockerfile"], "chore: bump python 3.13 to 3.13.1"
        )
        assert result.branch == "chore/bump-python-3.13"
        assert result.commit_created is True
        assert result.files_committed == ["Dockerfile"]
        assert _git(repo, "rev-parse", "--abbrev-ref", "HEAD") == "chore/bump-python-3.13"
        assert _git(repo, "log", "-1", "--pretty=%s") == "chore: bump python 3.13 to 3.13.1"

    def test_author_identity(self, repo: Path):
        (repo / "Dockerfile").write_text("FROM python:3.13.1-slim\n")
        SubprocessGit().create_branch_and_commit(
            repo,
            "3.13",
            ["Dockerfile"],
            "bump",
            author_name="Bump Bot",
            author_email="bot@example.com",
        )
        assert _git(repo, "log", "-1", "--pretty=%an <%ae>") == "Bump Bot <bot@example.com>"

    def test_nothing_staged(self, repo: Path):
        result = SubprocessGit().create_branch_and_commit(repo, "3.13", ["Dockerfile"], "bump")
        assert result.commit_created is False
        assert result.files_committed == []

    def test_existing_branch_is_reused(self, repo: Path):
        git = SubprocessGit()
        (repo / "Dockerfile").write_text("FROM python:3.13.1-slim\n")
        git.create_branch_and_commit(repo, "3.13", ["Dockerfile"], "first")
        assert git.branch_exists("chore/bump-python-3.13", repo)

        (repo / "Dockerfile").write_text("FROM python:3.13.2-slim\n")
        result = git.create_branch_and_commit(repo, "3.13", ["Dockerfile"], "second")
        assert result.commit_created is True
        assert _git(repo, "log", "-2", "--pretty=%s").splitlines() == ["second", "first"]

    def test_push_to_bare_remote(self, repo: Path, tmp_path: Path):
        remote = tmp_path / "remote.git"
        subprocess.run(["git", "init", "--bare", "--quiet", str(remote)], check=True)
        _git(repo, "remote", "add", "origin", str(remote))

        git = SubprocessGit()
        (repo / "Dockerfile").write_text("FROM python:3.13.1-slim\n")
        result = git.create_branch_and_commit(repo, "3.13", ["Dockerfile"], "bump")
        git.push_branch(repo, result.branch)

        assert "refs/heads/chore/bump-python-3.13" in _git(repo, "ls-remote", "origin")

    def test_push_without_remote_fails(self, repo: Path):
        with pytest.raises(GitCommandError):
            SubprocessGit().push_branch(repo, "chore/bump-python-3.13")
