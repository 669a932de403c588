"""Local git mechanics — branch, stage, commit and push via the git CLI.

Every command runs with ``LC_ALL=C`` so that output parsing does not
depend on the user's locale.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from pinbump.models.collaborators import BranchCommitResult

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_PREFIX = "chore/bump-python-"
DEFAULT_REMOTE = "origin"


class GitCommandError(RuntimeError):
    """Raised when a git command exits non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")


def branch_name_for(track: str, prefix: str = DEFAULT_BRANCH_PREFIX) -> str:
    """Name of the bump branch for *track*, e.g. ``chore/bump-python-3.13``."""
    return f"{prefix}{track}"


def commit_message_for(track: str, version: str) -> str:
    """Commit message (and pull request title) for a bump."""
    return f"chore: bump python {track} to {version}"


class SubprocessGit:
    """Git collaborator backed by ``subprocess.run(["git", ...])``.

    Parameters
    ----------
    remote:
        Remote to push to.
    branch_prefix:
        Prefix for bump branch names; the track is appended.
    """

    def __init__(
        self,
        remote: str = DEFAULT_REMOTE,
        branch_prefix: str = DEFAULT_BRANCH_PREFIX,
    ) -> None:
        self.remote = remote
        self.branch_prefix = branch_prefix

    # ------------------------------------------------------------------
    # Low-level
    # ------------------------------------------------------------------

    def _run(
        self,
        args: list[str],
        repo_path: Path,
        extra_env: dict[str, str] | None = None,
    ) -> str:
        env = {**os.environ, "LC_ALL": "C", **(extra_env or {})}
        logger.debug("git %s (cwd=%s)", " ".join(args), repo_path)
        proc = subprocess.run(
            ["git", *args],
            cwd=repo_path,
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            raise GitCommandError(args, proc.returncode, proc.stderr.strip())
        return proc.stdout.strip()

    def branch_exists(self, branch: str, repo_path: Path) -> bool:
        try:
            self._run(["show-ref", "--verify", f"refs/heads/{branch}"], repo_path)
        except GitCommandError:
            return False
        return True

    def staged_files(self, repo_path: Path) -> list[str]:
        output = self._run(["diff", "--cached", "--name-only"], repo_path)
        return [line.strip() for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Collaborator interface
    # ------------------------------------------------------------------

    def create_branch_and_commit(
        self,
        repo_path: Path,
        track: str,
        files: list[str],
        commit_message: str,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> BranchCommitResult:
        """Check out the bump branch, stage *files* and commit them.

        An existing branch is checked out as-is; otherwise it is created
        from the current HEAD.  When nothing ends up staged no commit is
        made and ``commit_created`` is False.

        Raises
        ------
        GitCommandError
            If any git command fails.
        """
        branch = branch_name_for(track, self.branch_prefix)

        if self.branch_exists(branch, repo_path):
            self._run(["checkout", branch], repo_path)
        else:
            self._run(["checkout", "-B", branch], repo_path)

        if files:
            self._run(["add", "--", *files], repo_path)

        staged = self.staged_files(repo_path)
        if not staged:
            logger.info("Nothing staged on %s, skipping commit", branch)
            return BranchCommitResult(branch=branch, commit_created=False, files_committed=[])

        identity: dict[str, str] = {}
        if author_name:
            identity["GIT_AUTHOR_NAME"] = author_name
            identity["GIT_COMMITTER_NAME"] = author_name
        if author_email:
            identity["GIT_AUTHOR_EMAIL"] = author_email
            identity["GIT_COMMITTER_EMAIL"] = author_email

        self._run(["commit", "-m", commit_message], repo_path, extra_env=identity)
        logger.info("Committed %d file(s) on %s", len(staged), branch)
        return BranchCommitResult(branch=branch, commit_created=True, files_committed=staged)

    def push_branch(
        self,
        repo_path: Path,
        branch: str,
        force_with_lease: bool = True,
        set_upstream: bool = True,
    ) -> None:
        """Push *branch* to the configured remote."""
        args = ["push"]
        if set_upstream:
            args.append("--set-upstream")
        if force_with_lease:
            args.append("--force-with-lease")
        args.extend([self.remote, branch])
        self._run(args, repo_path)
        logger.info("Pushed %s to %s", branch, self.remote)
