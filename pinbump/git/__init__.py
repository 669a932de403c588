"""Git and code-host collaborators used during the write phase."""

from pinbump.git.branch import (
    GitCommandError,
    SubprocessGit,
    branch_name_for,
    commit_message_for,
)
from pinbump.git.pull_request import GitHubPullRequests, PullRequestError

__all__ = [
    "GitCommandError",
    "GitHubPullRequests",
    "PullRequestError",
    "SubprocessGit",
    "branch_name_for",
    "commit_message_for",
]
