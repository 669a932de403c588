"""Pull-request collaborator over the GitHub REST API."""

from __future__ import annotations

import logging
from typing import Any

from pinbump.models.collaborators import PullRequestRef, PullRequestResult
from pinbump.versioning._http import DEFAULT_TIMEOUT, client, github_headers

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class PullRequestError(RuntimeError):
    """Raised when the GitHub API rejects a pull-request call."""


class GitHubPullRequests:
    """Finds, creates and updates the bump pull request.

    Parameters
    ----------
    token:
        Token sent as ``Authorization: Bearer``.
    session:
        Optional object with ``get``/``post``/``patch``; defaults to
        the ``requests`` module.
    """

    def __init__(
        self,
        token: str,
        *,
        session: Any | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self._token = token
        self._http = client(session)
        self.timeout = timeout
        self.user_agent = user_agent
        self.api_url = api_url.rstrip("/")

    def _pulls_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}/pulls"

    def _headers(self) -> dict[str, str]:
        return github_headers(self._token, self.user_agent)

    @staticmethod
    def _check(response: Any, action: str, expected: type = dict) -> Any:
        """Return the decoded payload of a successful call.

        Raises ``PullRequestError`` for an error status or for a payload
        that is not of the *expected* JSON type.
        """
        if not response.ok:
            message = ""
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict) and isinstance(payload.get("message"), str):
                message = payload["message"]
            raise PullRequestError(
                f"Failed to {action} pull request (status {response.status_code})"
                + (f": {message}" if message else ".")
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise PullRequestError(f"Failed to {action} pull request: response is not JSON.") from exc
        if not isinstance(payload, expected):
            raise PullRequestError(f"Failed to {action} pull request: unexpected payload.")
        return payload

    def find_existing_pr(self, owner: str, repo: str, head: str) -> PullRequestRef | None:
        """The open pull request from ``owner:head``, or None."""
        response = self._http.get(
            self._pulls_url(owner, repo),
            params={"head": f"{owner}:{head}", "state": "open", "per_page": 1},
            headers=self._headers(),
            timeout=self.timeout,
        )
        pulls = self._check(response, "list", expected=list)
        if not pulls:
            return None
        pull = pulls[0]
        return PullRequestRef(number=pull["number"], url=pull.get("html_url"))

    def create_or_update_pr(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
        draft: bool = False,
    ) -> PullRequestResult:
        """Update the open pull request for *head*, or open a new one."""
        existing = self.find_existing_pr(owner, repo, head)

        if existing is not None:
            response = self._http.patch(
                f"{self._pulls_url(owner, repo)}/{existing.number}",
                json={"title": title, "body": body},
                headers=self._headers(),
                timeout=self.timeout,
            )
            data = self._check(response, "update")
            logger.info("Updated pull request #%s", data["number"])
            return PullRequestResult(
                action="updated", number=data["number"], url=data.get("html_url")
            )

        response = self._http.post(
            self._pulls_url(owner, repo),
            json={
                "title": title,
                "body": body,
                "head": head,
                "base": base,
                "draft": draft,
            },
            headers=self._headers(),
            timeout=self.timeout,
        )
        data = self._check(response, "create")
        logger.info("Created pull request #%s", data["number"])
        return PullRequestResult(
            action="created", number=data["number"], url=data.get("html_url")
        )
