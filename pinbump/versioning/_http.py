"""Shared HTTP helpers for the GitHub and python.org sources."""

from __future__ import annotations

from typing import Any

import requests

DEFAULT_USER_AGENT = "pinbump/0.1.0"
DEFAULT_TIMEOUT = 30.0


def github_headers(token: str | None = None, user_agent: str | None = None) -> dict[str, str]:
    """Headers for the GitHub REST API."""
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": user_agent or DEFAULT_USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def client(session: Any | None) -> Any:
    """Return *session* if given, else the ``requests`` module itself."""
    return session if session is not None else requests
