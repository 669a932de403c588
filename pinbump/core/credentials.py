"""Credential heuristics for the workflow-permission gate.

Pushing changes under ``.github/workflows/`` needs a token carrying the
``workflow`` scope.  Automation tokens issued to CI jobs do not have it;
personal and fine-grained tokens may.  The token kind is inferred from
its prefix only, which is a best-effort signal and not a security
boundary: unknown formats are treated as lacking the scope.
"""

from __future__ import annotations

from enum import Enum

from pinbump.scanning.patterns import normalize_path

WORKFLOW_DIRECTORY = ".github/workflows/"


class TokenKind(str, Enum):
    PERSONAL = "personal"  # classic personal access token
    FINE_GRAINED = "fine_grained"
    AUTOMATION = "automation"  # CI job / app installation token
    OAUTH = "oauth"
    UNKNOWN = "unknown"
    MISSING = "missing"


# Prefix -> kind, checked in order.
TOKEN_PREFIXES: list[tuple[str, TokenKind]] = [
    ("github_pat_", TokenKind.FINE_GRAINED),
    ("ghp_", TokenKind.PERSONAL),
    ("ghs_", TokenKind.AUTOMATION),
    ("gho_", TokenKind.OAUTH),
    ("ghu_", TokenKind.OAUTH),
]


def classify_token(token: str | None) -> TokenKind:
    """Infer the kind of *token* from its prefix."""
    if not token or not token.strip():
        return TokenKind.MISSING
    stripped = token.strip()
    for prefix, kind in TOKEN_PREFIXES:
        if stripped.startswith(prefix):
            return kind
    return TokenKind.UNKNOWN


def is_personal_token(token: str | None) -> bool:
    """Whether *token* looks like a personal or fine-grained token."""
    return classify_token(token) in (TokenKind.PERSONAL, TokenKind.FINE_GRAINED)


def is_workflow_file(file_path: str) -> bool:
    """Whether *file_path* lives under the workflow-definitions directory."""
    normalized = normalize_path(file_path).lower()
    return f"/{WORKFLOW_DIRECTORY}" in f"/{normalized}"
