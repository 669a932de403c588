"""Markdown body for the bump pull request."""

from __future__ import annotations


def _bullets(files: list[str]) -> list[str]:
    return [f"- `{file}`" for file in files]


def generate_pull_request_body(
    track: str,
    new_version: str,
    files_changed: list[str],
    branch_name: str,
    default_branch: str,
    skipped_workflow_files: list[str] | None = None,
) -> str:
    """Render the Summary, Files Updated, optional workflow notice and Rollback sections."""
    lines = [
        "## Summary",
        "",
        f"- Bump CPython {track} pins to `{new_version}`.",
        "",
        "## Files Updated",
        "",
        *(_bullets(files_changed) or ["No files were modified in this bump."]),
        "",
    ]

    if skipped_workflow_files:
        lines += [
            "## Workflow File Notice",
            "",
            "The following workflow files were detected but left unchanged because "
            "the provided token lacks the `workflow` scope:",
            "",
            *_bullets(skipped_workflow_files),
            "",
            "Provide a personal access token with the `workflow` scope before "
            "rerunning to update these files automatically.",
            "",
        ]

    lines += [
        "## Rollback",
        "",
        "Before merge, close this PR and delete the branch:",
        "",
        "```sh",
        f"git push origin --delete {branch_name}",
        "```",
        "",
        f"After merge, revert the change on {default_branch}:",
        "",
        "```sh",
        f"git checkout {default_branch}",
        f"git pull --ff-only origin {default_branch}",
        "git revert --no-edit <merge_commit_sha>",
        f"git push origin {default_branch}",
        "```",
        "",
        "Replace `<merge_commit_sha>` with the SHA of the merge commit if rollback is required.",
    ]
    return "\n".join(lines)
