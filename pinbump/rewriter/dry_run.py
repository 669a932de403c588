"""Dry-run preview — compute patches and describe them without writing."""

from __future__ import annotations

from collections.abc import Iterable

from pinbump.models.patches import DryRunResult, RewriteContext
from pinbump.rewriter.patch import compute_patch


def run_dry_run(contexts: Iterable[RewriteContext]) -> DryRunResult:
    """Compute every patch and build a human-readable summary."""
    patches = [compute_patch(context) for context in contexts]
    changed_files = sorted({p.file_path for p in patches if p.changed})

    lines = ["Dry-run summary:"]
    if not changed_files:
        lines.append("  No changes would be applied.")
    else:
        lines.append(f"  {len(changed_files)} file(s) would be updated:")
        for patch in patches:
            if not patch.changed:
                continue
            lines.append(f"  - {patch.file_path}")
            for replacement in patch.replacements:
                lines.append(
                    f"      {patch.file_path}:{replacement.line}:{replacement.column} "
                    f"{replacement.pinned} -> {patch.to_version}"
                )

    return DryRunResult(
        patches=patches,
        summary="\n".join(lines),
        changed_files=changed_files,
    )
