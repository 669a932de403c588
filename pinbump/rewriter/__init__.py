"""Rewriter — the patch engine and its dry-run and idempotence views."""

from pinbump.rewriter.dry_run import run_dry_run
from pinbump.rewriter.idempotence import evaluate_idempotence
from pinbump.rewriter.patch import compute_patch, share_track, write_patch

__all__ = [
    "compute_patch",
    "evaluate_idempotence",
    "run_dry_run",
    "share_track",
    "write_patch",
]
