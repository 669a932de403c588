"""File discovery — glob matching over a directory tree.

Globs follow the usual ``**`` semantics: ``**/`` matches zero or more
directories, ``*`` and ``?`` never cross a ``/``.  Dot-files are matched
like any other file.  Results are relative, forward-slash paths sorted
for determinism.
"""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from pathlib import Path

from pinbump.config import ConfigurationError

logger = logging.getLogger(__name__)

# Version-control, dependency-cache and build-output directories.
DEFAULT_IGNORES: list[str] = ["**/node_modules/**", "**/.git/**", "**/dist/**"]


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a ``**``-aware glob into an anchored regex."""
    pattern = pattern.replace("\\", "/")
    if pattern.startswith("./"):
        pattern = pattern[2:]

    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == n:
            out.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(out) + r"\Z")


def _matches_any(path: str, regexes: list[re.Pattern[str]]) -> bool:
    return any(r.match(path) for r in regexes)


def discover_files(
    root: Path | str,
    patterns: list[str],
    ignore: list[str] | None = None,
    follow_symlinks: bool = False,
) -> list[str]:
    """Return sorted unique relative paths under *root* matching *patterns*.

    Paths matching ``DEFAULT_IGNORES`` or *ignore* are excluded.

    Raises
    ------
    ConfigurationError
        If *patterns* is empty.
    """
    if not patterns:
        raise ConfigurationError("discover_files requires at least one glob pattern.")

    root_path = Path(root)
    include = [glob_to_regex(p) for p in patterns]
    excluded = [glob_to_regex(p) for p in [*DEFAULT_IGNORES, *(ignore or [])]]

    found: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=follow_symlinks):
        rel_dir = Path(dirpath).relative_to(root_path).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir

        # Prune ignored directories before descending into them.
        dirnames[:] = [
            d
            for d in dirnames
            if not _matches_any(f"{rel_dir}/{d}/".lstrip("/"), excluded)
        ]

        for name in filenames:
            rel = f"{rel_dir}/{name}" if rel_dir else name
            if _matches_any(rel, excluded):
                continue
            if _matches_any(rel, include):
                found.add(rel)

    result = sorted(found)
    logger.debug("Discovered %d file(s) under %s", len(result), root_path)
    return result
