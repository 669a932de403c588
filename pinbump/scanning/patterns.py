"""Pattern library — per-file-format detectors for pinned CPython versions.

Each ``PatternDefinition`` is plain data: the file-applicability predicate
(basenames, suffixes, an optional directory segment; all compared
case-insensitively) and the capture regexes.  Every regex captures one
named group ``version`` holding a fully qualified ``MAJOR.MINOR.PATCH``
token; two-part versions never match.  A pre-release suffix directly
after the token (``3.14.0rc1``, ``3.14.0-rc.1``) is recorded on the
occurrence as ``suffix``.

The set is closed: one ``PatternKind`` per supported file format, no
runtime registration.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

from pinbump.models.occurrences import VersionOccurrence

VERSION_PATTERN = r"[0-9]+\.[0-9]+\.[0-9]+"
PRERELEASE_PATTERN = r"-?(?:alpha|beta|rc|a|b)\.?[0-9]+"

# Pre-release suffix directly after a version token, e.g. "rc1", "a7", "-rc.1".
PRERELEASE_SUFFIX_RE = re.compile(PRERELEASE_PATTERN, re.IGNORECASE)


class PatternKind(str, Enum):
    """The supported file formats."""

    WORKFLOW_PYTHON_VERSION = "workflow-python-version"
    DOCKERFILE_FROM = "dockerfile-from"
    PYTHON_VERSION_FILE = "python-version-file"
    TOOL_VERSIONS = "tool-versions"
    RUNTIME_TXT = "runtime-txt"
    PYPROJECT_PYTHON = "pyproject-python"
    TOX_INI = "tox-ini"
    PIPFILE = "pipfile"
    ENVIRONMENT_YML = "environment-yml"


class PatternDefinition(BaseModel):
    """One file-format detector."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: PatternKind
    description: str
    basenames: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()
    directory: str | None = None  # required path segment, e.g. ".github/workflows"
    regexes: tuple[re.Pattern[str], ...]

    def applies_to(self, file_path: str) -> bool:
        """Return True when this detector should run against *file_path*."""
        normalized = normalize_path(file_path).lower()
        base = normalized.rsplit("/", 1)[-1]

        if self.directory is not None:
            if f"/{self.directory}/" not in f"/{normalized}":
                return False

        if base in self.basenames:
            return True
        return any(base.endswith(suffix) for suffix in self.suffixes)


def _compile(pattern: str, multiline: bool = False) -> re.Pattern[str]:
    flags = re.IGNORECASE | (re.MULTILINE if multiline else 0)
    pattern = pattern.replace("{V}", VERSION_PATTERN)
    # end of a version token, allowing a pre-release suffix before the boundary
    pattern = pattern.replace("{END}", rf"(?=(?:{PRERELEASE_PATTERN})?\b)")
    return re.compile(pattern, flags)


PYTHON_VERSION_PATTERNS: tuple[PatternDefinition, ...] = (
    PatternDefinition(
        kind=PatternKind.WORKFLOW_PYTHON_VERSION,
        description="python-version inputs inside CI workflow files",
        suffixes=(".yml", ".yaml"),
        directory=".github/workflows",
        regexes=(
            _compile(r"""python-version\s*:\s*['"]?(?P<version>{V})['"]?"""),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.DOCKERFILE_FROM,
        description="Python base images and version build args in Dockerfiles",
        basenames=("dockerfile",),
        suffixes=(".dockerfile",),
        regexes=(
            _compile(r"FROM\s+[^\s]*python[^\s:]*:(?P<version>{V})"),
            _compile(
                r"""\b(?:ARG|ENV)\s+PYTHON[_-]?VERSION\s*=\s*['"]?(?P<version>{V})['"]?"""
            ),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.PYTHON_VERSION_FILE,
        description=".python-version files containing a sole version",
        basenames=(".python-version",),
        regexes=(_compile(r"^\s*(?P<version>{V})\s*$", multiline=True),),
    ),
    PatternDefinition(
        kind=PatternKind.TOOL_VERSIONS,
        description="python entries inside .tool-versions",
        basenames=(".tool-versions",),
        regexes=(
            _compile(r"^python[^\S\r\n]+(?P<version>{V}){END}", multiline=True),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.RUNTIME_TXT,
        description="Heroku-style runtime.txt files",
        basenames=("runtime.txt",),
        regexes=(_compile(r"^python-(?P<version>{V}){END}", multiline=True),),
    ),
    PatternDefinition(
        kind=PatternKind.PYPROJECT_PYTHON,
        description="python requirement entries inside pyproject.toml",
        basenames=("pyproject.toml",),
        regexes=(
            _compile(
                r"""\b(?:requires-python|python(?:[_-]?version)?|pythonVersion)\s*=\s*"(?:==)?(?P<version>{V})\""""
            ),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.TOX_INI,
        description="tox.ini basepython/python_version fields",
        basenames=("tox.ini",),
        regexes=(
            _compile(r"^\s*python_version\s*=\s*(?P<version>{V}){END}", multiline=True),
            _compile(r"^\s*basepython\s*=\s*python(?P<version>{V}){END}", multiline=True),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.PIPFILE,
        description="Pipfile python version declarations",
        basenames=("pipfile",),
        regexes=(
            _compile(r"""^\s*python_full_version\s*=\s*"(?P<version>{V})\"""", multiline=True),
            _compile(r"""^\s*python_version\s*=\s*"(?P<version>{V})\"""", multiline=True),
        ),
    ),
    PatternDefinition(
        kind=PatternKind.ENVIRONMENT_YML,
        description="Conda environment python dependencies",
        basenames=("environment.yml", "environment.yaml"),
        regexes=(_compile(r"(?:^|\s|-)python(?:==|=)(?P<version>{V}){END}"),),
    ),
)


def normalize_path(file_path: str) -> str:
    """Return *file_path* with forward slashes only."""
    return file_path.replace("\\", "/")


def index_to_position(content: str, index: int) -> tuple[int, int]:
    """Convert a text index into a 1-based ``(line, column)`` pair.

    ``\\r\\n`` and a lone ``\\r`` each count as a single line break.
    """
    prefix = content[:index]
    line = 1 + prefix.count("\n") + prefix.count("\r") - prefix.count("\r\n")
    last_break = max(prefix.rfind("\n"), prefix.rfind("\r"))
    return line, index - last_break


def _parse_parts(version: str) -> tuple[int, int, int] | None:
    try:
        major, minor, patch = (int(part) for part in version.split("."))
    except ValueError:
        return None
    if min(major, minor, patch) < 0:
        return None
    return major, minor, patch


def applicable_patterns(file_path: str) -> list[PatternDefinition]:
    """Detectors whose predicate accepts *file_path*."""
    return [p for p in PYTHON_VERSION_PATTERNS if p.applies_to(file_path)]


def find_version_occurrences(file_path: str, content: str) -> list[VersionOccurrence]:
    """Locate every pinned version token in *content*.

    The reported ``offset`` is that of the version token, not of the whole
    match.  Results are sorted by ``(line, column, matched)``; a token
    matched by more than one regex is reported once.
    """
    seen_offsets: set[int] = set()
    results: list[VersionOccurrence] = []

    for pattern in applicable_patterns(file_path):
        for regex in pattern.regexes:
            for match in regex.finditer(content):
                version = match.group("version")
                if not version:
                    continue
                parts = _parse_parts(version)
                if parts is None:
                    continue

                offset = match.start("version")
                suffix_match = PRERELEASE_SUFFIX_RE.match(content, match.end("version"))
                if offset in seen_offsets:
                    continue
                seen_offsets.add(offset)

                line, column = index_to_position(content, offset)
                results.append(
                    VersionOccurrence(
                        file=file_path,
                        line=line,
                        column=column,
                        matched=version,
                        major=parts[0],
                        minor=parts[1],
                        patch=parts[2],
                        offset=offset,
                        suffix=suffix_match.group(0) if suffix_match else "",
                    )
                )

    results.sort(key=lambda o: (o.line, o.column, o.matched))
    return results
