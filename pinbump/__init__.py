"""pinbump: keep pinned CPython patch versions current.

Scans a repository for pinned ``MAJOR.MINOR.PATCH`` CPython versions
(Dockerfiles, workflow ``python-version`` keys, ``.python-version``,
``runtime.txt``, ``pyproject.toml`` and friends), resolves the newest
patch on the same track, runs a fixed chain of eligibility gates and
rewrites the pins in place, optionally committing the change and opening
a pull request.
"""

__version__ = "0.1.0"

from pinbump.core.orchestrator import Capabilities, Orchestrator, execute_pipeline
from pinbump.models.request import PipelineRequest, Snapshots
from pinbump.cli.app import app as cli

__all__ = [
    "Capabilities",
    "Orchestrator",
    "PipelineRequest",
    "Snapshots",
    "cli",
    "execute_pipeline",
    "__version__",
]
