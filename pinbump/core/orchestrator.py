"""Pipeline orchestrator — scan, resolve, gate, patch and publish.

The Orchestrator wires the scanner, the version sources, the gate chain,
the patch engine and the optional write-phase collaborators into a single
run that always ends in exactly one ``PipelineOutcome``:

    Scan -> AlignTrack -> ResolveVersion -> gates -> (dry run?) ->
    ApplyPatches -> Commit -> Push -> FindExistingPR -> CreateOrUpdatePR

Configuration problems and resolution exhaustion raise; every other stop
is a ``SkipOutcome``.  Exceptions from the git and pull-request
collaborators are absorbed into ``Skip(pr_creation_failed)``.
"""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from pinbump.config import PinbumpSettings
from pinbump.config import settings as default_settings
from pinbump.core.sources import Live, Snapshot, select_source
from pinbump.gates import GateContext, build_gate_sequence, run_gates
from pinbump.git.branch import commit_message_for
from pinbump.models.collaborators import (
    BranchCommitResult,
    PullRequestRef,
    PullRequestResult,
)
from pinbump.models.gates import SkipReason
from pinbump.models.occurrences import VersionOccurrence
from pinbump.models.outcomes import PipelineOutcome, SkipOutcome, SuccessOutcome
from pinbump.models.patches import PatchResult, RewriteContext
from pinbump.models.request import PipelineRequest, Snapshots
from pinbump.models.versions import ResolvedVersion
from pinbump.pr_body import generate_pull_request_body
from pinbump.rewriter.patch import compute_patch, write_patch
from pinbump.scanning.scanner import read_text_exact, scan_for_python_versions
from pinbump.scanning.track_alignment import determine_single_track
from pinbump.versioning.cpython_tags import fetch_cpython_tags
from pinbump.versioning.python_org import fetch_python_org_html, latest_from_html_index
from pinbump.versioning.release_notes import fetch_release_notes
from pinbump.versioning.resolver import resolve_latest_patch, select_target_version
from pinbump.versioning.runners import fetch_runner_manifest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Collaborator protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class GitCollaborator(Protocol):
    """Anything that can commit the bump on a branch and push it."""

    def create_branch_and_commit(
        self,
        repo_path: Path,
        track: str,
        files: list[str],
        commit_message: str,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> BranchCommitResult:
        ...

    def push_branch(
        self,
        repo_path: Path,
        branch: str,
        force_with_lease: bool = True,
        set_upstream: bool = True,
    ) -> None:
        ...


@runtime_checkable
class PullRequestCollaborator(Protocol):
    """Anything that can find and open pull requests on the code host."""

    def find_existing_pr(self, owner: str, repo: str, head: str) -> PullRequestRef | None:
        ...

    def create_or_update_pr(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> PullRequestResult:
        ...


class Capabilities(BaseModel):
    """Write-phase collaborators available to a run.

    An absent capability is a legitimate configuration: the run stops
    after the step that would need it and reports success.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    git: GitCollaborator | None = None
    pull_requests: PullRequestCollaborator | None = None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_target(
    track: str,
    tags: Snapshot[Any] | Live[Any],
    html: Snapshot[Any] | Live[Any],
    include_prerelease: bool = False,
) -> ResolvedVersion:
    """Resolve the target version, consulting *html* only when no tag is on *track*.

    Raises
    ------
    ResolutionError
        If neither source yields a version.
    """
    primary = resolve_latest_patch(track, tags.get(), include_prerelease)
    fallback = None
    if primary is None:
        logger.info("No tag on %s, consulting python.org", track)
        fallback = latest_from_html_index(track, html.get(), include_prerelease)
    return select_target_version(track, primary, fallback)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class Orchestrator:
    """Central pipeline coordinator.

    Parameters
    ----------
    capabilities:
        Optional git / pull-request collaborators.  Without them the run
        never goes beyond writing files.
    settings:
        Transport settings (timeout, user agent).  Uses the module
        singleton if not provided.
    session:
        Optional HTTP session passed to every live fetcher.
    """

    def __init__(
        self,
        capabilities: Capabilities | None = None,
        *,
        settings: PinbumpSettings | None = None,
        session: Any | None = None,
    ) -> None:
        self.capabilities = capabilities or Capabilities()
        self._settings = settings or default_settings
        self._session = session

    # ------------------------------------------------------------------
    # Source construction
    # ------------------------------------------------------------------

    def _transport(self) -> dict[str, Any]:
        return {
            "session": self._session,
            "timeout": self._settings.http_timeout_seconds,
            "user_agent": self._settings.user_agent,
        }

    def _sources(
        self, request: PipelineRequest
    ) -> dict[str, Snapshot[Any] | Live[Any]]:
        snapshots = request.snapshots or Snapshots()
        offline = request.no_network_fallback
        transport = self._transport()

        return {
            "cpython_tags": select_source(
                "cpython_tags",
                snapshots.cpython_tags,
                partial(
                    fetch_cpython_tags,
                    token=request.github_token,
                    include_prerelease=request.include_prerelease,
                    **transport,
                ),
                no_network=offline,
            ),
            "python_org_html": select_source(
                "python_org_html",
                snapshots.python_org_html,
                partial(fetch_python_org_html, **transport),
                no_network=offline,
            ),
            "runner_manifest": select_source(
                "runner_manifest",
                snapshots.runner_manifest,
                partial(fetch_runner_manifest, **transport),
                no_network=offline,
            ),
            "release_notes": select_source(
                "release_notes",
                snapshots.release_notes,
                partial(fetch_release_notes, token=request.github_token, **transport),
                no_network=offline,
                optional=True,
            ),
        }

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_patches(
        workspace: Path, update_set: list[VersionOccurrence], target: str
    ) -> list[PatchResult]:
        by_file: dict[str, list[VersionOccurrence]] = {}
        for occurrence in update_set:
            by_file.setdefault(occurrence.file, []).append(occurrence)

        patches: list[PatchResult] = []
        for file_path in sorted(by_file):
            content = read_text_exact(workspace / file_path)
            patch = compute_patch(
                RewriteContext(
                    file_path=file_path,
                    original_content=content,
                    to_version=target,
                    occurrences=by_file[file_path],
                )
            )
            write_patch(workspace, patch)
            patches.append(patch)
        return patches

    def _publish(
        self,
        request: PipelineRequest,
        target: str,
        files_changed: list[str],
        skipped_workflow_files: list[str],
    ) -> PipelineOutcome:
        """Commit, push and open the pull request.

        Raises whatever the collaborators raise; the caller absorbs it.
        """
        git = self.capabilities.git
        pulls = self.capabilities.pull_requests
        message = commit_message_for(request.track, target)

        commit = git.create_branch_and_commit(
            request.workspace,
            request.track,
            files_changed,
            message,
            author_name=request.author_name,
            author_email=request.author_email,
        )
        git.push_branch(request.workspace, commit.branch)

        owner_repo = request.owner_and_repo
        if pulls is None or owner_repo is None:
            logger.info("No pull-request capability, stopping after push")
            return SuccessOutcome(
                target_version=target,
                files_changed=files_changed,
                dry_run=False,
                skipped_workflow_files=skipped_workflow_files,
            )

        owner, repo = owner_repo
        existing = pulls.find_existing_pr(owner, repo, commit.branch)
        if existing is not None:
            return SkipOutcome(
                reason=SkipReason.PR_EXISTS,
                target_version=target,
                files_affected=files_changed,
                details=existing.model_dump(),
            )

        body = generate_pull_request_body(
            track=request.track,
            new_version=target,
            files_changed=files_changed,
            branch_name=commit.branch,
            default_branch=request.default_branch,
            skipped_workflow_files=skipped_workflow_files,
        )
        pull_request = pulls.create_or_update_pr(
            owner, repo, commit.branch, request.default_branch, message, body
        )
        logger.info("Pull request #%s %s", pull_request.number, pull_request.action)
        return SuccessOutcome(
            target_version=target,
            files_changed=files_changed,
            dry_run=False,
            side_effect_result=pull_request,
            skipped_workflow_files=skipped_workflow_files,
        )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, request: PipelineRequest) -> PipelineOutcome:
        """Execute one pipeline run.

        Raises
        ------
        ConfigurationError
            If a required source is missing in offline mode.
        ResolutionError
            If no source yields a version for the track.
        """
        workspace = request.workspace
        scan = scan_for_python_versions(
            workspace,
            request.paths,
            ignore=request.ignore,
            follow_symlinks=request.follow_symlinks,
        )
        if not scan.occurrences:
            return SkipOutcome(reason=SkipReason.NO_MATCHES_FOUND, files_affected=[])

        alignment = determine_single_track(scan.occurrences)
        if alignment.conflicts:
            return SkipOutcome(
                reason=SkipReason.MULTIPLE_TRACKS_DETECTED,
                details={"conflicts": alignment.conflicts},
            )
        if alignment.track != request.track:
            return SkipOutcome(
                reason=SkipReason.MULTIPLE_TRACKS_DETECTED,
                details={
                    "conflicts": sorted({alignment.track, request.track}),
                    "requested": request.track,
                },
            )

        sources = self._sources(request)
        target = resolve_target(
            request.track,
            sources["cpython_tags"],
            sources["python_org_html"],
            include_prerelease=request.include_prerelease,
        )
        version = target.version

        context = GateContext(
            track=request.track,
            target=target,
            occurrences=scan.occurrences,
            update_set=list(scan.occurrences),
        )
        gates = build_gate_sequence(
            request, sources["release_notes"], sources["runner_manifest"]
        )
        blocked = run_gates(gates, context)
        if blocked is not None:
            files_affected: list[str] | None = None
            if blocked.reason is SkipReason.RUNNERS_MISSING:
                files_affected = scan.files
            elif blocked.reason in (
                SkipReason.ALREADY_LATEST,
                SkipReason.WORKFLOW_PERMISSION_REQUIRED,
            ):
                files_affected = []
            return SkipOutcome(
                reason=blocked.reason,
                target_version=version,
                files_affected=files_affected,
                details=blocked.details or None,
            )

        files_changed = context.files_in_update_set
        skipped = context.skipped_workflow_files

        if request.dry_run:
            logger.info("Dry run: %d file(s) would move to %s", len(files_changed), version)
            return SuccessOutcome(
                target_version=version,
                files_changed=files_changed,
                dry_run=True,
                skipped_workflow_files=skipped,
            )

        self._apply_patches(workspace, context.update_set, version)

        if not request.allow_pr_creation or self.capabilities.git is None:
            return SuccessOutcome(
                target_version=version,
                files_changed=files_changed,
                dry_run=False,
                skipped_workflow_files=skipped,
            )

        try:
            return self._publish(request, version, files_changed, skipped)
        except Exception as exc:
            logger.error("Write phase failed: %s", exc)
            return SkipOutcome(
                reason=SkipReason.PR_CREATION_FAILED,
                target_version=version,
                files_affected=files_changed,
                details={"message": str(exc)},
            )


def execute_pipeline(
    request: PipelineRequest,
    capabilities: Capabilities | None = None,
    **kwargs: Any,
) -> PipelineOutcome:
    """Convenience wrapper: ``Orchestrator(capabilities, **kwargs).run(request)``."""
    return Orchestrator(capabilities, **kwargs).run(request)
