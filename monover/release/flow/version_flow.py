"""The `version` use case as a fail-fast, strictly sequential pipeline.

    resolving_prefix -> resolving_dependencies? -> computing_bump
        -> nothing_to_release
        -> writing -> pushing? -> running_post_targets? -> done

Any step may end the run in `failed`; no later step runs after a failure
and nothing already written locally is rolled back. A dry run takes the
same path through every decision and only skips mutations: the writers
stop before touching files, and pushing and post-targets are skipped.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TypeVar

from monover.core.result import Err, Ok, Result
from monover.output.console import ConsoleProtocol
from monover.release.contracts import ReleaseOutcome, ReleaseRequest, ReleaseState
from monover.release.domain.model import BumpDecision, NoChange
from monover.release.domain.ports import (
    CommitClassifier,
    HistoryReader,
    ProjectRegistry,
    TaskExecutor,
    VersionControl,
)
from monover.release.domain.post_targets import PostTargetContext
from monover.release.domain.tag_prefix import format_tag, resolve_tag_prefix
from monover.release.errors import ReleaseError
from monover.release.flow.bump import compute_bump
from monover.release.flow.post_targets import run_post_targets
from monover.release.flow.push import push_release
from monover.release.flow.writer import ProjectWriter, ReleaseWriter, WorkspaceWriter, WriteOptions
from monover.release.resolve.dependencies import resolve_dependency_roots


@dataclass(frozen=True, slots=True)
class VersionDeps:
    """Collaborators of one run."""

    registry: ProjectRegistry
    history: HistoryReader
    classifier: CommitClassifier
    vcs: VersionControl
    executor: TaskExecutor
    console: ConsoleProtocol
    today: Callable[[], date] = date.today


T = TypeVar("T")


def _guarded(state: ReleaseState, step: Callable[[], Result[T, ReleaseError]]) -> Result[T, ReleaseError]:
    """Run a step, tagging its error with the state and capturing crashes."""
    try:
        result = step()
    except Exception as e:  # noqa: BLE001 - reported with traceback as an unexpected failure
        return Err(
            ReleaseError(
                kind="unexpected",
                message=f"{type(e).__name__}: {e}",
                origin=state,
                detail=traceback.format_exc(),
            )
        )
    if isinstance(result, Err):
        return Err(result.error.with_origin(state))
    return result


def select_writer(request: ReleaseRequest, deps: VersionDeps) -> ReleaseWriter:
    if request.sync_versions:
        return WorkspaceWriter(
            registry=deps.registry, history=deps.history, vcs=deps.vcs, console=deps.console
        )
    return ProjectWriter(history=deps.history, vcs=deps.vcs, console=deps.console)


def _resolve_prefix(request: ReleaseRequest, registry: ProjectRegistry) -> Result[tuple[str, Path], ReleaseError]:
    root = registry.project_root(request.project)
    if root is None:
        return Err(ReleaseError(kind="invalid_request", message=f"unknown project: {request.project}"))
    prefix = resolve_tag_prefix(
        override=request.tag_prefix,
        project_name=request.project,
        sync_versions=request.sync_versions,
    )
    return Ok((prefix, root))


def run_version(request: ReleaseRequest, deps: VersionDeps) -> ReleaseOutcome:
    console = deps.console
    decision: BumpDecision | None = None

    def failed(state: ReleaseState, error: ReleaseError) -> ReleaseOutcome:
        return ReleaseOutcome(
            state="failed",
            decision=decision,
            error=error,
            failed_at=state,
            dry_run=request.dry_run,
        )

    resolved = _guarded("resolving_prefix", lambda: _resolve_prefix(request, deps.registry))
    if isinstance(resolved, Err):
        return failed("resolving_prefix", resolved.error)
    tag_prefix, project_root = resolved.value

    extra_roots: tuple[Path, ...] = ()
    # An explicit release type makes dependency history irrelevant.
    if request.track_deps and request.release_as is None:
        roots = _guarded(
            "resolving_dependencies",
            lambda: resolve_dependency_roots(request.project, registry=deps.registry),
        )
        if isinstance(roots, Err):
            return failed("resolving_dependencies", roots.error)
        extra_roots = roots.value

    bump = _guarded(
        "computing_bump",
        lambda: compute_bump(
            project_root=project_root,
            extra_roots=extra_roots,
            tag_prefix=tag_prefix,
            release_as=request.release_as,
            preid=request.preid,
            history=deps.history,
            classifier=deps.classifier,
            console=console,
        ),
    )
    if isinstance(bump, Err):
        return failed("computing_bump", bump.error)
    decision = bump.value

    if isinstance(decision, NoChange):
        return ReleaseOutcome(state="nothing_to_release", decision=decision, dry_run=request.dry_run)

    version = decision.value
    tag = format_tag(tag_prefix, version)
    console.info(f"next version: {version} ({tag})")

    writer = select_writer(request, deps)
    options = WriteOptions(
        project=request.project,
        project_root=project_root,
        version=version,
        tag_prefix=tag_prefix,
        previous_tag=decision.previous_tag,
        day=deps.today(),
        dry_run=request.dry_run,
        no_verify=request.no_verify,
        changelog_header=request.changelog_header,
        skip_root_changelog=request.skip_root_changelog,
        skip_project_changelog=request.skip_project_changelog,
    )
    report = _guarded("writing", lambda: writer.apply(options))
    if isinstance(report, Err):
        return failed("writing", report.error)

    if request.dry_run:
        return ReleaseOutcome(state="done", decision=decision, report=report.value, dry_run=True)

    if request.push:
        pushed = _guarded(
            "pushing",
            lambda: push_release(
                vcs=deps.vcs,
                remote=request.remote,
                branch=request.base_branch,
                no_verify=request.no_verify,
                console=console,
            ),
        )
        if isinstance(pushed, Err):
            return failed("pushing", pushed.error)

    if request.post_targets:
        context = PostTargetContext(
            project=request.project,
            version=version,
            tag=tag,
            tag_prefix=tag_prefix,
            no_verify=request.no_verify,
            dry_run=request.dry_run,
            remote=request.remote,
            base_branch=request.base_branch,
        )
        ran = _guarded(
            "running_post_targets",
            lambda: run_post_targets(
                tasks=request.post_targets,
                context=context,
                executor=deps.executor,
                console=console,
            ),
        )
        if isinstance(ran, Err):
            return failed("running_post_targets", ran.error)

    return ReleaseOutcome(state="done", decision=decision, report=report.value)
