"""`monover version` - compute the next version and release it."""

from __future__ import annotations

import typer

from monover.cli.context import CLIContext, build_context
from monover.core.errors import ErrorCode
from monover.core.result import Err
from monover.git.repository import Repository
from monover.release.flow.version_flow import VersionDeps, run_version
from monover.release.infra.git import ConventionalClassifier, GitHistory, GitVersionControl
from monover.release.infra.registry import ConfigRegistry
from monover.release.infra.tasks import CommandTaskExecutor
from monover.release.resolve.request import RequestOverrides, build_request
from monover.release.view.outcome import render_error, render_outcome


def build_deps(ctx: CLIContext) -> VersionDeps:
    repo = Repository(ctx.workspace.root)
    history = GitHistory(repo)
    return VersionDeps(
        registry=ConfigRegistry(ctx.config),
        history=history,
        classifier=ConventionalClassifier(history),
        vcs=GitVersionControl(repo),
        executor=CommandTaskExecutor(ctx.config.projects),
        console=ctx.console,
    )


def version(
    project: str = typer.Argument(..., help="Project to version (see `monover projects`)"),
    release_as: str | None = typer.Option(
        None,
        "--release-as",
        "-r",
        help="major|minor|patch|premajor|preminor|prepatch|prerelease or an explicit version",
    ),
    version_alias: str | None = typer.Option(None, "--version", hidden=True),
    preid: str | None = typer.Option(None, "--preid", help="Prerelease identifier, e.g. beta"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would change, write nothing"),
    push: bool | None = typer.Option(None, "--push/--no-push", help="Push commit and tag"),
    remote: str | None = typer.Option(None, "--remote", help="Remote to push to"),
    base_branch: str | None = typer.Option(None, "--base-branch", help="Branch to push"),
    no_verify: bool | None = typer.Option(
        None, "--no-verify/--verify", help="Skip git hooks on commit and push"
    ),
    sync_versions: bool | None = typer.Option(
        None, "--sync-versions/--independent", help="Version all projects together"
    ),
    track_deps: bool | None = typer.Option(
        None, "--track-deps/--no-track-deps", help="Let dependency changes trigger a release"
    ),
    skip_root_changelog: bool | None = typer.Option(
        None, "--skip-root-changelog/--root-changelog", help="Sync mode: leave the root changelog"
    ),
    skip_project_changelog: bool | None = typer.Option(
        None,
        "--skip-project-changelog/--project-changelog",
        help="Sync mode: leave per-project changelogs",
    ),
    tag_prefix: str | None = typer.Option(None, "--tag-prefix", help="Override the tag prefix"),
) -> None:
    """Release a project if anything changed since its last tag."""
    ctx = build_context()

    request = build_request(
        project=project,
        config=ctx.config,
        overrides=RequestOverrides(
            release_as=release_as or version_alias,
            preid=preid,
            dry_run=dry_run,
            push=push,
            remote=remote,
            base_branch=base_branch,
            no_verify=no_verify,
            sync_versions=sync_versions,
            track_deps=track_deps,
            skip_root_changelog=skip_root_changelog,
            skip_project_changelog=skip_project_changelog,
            tag_prefix=tag_prefix,
        ),
    )
    if isinstance(request, Err):
        render_error(request.error, ctx.console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if request.value.dry_run:
        ctx.console.header(f"{project}: version (dry run)")
    else:
        ctx.console.header(f"{project}: version")

    outcome = run_version(request.value, build_deps(ctx))
    render_outcome(outcome, ctx.console)
    if not outcome.success:
        raise typer.Exit(code=int(ErrorCode.RELEASE_ERROR))
