"""Release writers: changelog + manifest + commit + tag.

Both writers compute the complete WriteReport first and only then apply
it. A dry run goes through the exact same computation and stops before
the first file write, so its report always matches what a real run does.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Protocol

from monover.core.result import Err, Ok, Result
from monover.output.console import ConsoleProtocol, Style
from monover.platform.files import atomic_write_text, read_text_if_exists
from monover.release.domain.changelog import prepend_section, render_section
from monover.release.domain.model import FileChange, WriteReport
from monover.release.domain.ports import HistoryReader, ProjectRegistry, VersionControl
from monover.release.domain.tag_prefix import format_tag
from monover.release.errors import ReleaseError
from monover.release.infra.manifest import find_manifest, read_manifest, render_manifest

CHANGELOG_NAME = "CHANGELOG.md"


@dataclass(frozen=True, slots=True)
class WriteOptions:
    project: str
    project_root: Path
    version: str
    tag_prefix: str
    previous_tag: str | None
    day: date
    dry_run: bool = False
    no_verify: bool = False
    changelog_header: str = "# Changelog\n"
    skip_root_changelog: bool = False
    skip_project_changelog: bool = False

    @property
    def tag(self) -> str:
        return format_tag(self.tag_prefix, self.version)


class ReleaseWriter(Protocol):
    def apply(self, options: WriteOptions) -> Result[WriteReport, ReleaseError]: ...


def _dry(dry_run: bool) -> str:
    return "[dry-run] " if dry_run else ""


def _manifest_change(
    root: Path, version: str, console: ConsoleProtocol
) -> Result[FileChange | None, ReleaseError]:
    path = find_manifest(root)
    if path is None:
        console.warning(f"no manifest found in {root}, version file not updated")
        return Ok(None)
    text = read_manifest(path)
    if isinstance(text, Err):
        return text
    rendered = render_manifest(path, text.value, version)
    if isinstance(rendered, Err):
        return rendered
    return Ok(FileChange(path=path, kind="manifest", content=rendered.value))


def _changelog_change(
    *,
    path: Path,
    history_root: Path,
    options: WriteOptions,
    history: HistoryReader,
    console: ConsoleProtocol,
) -> Result[FileChange, ReleaseError]:
    commits = history.commits_since(tag=options.previous_tag, root=history_root)
    if isinstance(commits, Err):
        return commits

    section = render_section(version=options.version, day=options.day, commits=commits.value)
    if options.dry_run:
        console.detail(section)
    try:
        existing = read_text_if_exists(path)
    except OSError as e:
        return Err(
            ReleaseError(kind="write_failed", message=f"failed to read {path}: {e}", hint=str(path))
        )
    content = prepend_section(existing, header=options.changelog_header, section=section)
    return Ok(FileChange(path=path, kind="changelog", content=content))


def _apply_report(
    report: WriteReport,
    *,
    vcs: VersionControl,
    console: ConsoleProtocol,
    no_verify: bool,
) -> Result[WriteReport, ReleaseError]:
    prefix = _dry(not report.applied)
    for change in report.changes:
        console.print(f"{prefix}update {change.kind}: {change.path}", Style.DIM)
    console.print(f"{prefix}commit: {report.commit_message}", Style.DIM)
    console.print(f"{prefix}tag: {report.tag}", Style.DIM)

    if not report.applied:
        return Ok(report)

    for change in report.changes:
        try:
            atomic_write_text(change.path, change.content)
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="write_failed",
                    message=f"failed to write {change.path.name}: {e}",
                    hint=str(change.path),
                )
            )

    committed = vcs.commit(
        message=report.commit_message,
        paths=tuple(c.path for c in report.changes),
        no_verify=no_verify,
    )
    if isinstance(committed, Err):
        return committed
    tagged = vcs.tag(name=report.tag, message=report.commit_message)
    if isinstance(tagged, Err):
        return tagged
    return Ok(report)


class ProjectWriter:
    """Version one project: its manifest, its changelog, a project tag."""

    def __init__(
        self, *, history: HistoryReader, vcs: VersionControl, console: ConsoleProtocol
    ) -> None:
        self._history = history
        self._vcs = vcs
        self._console = console

    def apply(self, options: WriteOptions) -> Result[WriteReport, ReleaseError]:
        changes: list[FileChange] = []

        manifest = _manifest_change(options.project_root, options.version, self._console)
        if isinstance(manifest, Err):
            return manifest
        if manifest.value is not None:
            changes.append(manifest.value)

        changelog = _changelog_change(
            path=options.project_root / CHANGELOG_NAME,
            history_root=options.project_root,
            options=options,
            history=self._history,
            console=self._console,
        )
        if isinstance(changelog, Err):
            return changelog
        changes.append(changelog.value)

        report = WriteReport(
            version=options.version,
            tag=options.tag,
            commit_message=f"chore({options.project}): release version {options.version}",
            changes=tuple(changes),
            applied=not options.dry_run,
        )
        return _apply_report(report, vcs=self._vcs, console=self._console, no_verify=options.no_verify)


class WorkspaceWriter:
    """Version every project to one shared version in a single commit and tag."""

    def __init__(
        self,
        *,
        registry: ProjectRegistry,
        history: HistoryReader,
        vcs: VersionControl,
        console: ConsoleProtocol,
    ) -> None:
        self._registry = registry
        self._history = history
        self._vcs = vcs
        self._console = console

    def apply(self, options: WriteOptions) -> Result[WriteReport, ReleaseError]:
        changes: list[FileChange] = []
        workspace_root = self._registry.workspace_root

        for name in self._registry.project_names():
            root = self._registry.project_root(name)
            if root is None:
                continue

            manifest = _manifest_change(root, options.version, self._console)
            if isinstance(manifest, Err):
                return manifest
            if manifest.value is not None:
                changes.append(manifest.value)

            if options.skip_project_changelog:
                continue
            # The root changelog belongs to the block below.
            if root == workspace_root:
                continue
            changelog = _changelog_change(
                path=root / CHANGELOG_NAME,
                history_root=root,
                options=options,
                history=self._history,
                console=self._console,
            )
            if isinstance(changelog, Err):
                return changelog
            changes.append(changelog.value)

        if not options.skip_root_changelog:
            changelog = _changelog_change(
                path=workspace_root / CHANGELOG_NAME,
                history_root=workspace_root,
                options=options,
                history=self._history,
                console=self._console,
            )
            if isinstance(changelog, Err):
                return changelog
            changes.append(changelog.value)

        report = WriteReport(
            version=options.version,
            tag=options.tag,
            commit_message=f"chore(release): publish {options.version}",
            changes=tuple(changes),
            applied=not options.dry_run,
        )
        return _apply_report(report, vcs=self._vcs, console=self._console, no_verify=options.no_verify)
