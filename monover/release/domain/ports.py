"""Collaborator interfaces the release flow depends on.

Infra adapters implement these against git, the filesystem and
monover.toml; tests implement them in memory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from monover.core.result import Result
from monover.release.domain.model import Commit, Significance
from monover.release.domain.post_targets import ResolvedPostTarget
from monover.release.errors import ReleaseError


class ProjectRegistry(Protocol):
    """Read-only view of the workspace project graph."""

    @property
    def workspace_root(self) -> Path: ...

    def project_names(self) -> tuple[str, ...]: ...

    def project_root(self, name: str) -> Path | None: ...

    def dependencies(self, name: str) -> tuple[str, ...] | None: ...


class HistoryReader(Protocol):
    def tags(self, *, prefix: str) -> Result[list[str], ReleaseError]: ...

    def commits_since(self, *, tag: str | None, root: Path) -> Result[list[Commit], ReleaseError]: ...


class CommitClassifier(Protocol):
    def highest_significance(
        self, *, root: Path, since_tag: str | None
    ) -> Result[Significance, ReleaseError]: ...


class VersionControl(Protocol):
    def commit(
        self, *, message: str, paths: tuple[Path, ...], no_verify: bool
    ) -> Result[None, ReleaseError]: ...

    def tag(self, *, name: str, message: str) -> Result[None, ReleaseError]: ...

    def push(self, *, remote: str, branch: str, no_verify: bool) -> Result[None, ReleaseError]: ...


class TaskExecutor(Protocol):
    def execute(self, task: ResolvedPostTarget) -> Result[None, ReleaseError]: ...
