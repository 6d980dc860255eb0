"""In-memory implementations of the release ports for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.release.domain.model import Commit
from monover.release.domain.post_targets import ResolvedPostTarget
from monover.release.errors import ReleaseError


def commit(message: str, sha: str = "a1b2c3d4e5f6") -> Commit:
    return Commit(sha=sha, message=message)


class FakeRegistry:
    def __init__(self, root: Path, projects: dict[str, tuple[str, tuple[str, ...]]]) -> None:
        self._root = root
        self._projects = projects

    @property
    def workspace_root(self) -> Path:
        return self._root

    def project_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._projects))

    def project_root(self, name: str) -> Path | None:
        entry = self._projects.get(name)
        return self._root / entry[0] if entry is not None else None

    def dependencies(self, name: str) -> tuple[str, ...] | None:
        entry = self._projects.get(name)
        return entry[1] if entry is not None else None


@dataclass
class FakeHistory:
    """Tags plus commits per root; commits are "since the last tag"."""

    tag_list: list[str] = field(default_factory=list)
    commits: dict[Path, list[Commit]] = field(default_factory=dict)
    fail_roots: set[Path] = field(default_factory=set)
    reads: list[tuple[str | None, Path]] = field(default_factory=list)

    def tags(self, *, prefix: str) -> Result[list[str], ReleaseError]:
        return Ok([t for t in self.tag_list if t.startswith(prefix)])

    def commits_since(self, *, tag: str | None, root: Path) -> Result[list[Commit], ReleaseError]:
        self.reads.append((tag, root))
        if root in self.fail_roots:
            return Err(ReleaseError(kind="history_read", message=f"cannot read {root}"))
        return Ok(list(self.commits.get(root, [])))


@dataclass
class FakeVcs:
    commits: list[tuple[str, tuple[Path, ...]]] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    pushes: list[tuple[str, str, bool]] = field(default_factory=list)
    fail: set[str] = field(default_factory=set)

    @property
    def mutations(self) -> int:
        return len(self.commits) + len(self.tags) + len(self.pushes)

    def commit(
        self, *, message: str, paths: tuple[Path, ...], no_verify: bool
    ) -> Result[None, ReleaseError]:
        if "commit" in self.fail:
            return Err(ReleaseError(kind="write_failed", message="commit failed"))
        self.commits.append((message, paths))
        return Ok(None)

    def tag(self, *, name: str, message: str) -> Result[None, ReleaseError]:
        if "tag" in self.fail:
            return Err(ReleaseError(kind="write_failed", message="tag failed"))
        self.tags.append(name)
        return Ok(None)

    def push(self, *, remote: str, branch: str, no_verify: bool) -> Result[None, ReleaseError]:
        if "push" in self.fail:
            return Err(ReleaseError(kind="push_failed", message="push rejected", detail="! [rejected]"))
        self.pushes.append((remote, branch, no_verify))
        return Ok(None)


@dataclass
class FakeExecutor:
    executed: list[ResolvedPostTarget] = field(default_factory=list)
    error: ReleaseError | None = None

    def execute(self, task: ResolvedPostTarget) -> Result[None, ReleaseError]:
        if self.error is not None:
            return Err(self.error)
        self.executed.append(task)
        return Ok(None)
