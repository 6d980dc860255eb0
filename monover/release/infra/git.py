"""Git-backed implementations of the history, classifier and VCS ports."""

from __future__ import annotations

from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.git.repository import GitError, Repository
from monover.release.domain.commits import highest_significance
from monover.release.domain.model import Commit, Significance
from monover.release.domain.ports import HistoryReader
from monover.release.errors import ReleaseError, ReleaseErrorKind


def _from_git(kind: ReleaseErrorKind, e: GitError) -> ReleaseError:
    return ReleaseError(
        kind=kind,
        message=f"git {e.command} failed (exit {e.returncode})",
        detail=e.message,
    )


class GitHistory:
    """HistoryReader over a repository."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def tags(self, *, prefix: str) -> Result[list[str], ReleaseError]:
        result = self._repo.tags(prefix=prefix)
        if isinstance(result, Err):
            return Err(_from_git("history_read", result.error))
        return Ok(result.value)

    def commits_since(self, *, tag: str | None, root: Path) -> Result[list[Commit], ReleaseError]:
        if not root.is_dir():
            return Err(
                ReleaseError(
                    kind="history_read",
                    message=f"project root does not exist: {root}",
                )
            )
        result = self._repo.log(since=tag, path=root)
        if isinstance(result, Err):
            return Err(_from_git("history_read", result.error))
        return Ok([Commit(sha=c.sha, message=c.message) for c in result.value])


class ConventionalClassifier:
    """CommitClassifier applying Conventional Commits to a history."""

    def __init__(self, history: HistoryReader) -> None:
        self._history = history

    def highest_significance(
        self, *, root: Path, since_tag: str | None
    ) -> Result[Significance, ReleaseError]:
        commits = self._history.commits_since(tag=since_tag, root=root)
        if isinstance(commits, Err):
            return commits
        return Ok(highest_significance(commits.value))


class GitVersionControl:
    """VersionControl over a repository."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def commit(
        self, *, message: str, paths: tuple[Path, ...], no_verify: bool
    ) -> Result[None, ReleaseError]:
        added = self._repo.add(paths)
        if isinstance(added, Err):
            return Err(_from_git("write_failed", added.error))
        committed = self._repo.commit(message=message, paths=paths, no_verify=no_verify)
        if isinstance(committed, Err):
            return Err(_from_git("write_failed", committed.error))
        return Ok(None)

    def tag(self, *, name: str, message: str) -> Result[None, ReleaseError]:
        result = self._repo.tag(name=name, message=message)
        if isinstance(result, Err):
            return Err(_from_git("write_failed", result.error))
        return Ok(None)

    def push(self, *, remote: str, branch: str, no_verify: bool) -> Result[None, ReleaseError]:
        result = self._repo.push(remote=remote, branch=branch, no_verify=no_verify)
        if isinstance(result, Err):
            error = _from_git("push_failed", result.error)
            return Err(
                ReleaseError(
                    kind=error.kind,
                    message=error.message,
                    hint="The release commit and tag exist locally; push them manually.",
                    detail=error.detail,
                )
            )
        return Ok(None)
