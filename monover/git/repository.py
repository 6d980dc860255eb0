"""Git repository abstraction.

Repository wraps the handful of git commands a release needs: reading
tags and history, staging, committing, tagging and pushing. All methods
return Result types.

Usage:
    repo = Repository(Path("/path/to/workspace"))

    match repo.log(since="core-1.2.0", path=Path("packages/core")):
        case Ok(commits):
            for c in commits:
                print(c.short_sha, c.message)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.platform.process import ProcessError
from monover.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Unit and record separators keep multi-line commit bodies intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"

__all__ = [
    "GitCommit",
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class GitCommit:
    """A commit as read from `git log`."""

    sha: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class Repository:
    """Git repository rooted at `path`."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def tags(self, *, prefix: str = "") -> Result[list[str], GitError]:
        """List tags, optionally only those starting with prefix."""
        args = ["tag", "--list"]
        if prefix:
            args.append(f"{prefix}*")
        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error("tag --list", e, "failed to list tags"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def log(self, *, since: str | None, path: Path | None = None) -> Result[list[GitCommit], GitError]:
        """Commits reachable from HEAD and not from `since`, newest first.

        Args:
            since: Tag or ref to start after; None means the full history.
            path: Restrict to commits touching this path.
        """
        args = ["log", f"--format=%H{_FIELD_SEP}%B{_RECORD_SEP}"]
        if since is not None:
            args.append(f"{since}..HEAD")
        if path is not None:
            args.extend(["--", str(path)])

        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error("log", e, "failed to read history"))
            case Ok(stdout):
                return Ok(self._parse_log(stdout))

    def add(self, paths: Sequence[Path]) -> Result[None, GitError]:
        if not paths:
            return Ok(None)
        result = self._run(["add", "--", *(str(p) for p in paths)])
        if isinstance(result, Err):
            return Err(self._error("add", result.error, "failed to stage files"))
        return Ok(None)

    def commit(
        self, *, message: str, paths: Sequence[Path] = (), no_verify: bool = False
    ) -> Result[None, GitError]:
        """Commit staged changes, restricted to `paths` when given."""
        args = ["commit", "-m", message]
        if no_verify:
            args.append("--no-verify")
        if paths:
            args.extend(["--", *(str(p) for p in paths)])
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error("commit", result.error, "commit failed"))
        return Ok(None)

    def tag(self, *, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD."""
        result = self._run(["tag", "-a", name, "-m", message])
        if isinstance(result, Err):
            return Err(self._error(f"tag {name}", result.error, "tag failed"))
        return Ok(None)

    def push(self, *, remote: str, branch: str, no_verify: bool = False) -> Result[None, GitError]:
        """Push the branch together with its annotated tags, atomically."""
        args = ["push", "--follow-tags", "--atomic"]
        if no_verify:
            args.append("--no-verify")
        args.extend([remote, branch])
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error("push", result.error, "push failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(command=command, message=e.output or fallback, returncode=e.returncode)

    def _parse_log(self, output: str) -> list[GitCommit]:
        commits: list[GitCommit] = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record.strip():
                continue
            sha, _, message = record.partition(_FIELD_SEP)
            commits.append(GitCommit(sha=sha.strip(), message=message.strip()))
        return commits
