"""Cross-layer contracts for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from monover.release.domain.model import BumpDecision, WriteReport
from monover.release.domain.post_targets import PostTarget
from monover.release.errors import ReleaseError

ReleaseState = Literal[
    "resolving_prefix",
    "resolving_dependencies",
    "computing_bump",
    "nothing_to_release",
    "writing",
    "pushing",
    "running_post_targets",
    "done",
    "failed",
]

TerminalState = Literal["nothing_to_release", "done", "failed"]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Normalized input of one `monover version` run."""

    project: str
    sync_versions: bool = False
    release_as: str | None = None
    preid: str | None = None
    dry_run: bool = False
    push: bool = False
    remote: str = "origin"
    base_branch: str = "main"
    no_verify: bool = False
    track_deps: bool = False
    skip_root_changelog: bool = False
    skip_project_changelog: bool = False
    tag_prefix: str | None = None
    changelog_header: str = "# Changelog\n"
    post_targets: tuple[PostTarget, ...] = ()


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """Terminal result of a run, rendered by the view layer.

    `nothing_to_release` and `done` are both successes; `failed_at` names
    the state the pipeline was in when `error` occurred.
    """

    state: TerminalState
    decision: BumpDecision | None = None
    report: WriteReport | None = None
    error: ReleaseError | None = None
    failed_at: ReleaseState | None = None
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.state != "failed"
