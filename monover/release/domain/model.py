from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Literal, TypeAlias


@dataclass(frozen=True, slots=True)
class Project:
    """A workspace project as exposed by the registry. Never mutated."""

    name: str
    root: Path
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class Significance(IntEnum):
    """How significant a set of changes is. Higher values win."""

    NONE = 0
    FIX = 1
    FEATURE = 2
    BREAKING = 3

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def bump_level(self) -> Literal["major", "minor", "patch"] | None:
        match self:
            case Significance.BREAKING:
                return "major"
            case Significance.FEATURE:
                return "minor"
            case Significance.FIX:
                return "patch"
            case _:
                return None


def highest(values: Iterable[Significance]) -> Significance:
    """Highest significance in values; NONE for an empty input."""
    return max(values, default=Significance.NONE)


@dataclass(frozen=True, slots=True)
class NoChange:
    """Nothing to release since the last tag."""


@dataclass(frozen=True, slots=True)
class NextVersion:
    value: str
    # Tag the version was computed from; None when no tag existed yet.
    previous_tag: str | None = None


NO_CHANGE = NoChange()

BumpDecision: TypeAlias = NoChange | NextVersion


FileChangeKind = Literal["manifest", "changelog"]


@dataclass(frozen=True, slots=True)
class FileChange:
    """A file the writer updates (or would update in a dry run)."""

    path: Path
    kind: FileChangeKind
    content: str


@dataclass(frozen=True, slots=True)
class WriteReport:
    """What a release writer did, or would do when `applied` is False."""

    version: str
    tag: str
    commit_message: str
    changes: tuple[FileChange, ...]
    applied: bool
