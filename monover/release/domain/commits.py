"""Conventional Commits classification.

Parses commit messages of the form `type(scope)!: description` and maps
them to a Significance. Messages that do not follow the convention
count as NONE and are left out of the changelog.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from monover.release.domain.model import Commit, Significance, highest

_HEADER_RE = re.compile(r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()]*)\))?(?P<bang>!)?: (?P<desc>.+)$")
_BREAKING_FOOTER_RE = re.compile(r"^BREAKING[ -]CHANGE: ?(?P<note>.*)$", re.MULTILINE)

_FIX_TYPES = frozenset({"fix", "perf", "revert"})


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    type: str
    scope: str | None
    description: str
    breaking: bool
    breaking_note: str | None
    commit: Commit

    @property
    def significance(self) -> Significance:
        if self.breaking:
            return Significance.BREAKING
        if self.type == "feat":
            return Significance.FEATURE
        if self.type in _FIX_TYPES:
            return Significance.FIX
        return Significance.NONE


def parse_commit(commit: Commit) -> ConventionalCommit | None:
    """Parse a commit; None when the header is not conventional."""
    header, _, body = commit.message.partition("\n")
    m = _HEADER_RE.match(header.strip())
    if m is None:
        return None

    footer = _BREAKING_FOOTER_RE.search(body)
    note = footer.group("note").strip() if footer else None
    return ConventionalCommit(
        type=m.group("type").lower(),
        scope=m.group("scope") or None,
        description=m.group("desc").strip(),
        breaking=bool(m.group("bang")) or footer is not None,
        breaking_note=note or None,
        commit=commit,
    )


def classify(commit: Commit) -> Significance:
    parsed = parse_commit(commit)
    return parsed.significance if parsed is not None else Significance.NONE


def highest_significance(commits: Iterable[Commit]) -> Significance:
    return highest(classify(c) for c in commits)
