"""Changelog section rendering.

Sections are inserted newest-first right below the configured header. An
existing file that does not start with the header keeps its content and
gets the header added on top.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from monover.release.domain.commits import ConventionalCommit, parse_commit
from monover.release.domain.model import Commit

_GROUPS: tuple[tuple[str, str], ...] = (
    ("feat", "Features"),
    ("fix", "Bug Fixes"),
    ("perf", "Performance Improvements"),
    ("revert", "Reverts"),
)


def _entry(c: ConventionalCommit) -> str:
    scope = f"**{c.scope}:** " if c.scope else ""
    return f"* {scope}{c.description} ({c.commit.short_sha})"


def render_section(*, version: str, day: date, commits: Sequence[Commit]) -> str:
    """Render the Markdown section for one release."""
    parsed = [p for p in (parse_commit(c) for c in commits) if p is not None]

    lines: list[str] = [f"## {version} ({day.isoformat()})", ""]

    breaking = [p for p in parsed if p.breaking]
    if breaking:
        lines.append("### ⚠ BREAKING CHANGES")
        lines.append("")
        for p in breaking:
            note = p.breaking_note or p.description
            scope = f"**{p.scope}:** " if p.scope else ""
            lines.append(f"* {scope}{note}")
        lines.append("")

    for commit_type, title in _GROUPS:
        entries = [_entry(p) for p in parsed if p.type == commit_type]
        if not entries:
            continue
        lines.append(f"### {title}")
        lines.append("")
        lines.extend(entries)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def prepend_section(existing: str | None, *, header: str, section: str) -> str:
    """Return changelog text with `section` placed under `header`."""
    head = header.rstrip() + "\n"
    body = existing or ""
    if body.startswith(head):
        body = body[len(head) :]
    body = body.lstrip("\n")

    out = f"{head}\n{section}"
    if body:
        out += f"\n{body}"
    return out.rstrip() + "\n"
