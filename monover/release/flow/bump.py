from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.output.console import ConsoleProtocol, Style
from monover.release.domain.bump import automatic_version, latest_version, manual_version
from monover.release.domain.model import NO_CHANGE, BumpDecision, NextVersion, Significance, highest
from monover.release.domain.ports import CommitClassifier, HistoryReader
from monover.release.domain.semver import ZERO
from monover.release.errors import ReleaseError


def compute_bump(
    *,
    project_root: Path,
    extra_roots: Sequence[Path],
    tag_prefix: str,
    release_as: str | None,
    preid: str | None,
    history: HistoryReader,
    classifier: CommitClassifier,
    console: ConsoleProtocol,
) -> Result[BumpDecision, ReleaseError]:
    """Decide whether to release and which version.

    With `release_as`, commit history is not inspected at all. Otherwise
    the highest significance across the project root and every extra
    (dependency) root drives the bump, so a dependency-only change can
    release the project.
    """
    tags = history.tags(prefix=tag_prefix)
    if isinstance(tags, Err):
        return tags

    latest = latest_version(tags.value, prefix=tag_prefix)
    if latest is None:
        console.info(f"no previous {tag_prefix}* version tag found, starting from {ZERO}")
        current, previous_tag = ZERO, None
    else:
        current, previous_tag = latest

    if release_as is not None:
        manual = manual_version(current=current, release_as=release_as, preid=preid)
        if isinstance(manual, Err):
            return manual
        return Ok(NextVersion(value=str(manual.value), previous_tag=previous_tag))

    found: list[Significance] = []
    for root in (project_root, *extra_roots):
        significance = classifier.highest_significance(root=root, since_tag=previous_tag)
        if isinstance(significance, Err):
            return significance
        console.print(f"{root}: {significance}", Style.DIM)
        found.append(significance.value)

    overall = highest(found)
    nxt = automatic_version(current=current, significance=overall, preid=preid)
    if nxt is None:
        return Ok(NO_CHANGE)
    return Ok(NextVersion(value=str(nxt), previous_tag=previous_tag))
