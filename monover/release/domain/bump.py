"""Pure version decision rules.

The flow layer gathers tags and commit significance; the functions here
turn those facts into the next version without touching git.
"""

from __future__ import annotations

from collections.abc import Iterable

from monover.core.result import Err, Ok, Result
from monover.release.domain.model import Significance
from monover.release.domain.semver import (
    RELEASE_TYPES,
    SemVer,
    is_release_type,
    parse_tag,
    parse_version,
)
from monover.release.errors import ReleaseError


def latest_version(tags: Iterable[str], *, prefix: str) -> tuple[SemVer, str] | None:
    """Highest version among tags of the form `<prefix><semver>`, with its tag."""
    best: tuple[SemVer, str] | None = None
    for tag in tags:
        version = parse_tag(tag, prefix=prefix)
        if version is None:
            continue
        if best is None or version > best[0]:
            best = (version, tag)
    return best


def manual_version(
    *, current: SemVer, release_as: str, preid: str | None
) -> Result[SemVer, ReleaseError]:
    """Apply an explicit release type, or take an explicit version as-is."""
    explicit = parse_version(release_as)
    if explicit is not None:
        return Ok(explicit)
    if is_release_type(release_as):
        return Ok(current.bump(release_as, preid))  # pyright: ignore[reportArgumentType]
    return Err(
        ReleaseError(
            kind="invalid_request",
            message=f"invalid release type or version: {release_as}",
            hint=f"Use one of {', '.join(RELEASE_TYPES)} or a version like 1.2.3",
        )
    )


def automatic_version(
    *, current: SemVer, significance: Significance, preid: str | None
) -> SemVer | None:
    """Next version implied by the highest change significance.

    Returns None when nothing qualifies for a release. A preid only changes
    the suffix: it never raises or lowers the bump level.
    """
    level = significance.bump_level
    if level is None:
        return None
    if preid is None:
        return current.bump(level)

    if current.preid == preid and _base_covers(current, level):
        return current.bump("prerelease", preid)
    return current.bump(f"pre{level}", preid)  # pyright: ignore[reportArgumentType]


def _base_covers(current: SemVer, level: str) -> bool:
    # 1.1.0-beta.2 already carries a minor bump over 1.0.x; 1.1.1-beta.0 does not.
    match level:
        case "major":
            return current.minor == 0 and current.patch == 0
        case "minor":
            return current.patch == 0
        case _:
            return True
