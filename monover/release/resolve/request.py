"""Build a ReleaseRequest from monover.toml defaults and CLI overrides."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from monover.core.config import Config
from monover.core.result import Err, Ok, Result
from monover.release.contracts import ReleaseRequest
from monover.release.domain.post_targets import PostTarget
from monover.release.domain.semver import RELEASE_TYPES, is_release_type, is_valid_preid, parse_version
from monover.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class RequestOverrides:
    """CLI values; None means "use the configured default"."""

    release_as: str | None = None
    preid: str | None = None
    dry_run: bool = False
    push: bool | None = None
    remote: str | None = None
    base_branch: str | None = None
    no_verify: bool | None = None
    sync_versions: bool | None = None
    track_deps: bool | None = None
    skip_root_changelog: bool | None = None
    skip_project_changelog: bool | None = None
    tag_prefix: str | None = None


T = TypeVar("T")


def _pick(override: T | None, default: T) -> T:
    return default if override is None else override


def build_request(
    *, project: str, config: Config, overrides: RequestOverrides
) -> Result[ReleaseRequest, ReleaseError]:
    project_config = config.projects.get(project)
    if project_config is None:
        known = ", ".join(sorted(config.projects)) or "(none)"
        return Err(
            ReleaseError(
                kind="invalid_request",
                message=f"unknown project: {project}",
                hint=f"Known projects: {known}",
            )
        )

    release_as = overrides.release_as.strip() if overrides.release_as else None
    if release_as and not is_release_type(release_as) and parse_version(release_as) is None:
        return Err(
            ReleaseError(
                kind="invalid_request",
                message=f"invalid --release-as: {release_as}",
                hint=f"Use one of {', '.join(RELEASE_TYPES)} or a version like 1.2.3",
            )
        )

    defaults = config.release
    preid = _pick(overrides.preid, defaults.preid)
    if preid is not None and not is_valid_preid(preid):
        return Err(
            ReleaseError(
                kind="invalid_request",
                message=f"invalid --preid: {preid}",
                hint="Use letters, digits and hyphens, e.g. beta or rc",
            )
        )

    return Ok(
        ReleaseRequest(
            project=project,
            sync_versions=_pick(overrides.sync_versions, defaults.sync_versions),
            release_as=release_as or None,
            preid=preid,
            dry_run=overrides.dry_run,
            push=_pick(overrides.push, defaults.push),
            remote=_pick(overrides.remote, defaults.remote),
            base_branch=_pick(overrides.base_branch, defaults.base_branch),
            no_verify=_pick(overrides.no_verify, defaults.no_verify),
            track_deps=_pick(overrides.track_deps, defaults.track_deps),
            skip_root_changelog=_pick(overrides.skip_root_changelog, defaults.skip_root_changelog),
            skip_project_changelog=_pick(
                overrides.skip_project_changelog, defaults.skip_project_changelog
            ),
            tag_prefix=_pick(overrides.tag_prefix, defaults.tag_prefix),
            changelog_header=defaults.changelog_header,
            post_targets=tuple(
                PostTarget(target=p.target, options=dict(p.options))
                for p in project_config.post_targets
            ),
        )
    )
