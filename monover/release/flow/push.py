from __future__ import annotations

from monover.core.result import Err, Ok, Result
from monover.output.console import ConsoleProtocol
from monover.release.domain.ports import VersionControl
from monover.release.errors import ReleaseError


def push_release(
    *,
    vcs: VersionControl,
    remote: str,
    branch: str,
    no_verify: bool,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Push the release commit and its tag. Must run after the writer."""
    if not remote.strip() or not branch.strip():
        return Err(
            ReleaseError(
                kind="push_failed",
                message="missing remote or base branch for push",
                hint="Set --remote and --base-branch (or [release] remote/base_branch)",
            )
        )

    console.info(f"pushing to {remote}/{branch}")
    result = vcs.push(remote=remote, branch=branch, no_verify=no_verify)
    if isinstance(result, Err):
        return result
    console.success(f"pushed to {remote}/{branch}")
    return Ok(None)
