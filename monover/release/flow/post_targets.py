from __future__ import annotations

from collections.abc import Sequence

from monover.core.result import Err, Ok, Result
from monover.output.console import ConsoleProtocol
from monover.release.domain.ports import TaskExecutor
from monover.release.domain.post_targets import PostTarget, PostTargetContext, resolve_post_target
from monover.release.errors import ReleaseError


def run_post_targets(
    *,
    tasks: Sequence[PostTarget],
    context: PostTargetContext,
    executor: TaskExecutor,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Run post-release targets in declared order, stopping at the first failure."""
    for task in tasks:
        resolved = resolve_post_target(task, context)
        if isinstance(resolved, Err):
            return resolved

        console.info(f"running post-target {resolved.value.ref}")
        result = executor.execute(resolved.value)
        if isinstance(result, Err):
            return result
        console.success(f"post-target {resolved.value.ref}")
    return Ok(None)
