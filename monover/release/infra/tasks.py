from __future__ import annotations

from collections.abc import Mapping

from monover.core.config import ProjectConfig
from monover.core.result import Err, Ok, Result
from monover.platform.process import run
from monover.release.domain.post_targets import ResolvedPostTarget
from monover.release.errors import ReleaseError


class CommandTaskExecutor:
    """Run post-targets as the commands declared under [projects.*.targets].

    The command runs in the target project's root, with each resolved
    option appended as `--name=value` (and `--configuration=...` when the
    reference names one).
    """

    def __init__(self, projects: Mapping[str, ProjectConfig], *, timeout: float | None = None) -> None:
        self._projects = projects
        self._timeout = timeout

    def execute(self, task: ResolvedPostTarget) -> Result[None, ReleaseError]:
        ref = task.ref
        project = self._projects.get(ref.project)
        if project is None:
            return Err(
                ReleaseError(
                    kind="post_target_config",
                    message=f"post-target {ref} refers to unknown project '{ref.project}'",
                )
            )
        target = project.targets.get(ref.target)
        if target is None:
            known = ", ".join(sorted(project.targets)) or "(none)"
            return Err(
                ReleaseError(
                    kind="post_target_config",
                    message=f"project '{ref.project}' has no target '{ref.target}'",
                    hint=f"Defined targets: {known}",
                )
            )

        cmd = list(target.command)
        if ref.configuration:
            cmd.append(f"--configuration={ref.configuration}")
        cmd.extend(f"--{name}={value}" for name, value in task.options.items())

        result = run(cmd, cwd=project.root, timeout=self._timeout)
        if isinstance(result, Err):
            e = result.error
            return Err(
                ReleaseError(
                    kind="post_target_failed",
                    message=f"post-target {ref} failed (exit {e.returncode})",
                    detail=e.output or None,
                )
            )
        return Ok(None)
