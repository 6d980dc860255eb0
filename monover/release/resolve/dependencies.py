from __future__ import annotations

from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.release.domain.ports import ProjectRegistry
from monover.release.errors import ReleaseError


def resolve_dependency_roots(
    project: str, *, registry: ProjectRegistry
) -> Result[tuple[Path, ...], ReleaseError]:
    """Roots of the projects `project` directly depends on.

    Only declared (first-level) dependencies are considered. A dependency
    missing from the registry fails the whole lookup so that no release
    is computed from a stale graph.
    """
    names = registry.dependencies(project)
    if names is None:
        return Err(
            ReleaseError(
                kind="dependency_resolution",
                message=f"unknown project: {project}",
            )
        )

    roots: list[Path] = []
    for name in names:
        root = registry.project_root(name)
        if root is None:
            return Err(
                ReleaseError(
                    kind="dependency_resolution",
                    message=f"{project} depends on '{name}', which is not a workspace project",
                    hint="Fix the dependencies list in monover.toml",
                )
            )
        roots.append(root)
    return Ok(tuple(roots))
