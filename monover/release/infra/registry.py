from __future__ import annotations

from pathlib import Path

from monover.core.config import Config
from monover.release.domain.model import Project


class ConfigRegistry:
    """ProjectRegistry backed by the [projects] tables of monover.toml."""

    def __init__(self, config: Config) -> None:
        self._root = config.root
        self._projects = {
            name: Project(name=name, root=p.root, dependencies=p.dependencies)
            for name, p in config.projects.items()
        }

    @property
    def workspace_root(self) -> Path:
        return self._root

    def project_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._projects))

    def project_root(self, name: str) -> Path | None:
        project = self._projects.get(name)
        return project.root if project is not None else None

    def dependencies(self, name: str) -> tuple[str, ...] | None:
        project = self._projects.get(name)
        return project.dependencies if project is not None else None
