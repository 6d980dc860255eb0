"""Workspace detection.

A workspace is the root of a monorepo managed by monover. It is identified
by the presence of a `monover.toml` file, which also holds the project
registry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .config import CONFIG_FILENAME
from .result import Err, Ok, Result

__all__ = [
    "WORKSPACE_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "WorkspaceInfo",
    "detect_workspace",
    "detect_workspace_info",
    "find_workspace_upward",
    "is_workspace_root",
]

WORKSPACE_ENV_VAR = "MONOVER_WORKSPACE"


@dataclass(frozen=True)
class WorkspaceError:
    """Error when workspace cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A detected monorepo workspace."""

    root: Path

    @property
    def config_path(self) -> Path:
        """Path to monover.toml."""
        return self.root / CONFIG_FILENAME

    def __str__(self) -> str:
        return str(self.root)


WorkspaceSource = Literal["env", "cwd"]


@dataclass(frozen=True, slots=True)
class WorkspaceInfo:
    workspace: Workspace
    source: WorkspaceSource


def is_workspace_root(path: Path) -> bool:
    return (path / CONFIG_FILENAME).is_file()


def find_workspace_upward(start: Path) -> Path | None:
    """Search upward from start directory for a workspace root."""
    for parent in (start, *start.parents):
        if is_workspace_root(parent):
            return parent
    return None


def detect_workspace(
    *,
    start_dir: Path | None = None,
    env_var: str = WORKSPACE_ENV_VAR,
) -> Result[Workspace, WorkspaceError]:
    info = detect_workspace_info(start_dir=start_dir, env_var=env_var)
    if isinstance(info, Err):
        return info
    return Ok(info.value.workspace)


def detect_workspace_info(
    *,
    start_dir: Path | None = None,
    env_var: str = WORKSPACE_ENV_VAR,
) -> Result[WorkspaceInfo, WorkspaceError]:
    """Detect the workspace root directory, with source metadata.

    Detection order:
    1. $MONOVER_WORKSPACE (if set it must be valid)
    2. Search upward from start_dir (or cwd) for monover.toml
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir() and is_workspace_root(env_path):
            return Ok(WorkspaceInfo(workspace=Workspace(root=env_path), source="env"))
        return Err(
            WorkspaceError(
                message=f"${env_var} is set to '{env_value}' but it is not a valid workspace",
                searched_from=env_path if env_path.is_dir() else None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_workspace_upward(search_start)
    if found:
        return Ok(WorkspaceInfo(workspace=Workspace(root=found), source="cwd"))

    return Err(
        WorkspaceError(
            message=f"Could not find workspace ({CONFIG_FILENAME} not found)",
            searched_from=search_start,
        )
    )
