"""Typed loading of monover.toml.

The file lives at the workspace root and holds release defaults plus the
project registry (roots, dependencies, runnable targets, post-targets).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_list,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "PostTargetConfig",
    "ProjectConfig",
    "ReleaseDefaults",
    "TargetConfig",
    "load_config",
]

CONFIG_FILENAME = "monover.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_BASE_BRANCH = "main"
DEFAULT_CHANGELOG_HEADER = (
    "# Changelog\n\n"
    "All notable changes to this project will be documented in this file.\n"
)

_RELEASE_BOOL_KEYS = (
    "sync_versions",
    "track_deps",
    "push",
    "no_verify",
    "skip_root_changelog",
    "skip_project_changelog",
)
_RELEASE_STR_KEYS = ("remote", "base_branch", "tag_prefix", "preid", "changelog_header")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when monover.toml cannot be loaded or is malformed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseDefaults:
    """[release] table: defaults that CLI flags may override."""

    sync_versions: bool = False
    track_deps: bool = False
    push: bool = False
    remote: str = DEFAULT_REMOTE
    base_branch: str = DEFAULT_BASE_BRANCH
    no_verify: bool = False
    skip_root_changelog: bool = False
    skip_project_changelog: bool = False
    tag_prefix: str | None = None
    preid: str | None = None
    changelog_header: str = DEFAULT_CHANGELOG_HEADER


@dataclass(frozen=True, slots=True)
class TargetConfig:
    """A runnable target: argv executed in the owning project's root."""

    command: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PostTargetConfig:
    """A post-release task as written in the config.

    Options are kept raw; they are validated when the task is resolved
    at release time so that a bad option fails the run, not the load.
    """

    target: str
    options: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    name: str
    root: Path
    dependencies: tuple[str, ...] = ()
    targets: Mapping[str, TargetConfig] = field(default_factory=dict)
    post_targets: tuple[PostTargetConfig, ...] = ()


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    root: Path
    release: ReleaseDefaults = field(default_factory=ReleaseDefaults)
    projects: Mapping[str, ProjectConfig] = field(default_factory=dict)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _parse_release(table: StrDict, *, path: Path) -> Result[ReleaseDefaults, ConfigError]:
    known = set(_RELEASE_BOOL_KEYS) | set(_RELEASE_STR_KEYS)
    unknown = sorted(set(table) - known)
    if unknown:
        return Err(ConfigError(f"Unknown keys in [release]: {', '.join(unknown)}", path=path))

    for key in _RELEASE_BOOL_KEYS:
        if key in table and get_bool(table, key) is None:
            return Err(ConfigError(f"[release].{key} must be a boolean", path=path))
    for key in _RELEASE_STR_KEYS:
        if key in table and not isinstance(table[key], str):
            return Err(ConfigError(f"[release].{key} must be a string", path=path))

    header = table.get("changelog_header")
    return Ok(
        ReleaseDefaults(
            sync_versions=get_bool(table, "sync_versions") or False,
            track_deps=get_bool(table, "track_deps") or False,
            push=get_bool(table, "push") or False,
            remote=get_str(table, "remote") or DEFAULT_REMOTE,
            base_branch=get_str(table, "base_branch") or DEFAULT_BASE_BRANCH,
            no_verify=get_bool(table, "no_verify") or False,
            skip_root_changelog=get_bool(table, "skip_root_changelog") or False,
            skip_project_changelog=get_bool(table, "skip_project_changelog") or False,
            # A tag prefix may legitimately be the empty string.
            tag_prefix=table["tag_prefix"] if isinstance(table.get("tag_prefix"), str) else None,
            preid=get_str(table, "preid"),
            changelog_header=header if isinstance(header, str) else DEFAULT_CHANGELOG_HEADER,
        )
    )


def _parse_targets(
    name: str, table: StrDict, *, path: Path
) -> Result[dict[str, TargetConfig], ConfigError]:
    targets: dict[str, TargetConfig] = {}
    raw = get_table(table, "targets") or {}
    for target_name, value in raw.items():
        target = as_str_dict(value)
        command = get_str_list(target, "command") if target is not None else None
        if not command:
            return Err(
                ConfigError(
                    f"projects.{name}.targets.{target_name}.command must be a non-empty "
                    "list of strings",
                    path=path,
                )
            )
        targets[target_name] = TargetConfig(command=tuple(command))
    return Ok(targets)


def _parse_post_targets(
    name: str, table: StrDict, *, path: Path
) -> Result[tuple[PostTargetConfig, ...], ConfigError]:
    if "post_targets" not in table:
        return Ok(())
    items = get_list(table, "post_targets")
    if items is None:
        return Err(ConfigError(f"projects.{name}.post_targets must be an array", path=path))

    out: list[PostTargetConfig] = []
    for idx, item in enumerate(items):
        entry = as_str_dict(item)
        target = get_str(entry, "target") if entry is not None else None
        if entry is None or target is None:
            return Err(
                ConfigError(
                    f"projects.{name}.post_targets[{idx}] needs a 'target' string",
                    path=path,
                )
            )
        options = get_table(entry, "options")
        if "options" in entry and options is None:
            return Err(
                ConfigError(
                    f"projects.{name}.post_targets[{idx}].options must be a table",
                    path=path,
                )
            )
        out.append(PostTargetConfig(target=target, options=options or {}))
    return Ok(tuple(out))


def _parse_project(
    name: str, value: object, *, root: Path, path: Path
) -> Result[ProjectConfig, ConfigError]:
    table = as_str_dict(value)
    if table is None:
        return Err(ConfigError(f"[projects.{name}] must be a table", path=path))

    rel_root = get_str(table, "root")
    if rel_root is None:
        return Err(ConfigError(f"projects.{name}.root is required", path=path))

    deps: list[str] = []
    if "dependencies" in table:
        parsed = get_str_list(table, "dependencies")
        if parsed is None:
            return Err(
                ConfigError(f"projects.{name}.dependencies must be a list of strings", path=path)
            )
        deps = parsed

    targets = _parse_targets(name, table, path=path)
    if isinstance(targets, Err):
        return targets
    post_targets = _parse_post_targets(name, table, path=path)
    if isinstance(post_targets, Err):
        return post_targets

    return Ok(
        ProjectConfig(
            name=name,
            root=(root / rel_root).resolve(),
            # Declared order is kept but duplicates are dropped.
            dependencies=tuple(dict.fromkeys(deps)),
            targets=targets.value,
            post_targets=post_targets.value,
        )
    )


def config_from_dict(data: Mapping[str, object], *, root: Path, path: Path) -> Result[Config, ConfigError]:
    """Build a Config from a parsed TOML mapping."""
    release_table = get_table(data, "release")
    if "release" in data and release_table is None:
        return Err(ConfigError("[release] must be a table", path=path))
    release = _parse_release(release_table or {}, path=path)
    if isinstance(release, Err):
        return release

    projects: dict[str, ProjectConfig] = {}
    projects_table = get_table(data, "projects")
    if "projects" in data and projects_table is None:
        return Err(ConfigError("[projects] must be a table", path=path))
    for name, value in (projects_table or {}).items():
        project = _parse_project(name, value, root=root, path=path)
        if isinstance(project, Err):
            return project
        projects[name] = project.value

    return Ok(Config(root=root, release=release.value, projects=projects))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate monover.toml.

    Args:
        path: Path to monover.toml. Project roots are resolved against
            its parent directory.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return config_from_dict(result.value, root=path.parent.resolve(), path=path)
