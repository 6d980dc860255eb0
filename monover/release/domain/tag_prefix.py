from __future__ import annotations

WORKSPACE_TAG_PREFIX = "v"


def resolve_tag_prefix(*, override: str | None, project_name: str, sync_versions: bool) -> str:
    """Tag prefix for a release.

    An explicit override is used verbatim (the empty string included).
    Synced workspaces share one "v" prefix; otherwise tags are scoped by
    project name so independent projects never collide.
    """
    if override is not None:
        return override
    if sync_versions:
        return WORKSPACE_TAG_PREFIX
    return f"{project_name}-"


def format_tag(prefix: str, version: str) -> str:
    return f"{prefix}{version}"
