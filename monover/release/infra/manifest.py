"""Project manifest version updates.

Supported manifests, checked in this order in a project root:
- pyproject.toml: `version` in the [project] table
- package.json: top-level "version"
- Cargo.toml: `version` in the [package] table

TOML files are edited textually so comments and formatting survive.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from monover.core.result import Err, Ok, Result
from monover.core.structured import as_str_dict
from monover.release.errors import ReleaseError

MANIFEST_NAMES: tuple[str, ...] = ("pyproject.toml", "package.json", "Cargo.toml")

_TOML_SECTIONS = {"pyproject.toml": "project", "Cargo.toml": "package"}
_VERSION_LINE_RE = re.compile(
    r"""(?m)^version\s*=\s*(?P<quote>["'])(?P<value>[^"'\n]*)(?P=quote)[ \t]*(?:#[^\n]*)?$"""
)
_SECTION_HEADER_RE = re.compile(r"(?m)^\s*\[")


def find_manifest(project_root: Path) -> Path | None:
    for name in MANIFEST_NAMES:
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def _invalid(path: Path, message: str) -> ReleaseError:
    return ReleaseError(kind="write_failed", message=f"{message} in {path.name}", hint=str(path))


def _toml_section_bounds(text: str, section: str) -> tuple[int, int] | None:
    m = re.search(rf"(?m)^\[{re.escape(section)}\][ \t]*$", text)
    if m is None:
        return None
    start = m.end()
    nxt = _SECTION_HEADER_RE.search(text, start)
    return (start, nxt.start() if nxt else len(text))


def _render_toml(path: Path, text: str, section: str, version: str) -> Result[str, ReleaseError]:
    bounds = _toml_section_bounds(text, section)
    if bounds is None:
        return Err(_invalid(path, f"missing [{section}] section"))
    start, end = bounds
    m = _VERSION_LINE_RE.search(text, start, end)
    if m is None:
        return Err(_invalid(path, f"missing static version in [{section}]"))
    return Ok(text[: m.start("value")] + version + text[m.end("value") :])


def _render_json(path: Path, text: str, version: str) -> Result[str, ReleaseError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(_invalid(path, f"invalid JSON ({e})"))
    data = as_str_dict(obj)
    if data is None:
        return Err(_invalid(path, "invalid JSON root"))
    data["version"] = version
    return Ok(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def render_manifest(path: Path, text: str, version: str) -> Result[str, ReleaseError]:
    """Return the manifest text with its version set to `version`."""
    section = _TOML_SECTIONS.get(path.name)
    if section is not None:
        return _render_toml(path, text, section, version)
    return _render_json(path, text, version)


def read_manifest(path: Path) -> Result[str, ReleaseError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Err(
            ReleaseError(
                kind="write_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )
