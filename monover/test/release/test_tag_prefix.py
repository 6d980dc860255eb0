from __future__ import annotations

from monover.release.domain.tag_prefix import format_tag, resolve_tag_prefix


def test_override_wins_verbatim() -> None:
    assert resolve_tag_prefix(override="release/", project_name="core", sync_versions=False) == (
        "release/"
    )
    assert resolve_tag_prefix(override="", project_name="core", sync_versions=True) == ""


def test_sync_mode_prefix_never_contains_project_name() -> None:
    prefix = resolve_tag_prefix(override=None, project_name="core", sync_versions=True)
    assert prefix == "v"
    assert "core" not in prefix


def test_project_prefix_contains_project_name() -> None:
    for name in ("core", "ui-kit", "api"):
        prefix = resolve_tag_prefix(override=None, project_name=name, sync_versions=False)
        assert name in prefix
        assert prefix == f"{name}-"


def test_resolution_is_pure() -> None:
    args = {"override": None, "project_name": "core", "sync_versions": False}
    assert resolve_tag_prefix(**args) == resolve_tag_prefix(**args)  # type: ignore[arg-type]


def test_format_tag() -> None:
    assert format_tag("core-", "1.2.0") == "core-1.2.0"
