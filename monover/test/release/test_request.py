from __future__ import annotations

from pathlib import Path

from monover.core.config import Config, PostTargetConfig, ProjectConfig, ReleaseDefaults
from monover.core.result import Err, Ok
from monover.release.resolve.request import RequestOverrides, build_request


def _config(tmp_path: Path, **release: object) -> Config:
    return Config(
        root=tmp_path,
        release=ReleaseDefaults(**release),  # type: ignore[arg-type]
        projects={
            "core": ProjectConfig(
                name="core",
                root=tmp_path / "libs/core",
                post_targets=(PostTargetConfig(target="core:publish", options={"tag": "${tag}"}),),
            )
        },
    )


def test_defaults_come_from_config(tmp_path: Path) -> None:
    config = _config(tmp_path, push=True, remote="upstream", track_deps=True)
    result = build_request(project="core", config=config, overrides=RequestOverrides())
    assert isinstance(result, Ok)
    request = result.value
    assert request.push is True
    assert request.remote == "upstream"
    assert request.track_deps is True
    assert request.base_branch == "main"
    assert [p.target for p in request.post_targets] == ["core:publish"]


def test_overrides_win_over_config(tmp_path: Path) -> None:
    config = _config(tmp_path, push=True, sync_versions=True)
    overrides = RequestOverrides(push=False, sync_versions=False, tag_prefix="", dry_run=True)
    result = build_request(project="core", config=config, overrides=overrides)
    assert isinstance(result, Ok)
    assert result.value.push is False
    assert result.value.sync_versions is False
    assert result.value.tag_prefix == ""
    assert result.value.dry_run is True


def test_unknown_project(tmp_path: Path) -> None:
    result = build_request(project="web", config=_config(tmp_path), overrides=RequestOverrides())
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_request"
    assert result.error.hint == "Known projects: core"


def test_release_as_accepts_types_and_versions(tmp_path: Path) -> None:
    for value in ("minor", "prerelease", "2.0.0", "2.0.0-rc.1"):
        result = build_request(
            project="core", config=_config(tmp_path), overrides=RequestOverrides(release_as=value)
        )
        assert isinstance(result, Ok)
        assert result.value.release_as == value


def test_release_as_rejects_garbage(tmp_path: Path) -> None:
    result = build_request(
        project="core", config=_config(tmp_path), overrides=RequestOverrides(release_as="biggest")
    )
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_request"
    assert result.error.structured


def test_preid_is_validated(tmp_path: Path) -> None:
    result = build_request(
        project="core", config=_config(tmp_path), overrides=RequestOverrides(preid="be ta")
    )
    assert isinstance(result, Err)
    assert "preid" in result.error.message

    configured = build_request(
        project="core", config=_config(tmp_path, preid="rc"), overrides=RequestOverrides()
    )
    assert isinstance(configured, Ok)
    assert configured.value.preid == "rc"
