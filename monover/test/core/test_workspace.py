"""Tests for monover.core.workspace module."""

from __future__ import annotations

from pathlib import Path

import pytest

from monover.core.result import Err, Ok
from monover.core.workspace import (
    WORKSPACE_ENV_VAR,
    Workspace,
    detect_workspace,
    detect_workspace_info,
    find_workspace_upward,
    is_workspace_root,
)


def _make_workspace(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "monover.toml").write_text("", encoding="utf-8")
    return path


class TestWorkspace:
    def test_paths(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path)
        assert ws.config_path == tmp_path / "monover.toml"
        assert str(ws) == str(tmp_path)

    def test_is_workspace_root(self, tmp_path: Path) -> None:
        assert not is_workspace_root(tmp_path)
        _make_workspace(tmp_path)
        assert is_workspace_root(tmp_path)


class TestDetection:
    @pytest.fixture(autouse=True)
    def _no_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(WORKSPACE_ENV_VAR, raising=False)

    def test_finds_root_from_nested_dir(self, tmp_path: Path) -> None:
        root = _make_workspace(tmp_path / "ws")
        nested = root / "libs" / "core" / "src"
        nested.mkdir(parents=True)

        assert find_workspace_upward(nested) == root
        result = detect_workspace_info(start_dir=nested)
        assert isinstance(result, Ok)
        assert result.value.workspace.root == root.resolve()
        assert result.value.source == "cwd"

    def test_not_found(self, tmp_path: Path) -> None:
        result = detect_workspace(start_dir=tmp_path)
        assert isinstance(result, Err)
        assert "monover.toml" in result.error.message

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_root = _make_workspace(tmp_path / "env")
        cwd_root = _make_workspace(tmp_path / "cwd")
        monkeypatch.setenv(WORKSPACE_ENV_VAR, str(env_root))

        result = detect_workspace_info(start_dir=cwd_root)
        assert isinstance(result, Ok)
        assert result.value.workspace.root == env_root.resolve()
        assert result.value.source == "env"

    def test_invalid_env_var_is_an_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cwd_root = _make_workspace(tmp_path / "cwd")
        monkeypatch.setenv(WORKSPACE_ENV_VAR, str(tmp_path / "missing"))

        result = detect_workspace(start_dir=cwd_root)
        assert isinstance(result, Err)
        assert WORKSPACE_ENV_VAR in result.error.message
