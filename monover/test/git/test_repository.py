"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from monover.core.result import Err, Ok
from monover.git.repository import GitCommit, Repository


def make_completed_process(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def _git_args(mock_run: MagicMock) -> list[str]:
    cmd = mock_run.call_args.args[0]
    assert cmd[0] == "git" and cmd[1] == "-C"
    return cmd[3:]


class TestGitCommit:
    def test_short_sha(self) -> None:
        assert GitCommit(sha="0123456789abcdef", message="feat: x").short_sha == "0123456"


class TestRepository:
    @patch("subprocess.run")
    def test_tags_with_prefix(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="core-1.0.0\ncore-1.1.0\n\n")

        result = Repository(tmp_path).tags(prefix="core-")

        assert result == Ok(["core-1.0.0", "core-1.1.0"])
        assert _git_args(mock_run) == ["tag", "--list", "core-*"]

    @patch("subprocess.run")
    def test_log_parses_multiline_messages(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout=(
                "aaa111\x1ffeat: one\n\nBREAKING CHANGE: gone\n\x1e\n"
                "bbb222\x1ffix: two\n\x1e\n"
            )
        )

        result = Repository(tmp_path).log(since="core-1.0.0", path=tmp_path / "libs/core")

        assert isinstance(result, Ok)
        assert result.value == [
            GitCommit(sha="aaa111", message="feat: one\n\nBREAKING CHANGE: gone"),
            GitCommit(sha="bbb222", message="fix: two"),
        ]
        args = _git_args(mock_run)
        assert "core-1.0.0..HEAD" in args
        assert args[-2:] == ["--", str(tmp_path / "libs/core")]

    @patch("subprocess.run")
    def test_log_without_since_reads_full_history(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="")

        assert Repository(tmp_path).log(since=None) == Ok([])
        assert not any(".." in a for a in _git_args(mock_run))

    @patch("subprocess.run")
    def test_commit_no_verify(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert Repository(tmp_path).commit(message="chore: release", no_verify=True) == Ok(None)
        assert _git_args(mock_run) == ["commit", "-m", "chore: release", "--no-verify"]

    @patch("subprocess.run")
    def test_commit_is_limited_to_paths(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        manifest = tmp_path / "libs/core/pyproject.toml"

        Repository(tmp_path).commit(message="chore: release", paths=[manifest])

        assert _git_args(mock_run) == ["commit", "-m", "chore: release", "--", str(manifest)]

    @patch("subprocess.run")
    def test_tag_is_annotated(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        Repository(tmp_path).tag(name="core-1.1.0", message="chore(core): release version 1.1.0")

        assert _git_args(mock_run) == [
            "tag",
            "-a",
            "core-1.1.0",
            "-m",
            "chore(core): release version 1.1.0",
        ]

    @patch("subprocess.run")
    def test_push_follows_tags_atomically(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert Repository(tmp_path).push(remote="origin", branch="main") == Ok(None)
        assert _git_args(mock_run) == ["push", "--follow-tags", "--atomic", "origin", "main"]
        assert mock_run.call_args.kwargs["timeout"] > 30

    @patch("subprocess.run")
    def test_push_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=1, stderr="! [rejected] main -> main (fetch first)\n"
        )

        result = Repository(tmp_path).push(remote="origin", branch="main", no_verify=True)

        assert isinstance(result, Err)
        assert result.error.command == "push"
        assert result.error.returncode == 1
        assert "rejected" in result.error.message
        assert "--no-verify" in _git_args(mock_run)

    @patch("subprocess.run")
    def test_add_nothing_is_noop(self, mock_run: MagicMock, tmp_path: Path) -> None:
        assert Repository(tmp_path).add([]) == Ok(None)
        mock_run.assert_not_called()
