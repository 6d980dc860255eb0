from __future__ import annotations

from pathlib import Path

from monover.platform.files import atomic_write_text, read_text_if_exists


def test_read_missing_file_returns_none(tmp_path: Path) -> None:
    assert read_text_if_exists(tmp_path / "CHANGELOG.md") is None


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "libs" / "core" / "CHANGELOG.md"
    atomic_write_text(target, "# Changelog\n")
    assert read_text_if_exists(target) == "# Changelog\n"


def test_atomic_write_replaces_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "pyproject.toml"
    target.write_text("old\n", encoding="utf-8")
    atomic_write_text(target, "new\n")
    assert target.read_text(encoding="utf-8") == "new\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["pyproject.toml"]


def test_atomic_write_keeps_newlines(tmp_path: Path) -> None:
    target = tmp_path / "notes.md"
    atomic_write_text(target, "a\r\nb\n")
    assert target.read_bytes() == b"a\r\nb\n"
