"""Tests for monover.output.console module."""

from __future__ import annotations

import pytest

from monover.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "HEADER"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    def test_levels_are_prefixed(self) -> None:
        console = MockConsole()
        console.success("released core-1.0.1")
        console.error("push rejected")
        console.warning("no manifest found")
        console.info("next version: 1.0.1")
        assert console.messages == [
            "OK released core-1.0.1",
            "error: push rejected",
            "warning: no manifest found",
            "info: next version: 1.0.1",
        ]

    def test_detail_is_dim_and_trimmed(self) -> None:
        console = MockConsole()
        console.detail("Traceback\n  line 1\n\n")
        assert console.outputs[0].message == "Traceback\n  line 1"
        assert console.outputs[0].style == Style.DIM

    def test_helpers(self) -> None:
        console = MockConsole()
        console.print("[dry-run] tag: v1.0.0", Style.DIM)
        console.header("core: version")
        assert not console.has_error()
        assert console.count(Style.DIM) == 1
        assert len(console.find("tag: v1.0.0")) == 1
        assert console.text == "[dry-run] tag: v1.0.0\ncore: version"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.info("ok")


class TestRichConsole:
    def test_writes_plain_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("released v1.2.0")
        console.detail("[rejected] main -> main")
        out = capsys.readouterr().out
        assert "OK released v1.2.0" in out
        assert "[rejected] main -> main" in out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).error("boom")
        captured = capsys.readouterr()
        assert "error: boom" in captured.err
        assert captured.out == ""
