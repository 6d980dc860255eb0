"""Tests for monover.core.result module."""

import pytest

from monover.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_is_ok(self) -> None:
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42
        assert Ok(42).unwrap_or(0) == 42

    def test_map(self) -> None:
        """Ok.map() transforms the value."""
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(Ok("v1.0.0")) == "Ok('v1.0.0')"


class TestErr:
    """Tests for Err type."""

    def test_is_err(self) -> None:
        result = Err("boom")
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        """Err.map() leaves the error untouched."""
        result: Err[str] = Err("boom")
        assert result.map(lambda x: x) == Err("boom")


class TestHelpers:
    def test_type_guards(self) -> None:
        ok: Result[int, str] = Ok(1)
        err: Result[int, str] = Err("x")
        assert is_ok(ok) and not is_ok(err)
        assert is_err(err) and not is_err(ok)

    def test_pattern_matching(self) -> None:
        result: Result[int, str] = Err("nope")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "nope"
