"""Tests for the Ok/Err result type."""

from __future__ import annotations

import pytest

from jsonextra.result import Err, Ok, UnwrapError


def test_ok_and_err_compare_structurally() -> None:
    """Results with equal payloads should be equal and hashable."""
    assert Ok(5) == Ok(5)
    assert Err("bad") == Err("bad")
    assert Ok("x") != Err("x")
    assert len({Ok(1), Ok(1), Err(1)}) == 2


def test_map_only_touches_ok() -> None:
    assert Ok(2).map(lambda n: n * 10) == Ok(20)
    assert Err("e").map(lambda n: n * 10) == Err("e")


def test_map_error_only_touches_err() -> None:
    assert Err("e").map_error(str.upper) == Err("E")
    assert Ok(1).map_error(str.upper) == Ok(1)


def test_unwrap() -> None:
    """unwrap returns the Ok value and raises UnwrapError for Err."""
    assert Ok("v").unwrap() == "v"
    with pytest.raises(UnwrapError, match="boom"):
        Err("boom").unwrap()


def test_unwrap_or() -> None:
    assert Ok(1).unwrap_or(9) == 1
    assert Err("e").unwrap_or(9) == 9


def test_results_support_match() -> None:
    """Ok and Err should destructure in match statements."""

    def describe(result: Ok[int] | Err[str]) -> str:
        match result:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"
        return "unreachable"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("no")) == "err no"
    assert Ok(3).is_ok()
    assert not Err("no").is_ok()
