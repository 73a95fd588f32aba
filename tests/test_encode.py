"""Tests for the primitive encoders."""

from __future__ import annotations

from jsonextra import encode


def test_scalar_encoders() -> None:
    assert encode.string("a") == "a"
    assert encode.integer(3) == 3
    assert encode.floating(2) == 2.0
    assert encode.boolean(True) is True
    assert encode.null() is None


def test_list_and_dict_encoders() -> None:
    assert encode.list_(encode.integer, (1, 2)) == [1, 2]
    assert encode.dict_(str, encode.boolean, {1: True, 2: False}) == {"1": True, "2": False}
    assert encode.object_([("a", 1), ("b", [])]) == {"a": 1, "b": []}


def test_encode_is_compact_by_default() -> None:
    """indent=0 should produce JSON text without any whitespace."""
    assert encode.encode({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'


def test_encode_with_indent() -> None:
    assert encode.encode({"a": 1}, indent=2) == '{\n  "a": 1\n}'


def test_scalar_encoders_do_not_coerce() -> None:
    """Encoders hand values through untouched instead of converting them."""
    assert encode.string(None) is None  # type: ignore[arg-type]
    assert encode.integer(True) is True
    assert encode.floating(2) == 2
    assert isinstance(encode.floating(2), int)
