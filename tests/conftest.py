"""Shared fixtures for the jsonextra test suite."""

from __future__ import annotations

import pytest

from jsonextra import decode
from jsonextra.decode import Decoder
from jsonextra.extra import curry
from tests.people import Person


@pytest.fixture
def person_decoder() -> Decoder[Person]:
    """Decoder for ``{"name": str, "age": int}`` built with and_map."""
    return (
        decode.succeed(curry(Person, 2))
        .and_map(decode.field("name", decode.string))
        .and_map(decode.field("age", decode.integer))
    )


@pytest.fixture(autouse=True)
def _clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's JSONEXTRA_* variables out of the tests."""
    for name in ("JSONEXTRA_STRICT_DICT_LENGTHS", "JSONEXTRA_LOG_LEVEL", "JSONEXTRA_LOG_SERVICE"):
        monkeypatch.delenv(name, raising=False)
