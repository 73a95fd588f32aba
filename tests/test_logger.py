"""Tests for async JSON logging setup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from jsonextra import decode
from jsonextra.extra import decode_dict
from jsonextra.logger import setup_logging, stop_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    stop_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _entries(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.strip()]


def test_library_warnings_render_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Stdlib records from the library should come out as JSON with the service tag."""
    setup_logging(service="test-codec", level="info")
    decoder = decode_dict(decode.integer, decode.string, strict=False)
    decode.decode_value(decoder, {"keys": [1, 2], "values": ["a"]})
    stop_logging()

    entries = _entries(capsys.readouterr().out)
    mismatch = [e for e in entries if e["event"].startswith("json.dict_length_mismatch")]
    assert len(mismatch) == 1
    assert mismatch[0]["service"] == "test-codec"
    assert mismatch[0]["level"] == "warning"
    assert mismatch[0]["logger"] == "jsonextra.extra"


def test_structlog_events_render_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(service="test-codec", level="info")
    structlog.get_logger("app").info("decoded payload", items=3)
    stop_logging()

    entries = _entries(capsys.readouterr().out)
    assert any(e["event"] == "decoded payload" and e["items"] == 3 for e in entries)


def test_level_filters_debug(capsys: pytest.CaptureFixture[str]) -> None:
    """Debug events from with_default are dropped at info level."""
    setup_logging(service="test-codec", level="info")
    decode.decode_value(decode.integer.with_default(0), "x")
    stop_logging()
    assert capsys.readouterr().out == ""


def test_settings_supply_defaults(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("JSONEXTRA_LOG_SERVICE", "from-env")
    monkeypatch.setenv("JSONEXTRA_LOG_LEVEL", "debug")
    setup_logging()
    decode.decode_value(decode.integer.with_default(0), "x")
    stop_logging()

    entries = _entries(capsys.readouterr().out)
    assert any(e["event"].startswith("json.default_used") and e["service"] == "from-env" for e in entries)


def test_stop_logging_is_idempotent() -> None:
    setup_logging(service="test-codec", level="info")
    stop_logging()
    stop_logging()


def test_stop_logging_detaches_queue_handler() -> None:
    setup_logging(service="test-codec", level="info")
    root = logging.getLogger()
    queued = [h for h in root.handlers if type(h).__name__ == "_PassthroughQueueHandler"]
    assert len(queued) == 1
    stop_logging()
    assert queued[0] not in root.handlers


def test_bound_service_is_kept(capsys: pytest.CaptureFixture[str]) -> None:
    """A service bound by the caller wins over the configured default."""
    setup_logging(service="test-codec", level="info")
    structlog.get_logger("app").bind(service="billing").info("decoded payload")
    stop_logging()

    entries = _entries(capsys.readouterr().out)
    assert any(e["event"] == "decoded payload" and e["service"] == "billing" for e in entries)
