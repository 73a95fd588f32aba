"""Structured JSON logging for applications embedding jsonextra.

The library itself logs through stdlib ``logging`` and stays silent until an
application configures handlers. ``setup_logging`` is the opt-in: it renders
both stdlib records and structlog events as one JSON object per line.
"""

from __future__ import annotations

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener

import structlog

from jsonextra.config import ExtraSettings

_listener: QueueListener | None = None


class _PassthroughQueueHandler(QueueHandler):
    """Enqueue records unformatted so ProcessorFormatter still sees structlog event dicts."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        return record


def setup_logging(service: str | None = None, level: str | None = None) -> None:
    """Configure structlog and the root logger for JSON output.

    *service* and *level* default to ``JSONEXTRA_LOG_SERVICE`` and
    ``JSONEXTRA_LOG_LEVEL``. Output goes through a QueueHandler/QueueListener
    pair so logging never blocks the caller. Calling it again replaces the
    previous configuration.
    """
    settings = ExtraSettings()
    service = service or settings.log_service
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    stop_logging()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service(service),
    ]

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=10_000)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    )

    global _listener
    _listener = QueueListener(log_queue, stream_handler, respect_handler_level=True)
    _listener.start()

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_PassthroughQueueHandler(log_queue))
    root.setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def stop_logging() -> None:
    """Flush the queued entries and detach the handler installed by setup_logging."""
    global _listener
    if _listener is None:
        return
    _listener.stop()
    _listener = None
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, _PassthroughQueueHandler):
            root.removeHandler(handler)


def _add_service(service: str) -> structlog.types.Processor:
    """Tag every entry with *service* unless the caller bound its own."""

    def processor(
        _logger: structlog.types.WrappedLogger,
        _method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return processor
