"""
spanner_seed.observability.logging

Structured logging configuration for a seed run.

Responsibilities:
- Render structlog events and stdlib records (google-cloud-spanner, google-auth,
  grpc) through one structlog pipeline, one line per event.
- Stamp every line with the service name and any bound run context (`db`).
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal, TextIO

import structlog

LogFormat = Literal["json", "console"]

# Chatty client-library loggers are capped at WARNING unless the run is noisier.
_LIBRARY_LOGGERS = ("google.auth", "google.api_core", "google.cloud.spanner_v1", "urllib3")


def configure_logging(
    *,
    service_name: str,
    level: str,
    fmt: LogFormat = "json",
    stream: TextIO | None = None,
) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _stamp_service(service_name),
    ]

    if fmt == "console":
        # ConsoleRenderer formats exc_info itself.
        tail: list[Any] = [structlog.dev.ConsoleRenderer(colors=False)]
    else:
        tail = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name("spanner_seed")
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
        )
    )

    root = logging.getLogger()
    for h in [h for h in root.handlers if h.get_name() == "spanner_seed"]:
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(numeric_level)
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _stamp_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Re-running configure_logging replaces the handler it installed earlier instead of
# stacking a second one, so repeated main() calls in one process log each line once.
