"""Structured logging configuration using structlog.

Application code logs through the stdlib ``logging`` module; structlog's
``ProcessorFormatter`` turns every record (ours, uvicorn's, SQLAlchemy's)
into one JSON line, or a colored console line in development.
"""

import logging
import sys

import structlog

# Libraries that log every request or statement at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Route all logging through a single structlog-formatted stdout handler.

    Args:
        log_level: Logging level string (debug/info/warning/error).
        json_output: JSON lines when True, colored console output otherwise.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        # ExtraAdder renders stdlib ``extra=`` fields
        foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder()],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(trace_id: str, **extra: str) -> None:
    """Bind the trace id (and any non-empty extras) to the current async context."""
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id, **{key: value for key, value in extra.items() if value}
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
