# src/multikmeans/core/logging.py
"""Structured logging setup for multikmeans.

Both structlog loggers (get_logger) and plain stdlib loggers end up in one
root handler. Stdlib records are passed through the same processor chain by
ProcessorFormatter, so a dynaconf warning and a coordinator event render the
same way.

Output goes to stderr by default: the CLI reserves stdout for the clustering
result.
"""

import logging
import sys
from typing import IO, Any

import numpy as np
import structlog
from structlog.stdlib import ProcessorFormatter

# Chatty at DEBUG while clustering itself is being debugged.
_NOISY_LOGGERS: tuple[str, ...] = (
    "dynaconf",
    "concurrent.futures",
    "asyncio",
)


def _numpy_to_builtin(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Turn numpy scalars and arrays in log fields into plain Python values.

    Distortions and centers are often numpy types; JSONRenderer cannot
    serialize int64 or ndarray.
    """
    for key, value in event_dict.items():
        if isinstance(value, np.ndarray):
            event_dict[key] = value.tolist()
        elif isinstance(value, np.generic):
            event_dict[key] = value.item()
    return event_dict


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Strip the _record/_from_structlog keys ProcessorFormatter injects.

    Both keys are always present; a KeyError here means the wiring in
    configure_logging() is broken.
    """
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _shared_processors() -> list[Any]:
    """Processors run for every record, structlog or stdlib."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        _numpy_to_builtin,
    ]


def _render_processors(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        _drop_formatter_bookkeeping,
        structlog.dev.ConsoleRenderer(colors=True),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: One JSON object per line instead of console text.
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
        stream: Destination, defaults to the current sys.stderr.
    """
    log_level = getattr(logging, level.upper())
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging; cached loggers would go stale
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_render_processors(json_output), foreign_pre_chain=shared))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Never less restrictive than root.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module (pass __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
