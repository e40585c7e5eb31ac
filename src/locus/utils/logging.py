"""structlog setup for locus.

Library code only ever asks for a logger with ``get_logger``. Comparators
bind the metric and threshold they were built from with
``structlog.contextvars`` for the duration of a comparison, so any event
logged underneath (e.g. a failed piecewise distance) names the decision
boundary that was being applied. ``configure_logging`` is for the host
application: it picks JSON or console rendering and merges that bound
context into every event.
"""

import logging
import sys
from typing import cast

import structlog
from structlog.types import Processor

from locus.config import settings

_RENDERERS: dict[str, Processor] = {
    "json": structlog.processors.JSONRenderer(),
    "console": structlog.dev.ConsoleRenderer(colors=True),
}


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        level: Log level name. Defaults to settings.LOG_LEVEL.
        log_format: "console" or "json". Defaults to settings.LOG_FORMAT.

    Raises:
        ValueError: If log_format or level is not recognised.
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT
    if log_format not in _RENDERERS:
        raise ValueError(f"Unknown log format: {log_format!r}")
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(_RENDERERS[log_format])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, named after the calling module by convention."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
