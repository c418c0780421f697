from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, Optional, cast

import structlog

from sync_ical.config import LOG_LEVEL

# Type alias for structlog processor
Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

# Third-party loggers and the level they are held at. Feed hosts are polled on
# every run, and icalendar reports each malformed property it tolerates.
NOISY_LOGGERS: dict[str, int] = {
    "urllib3": logging.WARNING,
    "requests": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "icalendar": logging.ERROR,
}


def select_renderer(level: str) -> Processor:
    """JSON lines at INFO for log aggregation, colored console output otherwise."""
    if level == "INFO":
        return cast(Processor, structlog.processors.JSONRenderer())
    return cast(Processor, structlog.dev.ConsoleRenderer(colors=True))


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure stdlib logging and structlog for the API, the cron entry point and scripts.

    Args:
        level: Log level name; defaults to LOG_LEVEL from the environment.
    """
    level = (level or LOG_LEVEL).upper()

    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=level,
    )

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            select_renderer(level),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
