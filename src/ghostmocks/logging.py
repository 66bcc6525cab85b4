"""structlog setup for ghostmocks.

Log events go to stderr so they never mix with generated output. Events are
snake_case names with keyword context, e.g.::

    LOG.info("fixture_written", path="mocks/users.json", size=112)

Runs are quiet by default (WARNING); ``-v`` raises the level to INFO and
``-vv`` to DEBUG, which also shows why individual HAR entries were skipped.
"""

from __future__ import annotations

import logging as stdlib_logging
import os
import sys
from typing import Any

import structlog

DEFAULT_LEVEL = "WARNING"


def level_for_verbosity(verbose: int, default: str = DEFAULT_LEVEL) -> str:
    """Map a ``-v`` count to a level name; zero keeps the default."""
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return default


def _level_number(level: str) -> int:
    number = stdlib_logging.getLevelName(level.upper())
    return number if isinstance(number, int) else stdlib_logging.WARNING


def build_processors(json_output: bool) -> list[Any]:
    """Processor chain ending in a JSON or a human-readable renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(level: str = DEFAULT_LEVEL, json_output: bool = False) -> None:
    """Configure structlog to write filtered events to stderr.

    Args:
        level: Level name. Unknown names fall back to WARNING.
        json_output: Emit one JSON object per line instead of console text.
    """
    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def configure_from_environment() -> None:
    """Apply GHOSTMOCKS_LOG_LEVEL and GHOSTMOCKS_LOG_FORMAT before settings load."""
    configure_logging(
        level=os.environ.get("GHOSTMOCKS_LOG_LEVEL", DEFAULT_LEVEL),
        json_output=os.environ.get("GHOSTMOCKS_LOG_FORMAT", "console") == "json",
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, usually as ``LOG = get_logger(__name__)``."""
    return structlog.get_logger(name)
