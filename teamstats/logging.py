"""
Logging for Team Stats.

Events are structlog key/value records passed through the standard library
``logging`` module to stderr, so stdout stays free for CLI output. With
``DEBUG`` on they are rendered for the console, otherwise one JSON object per
line. Every logger lives under the ``teamstats`` namespace, which is the only
logger whose level is set here.

Usage:
    from teamstats.logging import get_logger, timed

    logger = get_logger("services.ranking_cache")
    logger.info("cache_hit", key="teamsList", count=12)

    with timed("read_teams") as timing:
        teams = ranking.fetch_as_list()
    print(f"MS: {timing.elapsed_ms:.3f}")
"""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

import structlog
from structlog.types import Processor

ROOT_LOGGER = "teamstats"


def _processors(console: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if console:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


def configure_logging(level: Optional[str] = None, console: Optional[bool] = None) -> None:
    """
    Configure structlog for the ``teamstats`` loggers.

    Args:
        level: Log level name, defaults to settings.log_level
        console: Human-readable output instead of JSON, defaults to settings.debug

    Safe to call again; the last call wins.
    """
    from .config import get_settings

    settings = get_settings()
    level = (level or settings.log_level).upper()
    console = settings.debug if console is None else console

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    structlog.configure(
        processors=_processors(console),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are created at import time, before the CLI picks a level
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger named ``teamstats.<name>``."""
    if not structlog.is_configured():
        configure_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return structlog.get_logger(name)  # type: ignore[no-any-return]


@dataclass
class Timing:
    operation: str
    elapsed_ms: float = 0.0


@contextmanager
def timed(
    operation: str, logger: Optional[structlog.stdlib.BoundLogger] = None
) -> Iterator[Timing]:
    """
    Time a block in milliseconds and log ``operation_complete`` or ``operation_failed``.

    The yielded Timing is filled in when the block exits, including when it raises.
    """
    log = logger or get_logger("timing")
    timing = Timing(operation)
    start = time.perf_counter()
    try:
        yield timing
    except Exception as e:
        timing.elapsed_ms = (time.perf_counter() - start) * 1000
        log.error(
            "operation_failed",
            operation=operation,
            duration_ms=round(timing.elapsed_ms, 3),
            error=str(e),
        )
        raise
    timing.elapsed_ms = (time.perf_counter() - start) * 1000
    log.info("operation_complete", operation=operation, duration_ms=round(timing.elapsed_ms, 3))


__all__ = ["configure_logging", "get_logger", "timed", "Timing"]
