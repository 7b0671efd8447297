"""Structured logging setup for httpfetcher.

Library modules log through ``structlog.get_logger(__name__)`` with
snake_case event names and key/value context. Applications call
``setup_logging`` once to choose rendering; without it structlog's defaults
apply.
"""

import logging
import sys
from typing import TextIO

import structlog

from httpfetcher.config.logging import LoggingSettings


__all__ = ["setup_logging", "setup_logging_from_settings"]


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    output: TextIO | None = None,
) -> None:
    """Configure structlog and the standard library logger.

    Args:
        json_logs: Render JSON lines instead of the rich console format.
        log_level_name: Minimum level name (DEBUG, INFO, ...).
        output: Output stream, stderr when omitted.
    """
    if output is None:
        output = sys.stderr
    level = logging.getLevelNamesMapping().get(log_level_name.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(sort_keys=True),
            ]
        )
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=output.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=output, level=level, force=True)

    # httpx logs every request at INFO; the fetcher already does.
    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))


def setup_logging_from_settings(settings: LoggingSettings) -> None:
    """Configure logging from ``LoggingSettings``."""
    fmt = settings.format
    if fmt == "auto":
        fmt = "rich" if sys.stderr.isatty() else "json"
    setup_logging(json_logs=fmt == "json", log_level_name=settings.level)

