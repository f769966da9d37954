"""Structured logging setup.

- Development: human-readable console renderer
- CI/production: JSON renderer for machine parsing
"""

import logging
import sys

import structlog


def configure_logging(*, level: str = 'INFO', use_json: bool = False) -> None:
    """Configure structlog once for the whole process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        use_json: JSON output when True, console output when False.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt='iso', utc=True),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
