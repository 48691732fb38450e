"""
Logging Configuration
=====================

Structured logging through structlog, routed into the standard library.
Importing munge leaves the process-wide structlog configuration alone;
``setup_logging`` (called by the CLI) installs the processor chain and the
stderr handler. Embedding applications configure structlog themselves.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from munge.config import Settings


def _processors(renderer: Processor) -> list[Processor]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_structlog(json: bool = False) -> None:
    renderer: Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=_processors(renderer),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(settings: Settings) -> None:
    """Send munge logs to stderr at the configured level and format."""
    configure_structlog(json=settings.log_format == "json")
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.log_level,
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)

