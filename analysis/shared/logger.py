"""
Logging utilities for the TWAP price oracle.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


class ComponentLogger:
    """Component-specific logger with context."""

    def __init__(self, component: str):
        self.logger = structlog.get_logger(component)
        self.component = component

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self.logger.info(message, component=self.component, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self.logger.warning(message, component=self.component, **context)

    def error(self, message: str, **context: Any) -> None:
        """Log error message."""
        self.logger.error(message, component=self.component, **context)

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self.logger.debug(message, component=self.component, **context)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
) -> None:
    """Configure structured logging for the application."""

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        # Prices are 256-bit ints; JSONRenderer keeps them exact
        processors: list[Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure on import with defaults
configure_logging()
