"""Logging configuration for metric ingestion."""

import logging
import sys
from typing import Any, Callable
import time
from functools import wraps

import structlog
from structlog.types import Processor
from structlog.stdlib import ProcessorFormatter
from structlog.processors import CallsiteParameter

from tsdb_ingest.core.constants import DEFAULT_LOG_LEVEL

def setup_logging(level: str = DEFAULT_LOG_LEVEL, enable_debug: bool = False) -> None:
    """Setup structured logging using structlog.

    Args:
        level: Logging level
        enable_debug: Whether to add call-site details to every entry
    """
    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if enable_debug:
        shared_processors.append(structlog.processors.CallsiteParameterAdder(
            parameters={
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
                CallsiteParameter.MODULE,
            }
        ))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    # Log to stderr so stdout stays clean for emitted points
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if enable_debug else level.upper())

def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)

def log_duration(logger: structlog.stdlib.BoundLogger) -> Callable:
    """Decorator to log function duration.

    Args:
        logger: Logger instance to use

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.debug(
                    "function_completed",
                    function=func.__name__,
                    duration_ms=duration_ms
                )
        return wrapper
    return decorator
