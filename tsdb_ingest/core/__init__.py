"""Core utilities for error handling, logging, configuration and storage."""

from .errors import (
    IngestError,
    ConfigError,
    ParsingError,
    InvalidMetricError,
    InvalidTimestampError,
    InvalidValueError,
    InvalidTagError,
    UnsupportedFormatError,
    DatabaseError,
    error_handler
)

__all__ = [
    'IngestError',
    'ConfigError',
    'ParsingError',
    'InvalidMetricError',
    'InvalidTimestampError',
    'InvalidValueError',
    'InvalidTagError',
    'UnsupportedFormatError',
    'DatabaseError',
    'error_handler'
]
