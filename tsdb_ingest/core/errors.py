"""Module for centralized error handling."""

from typing import Optional, Any, Dict
from rich.console import Console
from rich.markup import escape
from functools import wraps
from typing import Type, Tuple, Callable
import logging

# Initialize console for rich output
console = Console(stderr=True)

# Define error codes
ERROR_CODES = {
    'CONFIG_ERROR': 1000,
    'PARSING_ERROR': 3000,
    'INVALID_METRIC': 3001,
    'INVALID_TIMESTAMP': 3002,
    'INVALID_VALUE': 3003,
    'INVALID_TAG': 3004,
    'UNSUPPORTED_FORMAT': 3100,
    'DATABASE_ERROR': 5000,
}

class IngestError(Exception):
    """Base exception class for tsdb-ingest."""

    def __init__(
        self,
        message: str,
        error_code: int,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize error.

        Args:
            message: Error message
            error_code: Numeric error code
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

class ConfigError(IngestError):
    """Configuration-related errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['CONFIG_ERROR'], details)

class ParsingError(IngestError):
    """Metric line parsing errors.

    Raised for the first malformed line of a blob; no partial batch
    accompanies it.
    """
    code_key = 'PARSING_ERROR'

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES[self.code_key], details)

class InvalidMetricError(ParsingError):
    """A line has fewer than the required number of tokens."""
    code_key = 'INVALID_METRIC'

class InvalidTimestampError(ParsingError):
    """The timestamp token is not a base-10 integer."""
    code_key = 'INVALID_TIMESTAMP'

class InvalidValueError(ParsingError):
    """The value token is not a finite floating point number."""
    code_key = 'INVALID_VALUE'

class InvalidTagError(ParsingError):
    """A tag token is not a single key=value pair."""
    code_key = 'INVALID_TAG'

class UnsupportedFormatError(IngestError):
    """No transformer is registered for the requested format."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['UNSUPPORTED_FORMAT'], details)

class DatabaseError(IngestError):
    """Database operation errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ERROR_CODES['DATABASE_ERROR'], details)

def error_handler(reraise: bool = True, exclude: Optional[Tuple[Type[Exception], ...]] = None):
    """Decorator for handling errors in functions.

    Args:
        reraise: Whether to reraise the exception after handling
        exclude: Tuple of exception types to exclude from handling

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if exclude and isinstance(e, exclude):
                    raise

                # Handle the error
                if isinstance(e, IngestError):
                    console.print(f"[red]Error {e.error_code}:[/red] {escape(str(e))}", highlight=False)
                    if e.details:
                        console.print("[yellow]Details:[/yellow]")
                        for key, value in e.details.items():
                            console.print(f"  [blue]{key}:[/blue] {escape(str(value))}", highlight=False)
                else:
                    console.print(f"[red]Unexpected Error:[/red] {escape(str(e))}", highlight=False)

                # Log the error
                logger = logging.getLogger(__name__)
                logger.error(
                    "Error occurred",
                    exc_info=e,
                    extra={
                        "error_code": getattr(e, "error_code", None),
                        "details": getattr(e, "details", None)
                    }
                )

                if reraise:
                    raise

            return None
        return wrapper
    return decorator
