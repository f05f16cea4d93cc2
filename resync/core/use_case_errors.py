"""Use case error handling utilities.

Provides consistent exception handling across the sync core. Per-type and
per-record failures are turned into tagged results rather than raised; these
helpers format and log the exceptions that get converted.

Design principles:
1. KeyboardInterrupt and SystemExit are always re-raised (never caught)
2. Domain errors carry user-friendly messages
3. Unexpected exceptions are logged with tracebacks and described generically
"""

import logging
import sqlite3

from resync.domain.exceptions import ResyncDomainError

logger = logging.getLogger(__name__)


def format_error_message(exception: Exception, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation (e.g., "indexing").

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, ResyncDomainError):
        return exception.message
    elif isinstance(exception, sqlite3.Error):
        return f"Database error during {operation_name}: {exception}"
    elif isinstance(exception, OSError):
        return (
            f"I/O error: {exception}. "
            "Check file permissions, disk space, and filesystem access."
        )
    elif isinstance(exception, (ValueError, TypeError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}: {exception!r}"


def log_use_case_error(exception: Exception, operation_name: str) -> None:
    """Log an exception with severity based on its type.

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for log messages.
    """
    if isinstance(exception, ResyncDomainError):
        logger.warning(str(exception))
    elif isinstance(exception, (sqlite3.Error, OSError)):
        logger.warning(f"Store error during {operation_name}: {exception}")
    elif isinstance(exception, (ValueError, TypeError, RuntimeError)):
        logger.warning(f"Error during {operation_name}: {exception}")
    else:
        logger.exception(f"Unexpected error during {operation_name}")
