"""
Error handling utilities for standardized error logging and handling.

This module provides the logging side of error handling for feed operations
and the command line boundary.
"""

import logging
import traceback
from typing import Optional

import httpx

from ..exceptions import PromoteError


def _status_code(error: httpx.HTTPError) -> Optional[int]:
    """Extract the HTTP status code from an error, if it carries a response."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Log an HTTP error raised while talking to a feed.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback at DEBUG level
    """
    status = _status_code(error)
    error_message = str(error)

    if status == 403 or (status is None and "403" in error_message):
        logging.error(
            "Access denied during %s: the feed rejected the request. "
            "Please check the API key or the credentials configured for the feed.",
            operation,
        )
    elif status == 401 or (status is None and "401" in error_message):
        logging.error(
            "Authentication failed during %s: invalid credentials. "
            "Please check the username, password or API key for the feed.",
            operation,
        )
    elif status == 404 or (status is None and "404" in error_message):
        logging.error("Resource not found during %s: %s", operation, error)
    elif (status is not None and status >= 500) or (
        status is None and any(code in error_message for code in ("500", "502", "503"))
    ):
        logging.error("Feed server error during %s: %s", operation, error)
    elif isinstance(error, httpx.TimeoutException):
        logging.error("Timed out during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Log an unexpected error.

    Promotion errors are expected failures and are logged without traceback.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    if isinstance(error, PromoteError):
        logging.error("%s failed: %s", operation.capitalize(), error)
        return

    logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.error("Traceback: %s", traceback.format_exc())


__all__ = [
    "handle_http_error",
    "handle_generic_error",
]
