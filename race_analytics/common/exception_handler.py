"""Exception handling utilities for consistent error formatting.

Formats exceptions as structured JSON, logs them consistently, and handles
them the same way across the CLI and the analysis service.
"""

import json
import logging
import traceback
from typing import Any

from ..core.domain.exceptions import RaceAnalyticsError

logger = logging.getLogger(__name__)


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both RaceAnalyticsError and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.

    Example:
        >>> try:
        ...     raise ValueError("Invalid input")
        ... except Exception as e:
        ...     error_json = format_exception_json(e, include_trace=True)
        ...     print(json.dumps(error_json, indent=2))
    """
    if isinstance(exc, RaceAnalyticsError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": (
                last_frame.filename.split("\\")[-1].split("/")[-1] if last_frame else "<unknown>"
            ),
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log exception in structured JSON format.

    Args:
        exc: The exception to log.
        log: Logger instance to use (defaults to module logger).
        level: Logging level (default: ERROR).
        extra_context: Additional context to include.
    """
    log_instance = log or logger

    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2))


def handle_exception(
    exc: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
) -> dict[str, Any]:
    """Handle and log exception, optionally re-raising.

    1. Logs the exception with full details
    2. Returns a caller-safe error dictionary (without traces)
    3. Optionally re-raises the exception

    Args:
        exc: The exception to handle.
        context: Additional context for debugging.
        reraise: If True, re-raise the exception after logging.
        log: Logger instance to use.
        level: Logging level (default: ERROR).

    Returns:
        Dictionary with error info (safe to show to a user).

    Example:
        >>> try:
        ...     profile = build_pace_profile(driver_id, laps)
        ... except ArithmeticError as e:
        ...     handle_exception(e, context={"driver": driver_id}, reraise=False)
    """
    log_exception(exc, log=log, level=level, extra_context=context)

    error_info = format_exception_json(exc, include_trace=False, extra_context=context)

    if reraise:
        raise exc

    return error_info


def get_error_code(exc: Exception) -> str:
    """Get the error code from an exception.

    Args:
        exc: The exception to get code from.

    Returns:
        Error code string (e.g., "RA_VAL_003" or "PYTHON_ERR").
    """
    if isinstance(exc, RaceAnalyticsError):
        return exc.error_code
    return "PYTHON_ERR"
