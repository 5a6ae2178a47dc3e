"""Shared helpers used across adapters and services."""

from .exception_handler import (
    format_exception_json,
    get_error_code,
    handle_exception,
    log_exception,
)

__all__ = [
    "format_exception_json",
    "get_error_code",
    "handle_exception",
    "log_exception",
]
