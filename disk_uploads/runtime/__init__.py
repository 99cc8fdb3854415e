"""
Runtime layer for disk-uploads.

This package provides the shared error model:
- ServiceError: Standardized errors with a machine-readable code
- RetryableError / TerminalError: recoverable vs. permanent failures
"""

from .errors import ErrorCode, RetryableError, ServiceError, TerminalError

__all__ = [
    "ErrorCode",
    "ServiceError",
    "RetryableError",
    "TerminalError",
]
