"""
Standardized error model with recovery semantics.

This module defines the base hierarchy for every error raised by the uploads
engine itself. Errors coming out of disks or repositories are never wrapped;
only the engine's own failures use these classes.
"""

from __future__ import annotations

import uuid


class ServiceError(Exception):
    """Standardized service error with retry classification.

    ServiceError carries structured information about failures:
    - code: Machine-readable error code (e.g., "PATH_COLLISION")
    - message_safe: Human-readable message safe for logs/users
    - message_debug: Detailed debug info (not logged in production)
    - retryable: Whether the caller can recover by trying again differently
    - cause: The underlying exception, if any
    - debug_id: Unique ID for support correlation

    Attributes:
        code: Error code for programmatic handling.
        message_safe: Safe message for logging and user display.
        message_debug: Optional detailed message for debugging.
        retryable: Whether this error can be recovered from.
        cause: Optional underlying exception.
        debug_id: Unique identifier for support tickets.
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        """Initialize a ServiceError.

        Args:
            code: Machine-readable error code.
            message_safe: Human-readable message safe for logs.
            message_debug: Optional detailed debug message.
            retryable: Whether the operation can be retried.
            cause: Optional underlying exception.
            debug_id: Optional correlation ID (auto-generated if None).
        """
        super().__init__(message_safe)
        self.code = code
        self.message_safe = message_safe
        self.message_debug = message_debug
        self.retryable = retryable
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]

    def __str__(self) -> str:
        """Return string representation."""
        return f"[{self.code}] {self.message_safe}"

    def __repr__(self) -> str:
        """Return detailed representation."""
        return (
            f"{type(self).__name__}(code={self.code!r}, "
            f"message_safe={self.message_safe!r}, "
            f"retryable={self.retryable}, "
            f"debug_id={self.debug_id!r})"
        )


class RetryableError(ServiceError):
    """Error the caller can recover from by retrying with different input.

    The engine never retries on its own. A typical example is a path
    collision, which goes away once the storage path is regenerated.
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=True,
            cause=cause,
            debug_id=debug_id,
        )


class TerminalError(ServiceError):
    """Error that indicates the operation should not be retried.

    Use this for permanent failures like:
    - Invalid configuration
    - Unknown identifiers or disk names
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


class ErrorCode:
    """Standard error codes raised by the uploads engine."""

    # Configuration
    INVALID_CONFIG = "INVALID_CONFIG"

    # Storage layout
    PATH_COLLISION = "PATH_COLLISION"
    DISK_NOT_FOUND = "DISK_NOT_FOUND"

    # Repository lookups
    NOT_FOUND = "NOT_FOUND"
