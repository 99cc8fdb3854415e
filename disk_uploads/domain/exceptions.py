"""
Standard exceptions for disk-uploads.

Every error the uploads engine raises on its own behalf lives here. Errors
from disks (I/O) and repositories propagate unchanged and are not wrapped.
"""

from __future__ import annotations

from typing import Any, Sequence

from disk_uploads.runtime.errors import ErrorCode, RetryableError, TerminalError


class InvalidConfigError(TerminalError):
    """Raised at construction time when required configuration is missing or malformed."""

    def __init__(
        self,
        missing: Sequence[str] = (),
        message_debug: str | None = None,
        cause: Exception | None = None,
    ):
        self.missing = list(missing)
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message_safe=(
                f"Missing required configuration: {', '.join(self.missing)}"
                if self.missing
                else "Invalid configuration provided."
            ),
            message_debug=message_debug,
            cause=cause,
        )


class PathCollisionError(RetryableError):
    """
    Raised when a copy would write onto its own source.

    Recoverable: regenerate the storage path or pick another disk.
    """

    def __init__(self, disk: str, old_path: str, new_path: str, operation: str):
        self.disk = disk
        self.old_path = old_path
        self.new_path = new_path
        self.operation = operation
        super().__init__(
            code=ErrorCode.PATH_COLLISION,
            message_safe=(
                f"Generated path is not unique on the same disk during {operation}: "
                f"'{old_path}' -> '{new_path}'. If you provided a custom `generate_path` "
                f"function, ensure it always generates unique paths (i.e. include a timestamp)."
            ),
        )


class UploadNotFoundError(TerminalError):
    """Raised by repositories when an upload identifier cannot be resolved."""

    def __init__(self, upload: Any, message_debug: str | None = None):
        self.upload = upload
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message_safe=f"No upload found for identifier: {upload!r}",
            message_debug=message_debug,
        )


class DiskNotFoundError(TerminalError):
    """Raised when a logical disk name is not configured."""

    def __init__(self, disk_name: str, available: Sequence[str] = ()):
        self.disk_name = disk_name
        super().__init__(
            code=ErrorCode.DISK_NOT_FOUND,
            message_safe=f"Disk '{disk_name}' is not configured",
            message_debug=f"Configured disks: {', '.join(available)}" if available else None,
        )
