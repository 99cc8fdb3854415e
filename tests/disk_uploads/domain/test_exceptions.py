"""Unit tests for the uploads engine's exceptions."""

from disk_uploads.domain.exceptions import (
    DiskNotFoundError,
    InvalidConfigError,
    PathCollisionError,
    UploadNotFoundError,
)
from disk_uploads.runtime.errors import ErrorCode, RetryableError, TerminalError


class TestInvalidConfigError:
    def test_lists_missing_fields(self):
        error = InvalidConfigError(["disks", "repository"])

        assert error.missing == ["disks", "repository"]
        assert error.message_safe == "Missing required configuration: disks, repository"
        assert error.code == ErrorCode.INVALID_CONFIG

    def test_generic_message_without_fields(self):
        error = InvalidConfigError()

        assert error.message_safe == "Invalid configuration provided."
        assert isinstance(error, TerminalError)

    def test_keeps_underlying_cause(self):
        cause = ValueError("bad value")

        error = InvalidConfigError(["default_disk"], cause=cause)

        assert error.cause is cause
        assert error.retryable is False


class TestPathCollisionError:
    def test_is_recoverable(self):
        """A collision goes away once the path is regenerated."""
        error = PathCollisionError("memory", "/a.txt", "/a.txt", "copy")

        assert isinstance(error, RetryableError)
        assert error.retryable is True
        assert error.code == ErrorCode.PATH_COLLISION

    def test_carries_location(self):
        error = PathCollisionError("memory", "/old.txt", "/new.txt", "copy")

        assert error.disk == "memory"
        assert error.old_path == "/old.txt"
        assert error.new_path == "/new.txt"
        assert error.operation == "copy"
        assert "'/old.txt' -> '/new.txt'" in error.message_safe


class TestNotFoundErrors:
    def test_upload_not_found(self):
        error = UploadNotFoundError(42)

        assert error.upload == 42
        assert error.code == ErrorCode.NOT_FOUND
        assert "42" in str(error)

    def test_disk_not_found(self):
        error = DiskNotFoundError("s3", ["default", "memory"])

        assert error.disk_name == "s3"
        assert error.code == ErrorCode.DISK_NOT_FOUND
        assert error.message_debug == "Configured disks: default, memory"
