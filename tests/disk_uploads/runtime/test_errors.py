"""Unit tests for ServiceError hierarchy."""

import pytest

from disk_uploads.runtime.errors import (
    ErrorCode,
    RetryableError,
    ServiceError,
    TerminalError,
)


class TestServiceError:
    """Tests for ServiceError base class."""

    def test_create_with_required_fields(self):
        """Should create error with required fields."""
        error = ServiceError(
            code="TEST_ERROR",
            message_safe="Something went wrong",
        )

        assert error.code == "TEST_ERROR"
        assert error.message_safe == "Something went wrong"
        assert error.message_debug is None
        assert error.retryable is False
        assert error.cause is None
        assert error.debug_id is not None  # Auto-generated

    def test_create_with_all_fields(self):
        """Should create error with all fields."""
        cause = ValueError("underlying error")
        error = ServiceError(
            code="FULL_ERROR",
            message_safe="Safe message",
            message_debug="Detailed debug info",
            retryable=True,
            cause=cause,
            debug_id="custom-id",
        )

        assert error.message_debug == "Detailed debug info"
        assert error.retryable is True
        assert error.cause is cause
        assert error.debug_id == "custom-id"

    def test_str_representation(self):
        """Should format as [CODE] message."""
        error = ServiceError(code="MY_CODE", message_safe="My message")

        assert str(error) == "[MY_CODE] My message"

    def test_repr_uses_subclass_name(self):
        """repr should name the concrete error class."""
        error = TerminalError(code="X", message_safe="y", debug_id="abc")

        assert repr(error).startswith("TerminalError(code='X'")


class TestRetryableError:
    """Tests for RetryableError class."""

    def test_is_retryable_by_default(self):
        """Should have retryable=True."""
        error = RetryableError(code="RETRY_ME", message_safe="Try again")

        assert error.retryable is True

    def test_can_be_caught_as_service_error(self):
        """Should be catchable as ServiceError."""
        with pytest.raises(ServiceError):
            raise RetryableError(code="CATCH_TEST", message_safe="Catchable")


class TestTerminalError:
    """Tests for TerminalError class."""

    def test_is_not_retryable(self):
        """Should have retryable=False."""
        error = TerminalError(code="STOP_HERE", message_safe="Do not retry")

        assert error.retryable is False
        assert isinstance(error, ServiceError)


class TestErrorCode:
    """Tests for ErrorCode constants."""

    def test_codes(self):
        assert ErrorCode.INVALID_CONFIG == "INVALID_CONFIG"
        assert ErrorCode.PATH_COLLISION == "PATH_COLLISION"
        assert ErrorCode.DISK_NOT_FOUND == "DISK_NOT_FOUND"
        assert ErrorCode.NOT_FOUND == "NOT_FOUND"
