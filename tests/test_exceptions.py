"""Tests for exceptions module - behavior focused."""

import asyncio

import httpx
import pytest

from inference_client.context import ContextCancelled, ContextDeadlineExceeded
from inference_client.exceptions import (
    ErrorCategory,
    InferenceError,
    InvalidRequestError,
    AuthenticationError,
    RateLimitError,
    ServerError,
    RequestCancelledError,
    category_for_status,
    error_for_status,
    error_for_transport,
)


class TestRetryableFlag:
    """Test that retryability follows the category."""

    def test_rate_limit_error_is_retryable(self):
        """Rate limit errors should be retryable."""
        assert RateLimitError().retryable is True

    def test_server_error_is_retryable(self):
        """Server errors should be retryable."""
        assert ServerError().retryable is True

    def test_auth_error_not_retryable(self):
        """Authentication errors should not be retryable."""
        assert AuthenticationError().retryable is False

    def test_invalid_request_not_retryable(self):
        """Invalid request errors should not be retryable."""
        assert InvalidRequestError().retryable is False

    def test_cancelled_not_retryable(self):
        """Cancellation is terminal and falls in the unknown category."""
        error = RequestCancelledError()
        assert error.category == ErrorCategory.UNKNOWN
        assert error.retryable is False

    def test_base_error_not_retryable_by_default(self):
        """Base InferenceError is unknown and not retryable by default."""
        error = InferenceError("test")
        assert error.category == ErrorCategory.UNKNOWN
        assert error.retryable is False

    def test_base_error_follows_explicit_category(self):
        """An explicit category decides retryability."""
        error = InferenceError("test", category=ErrorCategory.SERVER)
        assert error.retryable is True

    @pytest.mark.parametrize(
        "category, expected",
        [
            (ErrorCategory.INVALID_REQUEST, False),
            (ErrorCategory.AUTH, False),
            (ErrorCategory.RATE_LIMIT, True),
            (ErrorCategory.SERVER, True),
            (ErrorCategory.UNKNOWN, False),
        ],
    )
    def test_category_retryable(self, category, expected):
        assert category.retryable is expected


class TestExceptionStringRepresentation:
    """Test that exception string includes useful context."""

    def test_str_includes_message(self):
        error = InferenceError("Something went wrong")
        assert "Something went wrong" in str(error)

    def test_str_includes_category(self):
        error = ServerError("boom")
        assert "server" in str(error)

    def test_str_includes_status_code_when_set(self):
        error = RateLimitError("slow down", status_code=429)
        assert "429" in str(error)


class TestCategoryForStatus:
    """Test the status code decision table."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, ErrorCategory.INVALID_REQUEST),
            (401, ErrorCategory.AUTH),
            (403, ErrorCategory.AUTH),
            (404, ErrorCategory.UNKNOWN),
            (418, ErrorCategory.UNKNOWN),
            (429, ErrorCategory.RATE_LIMIT),
            (500, ErrorCategory.SERVER),
            (502, ErrorCategory.SERVER),
            (503, ErrorCategory.SERVER),
            (504, ErrorCategory.SERVER),
            (507, ErrorCategory.SERVER),
        ],
    )
    def test_maps_status(self, status, expected):
        assert category_for_status(status) == expected


class TestErrorForStatus:
    """Test building errors from failed responses."""

    def test_uses_envelope_message(self):
        """OpenAI-style error.message is preferred over the raw body."""
        body = b'{"error": {"code": 400, "type": "invalid", "message": "bad param", "param": "x"}}'
        error = error_for_status(400, body)

        assert isinstance(error, InvalidRequestError)
        assert error.message == "HTTP 400: bad param"
        assert error.status_code == 400

    def test_falls_back_to_raw_body(self):
        """Non-JSON bodies are used verbatim."""
        error = error_for_status(502, b"upstream exploded")

        assert isinstance(error, ServerError)
        assert error.message == "HTTP 502: upstream exploded"

    def test_envelope_without_message_uses_raw_body(self):
        body = b'{"error": {"code": 500}}'
        error = error_for_status(500, body)
        assert error.message == f"HTTP 500: {body.decode()}"

    def test_auth_status_gives_auth_error(self):
        assert isinstance(error_for_status(403, b""), AuthenticationError)

    def test_unknown_status_gives_base_error(self):
        error = error_for_status(404, b"not found")
        assert type(error) is InferenceError
        assert error.category == ErrorCategory.UNKNOWN

    def test_rate_limit_reads_retry_after(self):
        error = error_for_status(429, b"", {"Retry-After": "7"})
        assert isinstance(error, RateLimitError)
        assert error.retry_after == 7.0

    def test_rate_limit_ignores_date_retry_after(self):
        error = error_for_status(429, b"", {"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"})
        assert error.retry_after is None


class TestErrorForTransport:
    """Test classification of attempts that produced no response."""

    def test_cancelled_context_is_terminal(self):
        error = error_for_transport(ContextCancelled())
        assert isinstance(error, RequestCancelledError)
        assert error.retryable is False
        assert "cancelled" in error.message

    def test_deadline_is_retryable_server_error(self):
        error = error_for_transport(ContextDeadlineExceeded())
        assert isinstance(error, ServerError)
        assert error.message == "request timeout"

    def test_client_timeout_is_server_error(self):
        error = error_for_transport(httpx.ReadTimeout("timed out"))
        assert error.category == ErrorCategory.SERVER

    def test_overall_timeout_is_server_error(self):
        error = error_for_transport(asyncio.TimeoutError())
        assert isinstance(error, ServerError)
        assert error.message == "request timeout"

    def test_connect_error_is_server_error(self):
        cause = httpx.ConnectError("Connection refused")
        error = error_for_transport(cause)
        assert error.category == ErrorCategory.SERVER
        assert error.cause is cause

    def test_bad_url_is_invalid_request(self):
        error = error_for_transport(httpx.UnsupportedProtocol("no scheme"))
        assert isinstance(error, InvalidRequestError)


class TestExceptionInheritance:
    """Test that all exceptions inherit from InferenceError."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            InvalidRequestError,
            AuthenticationError,
            RateLimitError,
            ServerError,
            RequestCancelledError,
        ],
    )
    def test_inherits_from_base(self, exception_class):
        """All exception types should be catchable as InferenceError."""
        assert isinstance(exception_class(), InferenceError)
