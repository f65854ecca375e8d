"""
Base exception classes for inference client operations.

Every error carries an `ErrorCategory`. Whether an operation can be safely
retried with the same parameters follows from the category alone.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Failure categories for a single inference attempt."""

    INVALID_REQUEST = "invalid_request"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Only rate limiting and server-side failures are worth retrying."""
        return self in _RETRYABLE_CATEGORIES


_RETRYABLE_CATEGORIES = frozenset({ErrorCategory.RATE_LIMIT, ErrorCategory.SERVER})


class InferenceError(Exception):
    """Base exception for all inference client errors."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        self.cause = cause
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        return self.category.retryable

    def __str__(self) -> str:
        parts = [f"[{self.category.value}]", self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class InvalidRequestError(InferenceError):
    """Raised when the request is malformed or cannot be built. Not retryable."""

    def __init__(self, message: str = "Invalid request", **kwargs):
        super().__init__(message, category=ErrorCategory.INVALID_REQUEST, **kwargs)


class AuthenticationError(InferenceError):
    """Raised on 401/403 responses. Not retryable."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, category=ErrorCategory.AUTH, **kwargs)


class RateLimitError(InferenceError):
    """Raised when rate limit is exceeded. Always retryable."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.RATE_LIMIT, **kwargs)
        self.retry_after = retry_after


class ServerError(InferenceError):
    """Raised on 5xx responses, timeouts and network failures. Retryable."""

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, category=ErrorCategory.SERVER, **kwargs)


class RequestCancelledError(InferenceError):
    """Raised when the caller's execution context cancels the call. Not retryable."""

    def __init__(self, message: str = "request cancelled", **kwargs):
        super().__init__(message, category=ErrorCategory.UNKNOWN, **kwargs)
