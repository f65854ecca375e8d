"""
Outcome classification.

Maps HTTP status codes and transport failures to `InferenceError` instances.
This is the only place a failure's category is decided.
"""

import asyncio
import json
import logging
from typing import Mapping

import httpx

from ..context import ContextCancelled, ContextDeadlineExceeded
from .base import (
    AuthenticationError,
    ErrorCategory,
    InferenceError,
    InvalidRequestError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
)

logger = logging.getLogger(__name__)


def category_for_status(status_code: int) -> ErrorCategory:
    """Map a non-200 HTTP status code to an error category."""
    if status_code == 400:
        return ErrorCategory.INVALID_REQUEST
    if status_code in (401, 403):
        return ErrorCategory.AUTH
    if status_code == 429:
        return ErrorCategory.RATE_LIMIT
    if status_code >= 500:
        return ErrorCategory.SERVER
    return ErrorCategory.UNKNOWN


def _extract_message(body: bytes) -> str:
    """Pull `error.message` out of an OpenAI-style envelope, else the raw body."""
    text = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(text)
    except ValueError:
        return text

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return text


def _parse_retry_after(headers: Mapping[str, str] | None) -> float | None:
    if not headers:
        return None
    value = headers.get("retry-after") or headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form is not interpreted
        return None


def error_for_status(
    status_code: int,
    body: bytes,
    headers: Mapping[str, str] | None = None,
) -> InferenceError:
    """
    Build the error for a completed response whose status is not 200.

    Args:
        status_code: HTTP status code
        body: Raw response body
        headers: Response headers (used for Retry-After on 429)

    Returns:
        An InferenceError subclass matching the status category
    """
    category = category_for_status(status_code)
    message = f"HTTP {status_code}: {_extract_message(body)}"

    logger.debug(
        f"Inference request failed with status={status_code}, "
        f"category={category.value}, message={message}"
    )

    if category == ErrorCategory.INVALID_REQUEST:
        return InvalidRequestError(message, status_code=status_code)
    if category == ErrorCategory.AUTH:
        return AuthenticationError(message, status_code=status_code)
    if category == ErrorCategory.RATE_LIMIT:
        return RateLimitError(
            message,
            retry_after=_parse_retry_after(headers),
            status_code=status_code,
        )
    if category == ErrorCategory.SERVER:
        return ServerError(message, status_code=status_code)
    return InferenceError(message, category=category, status_code=status_code)


def error_for_transport(exc: BaseException) -> InferenceError:
    """
    Build the error for an attempt that produced no response.

    Explicit cancellation is terminal. A deadline hit mid-attempt, a client
    timeout and any other network failure are server-side and retryable.
    Failures building the request never reached the network.
    """
    if isinstance(exc, ContextCancelled):
        return RequestCancelledError("request cancelled", cause=exc)
    if isinstance(exc, ContextDeadlineExceeded):
        return ServerError("request timeout", cause=exc)
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return InvalidRequestError(f"failed to create HTTP request: {exc}", cause=exc)
    if isinstance(exc, asyncio.TimeoutError):
        return ServerError("request timeout", cause=exc)
    if isinstance(exc, httpx.TimeoutException):
        return ServerError(f"request timeout: {exc}", cause=exc)
    return ServerError(f"failed to execute request: {exc}", cause=exc)
