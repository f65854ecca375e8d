"""
Retry loop driving single inference attempts.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from .backoff import calculate_backoff
from .config import RetryConfig
from ..context import ExecutionContext
from ..exceptions import InferenceError, RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig,
    context: ExecutionContext,
    *,
    request_id: str = "",
    on_retry: Callable[[int, InferenceError, float], None] | None = None,
) -> T:
    """
    Run `operation` until it succeeds, fails terminally, or retries run out.

    Only `InferenceError` is inspected; its `retryable` flag alone decides
    whether another attempt is made. Backoff waits are cut short by the
    context.

    Args:
        operation: Performs exactly one attempt
        config: Retry configuration
        context: Caller's execution context
        request_id: Correlation id for log lines
        on_retry: Optional callback(attempt, error, delay) called before each wait

    Returns:
        The result of the first successful attempt

    Raises:
        InferenceError: The terminal error, or RequestCancelledError when the
            context ends the loop
    """
    if not config.enabled:
        return await operation()

    last_error: InferenceError | None = None

    for attempt in range(config.max_retries + 1):
        try:
            result = await operation()
        except InferenceError as e:
            last_error = e
        else:
            if attempt > 0:
                logger.info(
                    f"Request succeeded after {attempt} retries for request_id={request_id}"
                )
            return result

        if not last_error.retryable:
            logger.debug(
                f"Non-retryable error for request_id={request_id}: {last_error.message}"
            )
            raise last_error

        if attempt >= config.max_retries:
            logger.info(
                f"Max retries ({config.max_retries}) exhausted for request_id={request_id}"
            )
            break

        if context.done():
            logger.debug(f"Context done, stopping retries for request_id={request_id}")
            raise RequestCancelledError(
                "request cancelled before retry", cause=context.err()
            ) from last_error

        delay = calculate_backoff(attempt, config)
        if on_retry:
            on_retry(attempt, last_error, delay)
        else:
            logger.warning(
                f"Retry {attempt + 1}/{config.max_retries} for request_id={request_id} "
                f"({last_error.category.value}): {last_error.message}, "
                f"waiting {delay:.2f}s"
            )

        if not await context.sleep(delay):
            logger.debug(f"Context done during backoff for request_id={request_id}")
            raise RequestCancelledError(
                "request cancelled during retry wait", cause=context.err()
            ) from last_error

    raise last_error
