"""
Execution context for inference calls.

An `ExecutionContext` is the cancellation and deadline handle a caller threads
through a call. The client checks it before each attempt, races each attempt
against it, and uses it for every backoff wait.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class ContextError(Exception):
    """Base for the reasons an execution context is done."""


class ContextCancelled(ContextError):
    """The context was cancelled explicitly."""

    def __init__(self, message: str = "context cancelled"):
        super().__init__(message)


class ContextDeadlineExceeded(ContextError):
    """The context's deadline passed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class ExecutionContext:
    """
    Cancellation signal with an optional deadline.

    A context is cheap and single-use: create one per logical call (or share
    one across calls that should be cancelled together).

    Args:
        timeout: Seconds from now until the deadline, or None for no deadline
    """

    def __init__(self, timeout: float | None = None):
        self._cancelled = asyncio.Event()
        self._deadline: float | None = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        """Cancel the context. Idempotent."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None if there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        return self.cancelled or self.deadline_exceeded

    def err(self) -> ContextError | None:
        """Why the context is done, or None. Explicit cancellation wins."""
        if self.cancelled:
            return ContextCancelled()
        if self.deadline_exceeded:
            return ContextDeadlineExceeded()
        return None

    async def sleep(self, delay: float) -> bool:
        """
        Wait for `delay` seconds unless the context finishes first.

        Returns:
            True if the full delay elapsed, False if the wait was cut short
            by cancellation or the deadline
        """
        if self.done():
            return False

        timeout = delay
        remaining = self.remaining()
        hits_deadline = remaining is not None and remaining < delay
        if hits_deadline:
            timeout = remaining

        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return not (hits_deadline or self.done())
        return False

    async def run(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """
        Await `fn(*args, **kwargs)` unless the context finishes first.

        The in-flight task is cancelled as soon as the context is cancelled
        or its deadline passes.

        Raises:
            ContextCancelled: If the context was or became cancelled
            ContextDeadlineExceeded: If the deadline was or became exceeded
        """
        err = self.err()
        if err is not None:
            raise err

        task = asyncio.ensure_future(fn(*args, **kwargs))
        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        if task in done:
            return task.result()
        raise self.err() or ContextDeadlineExceeded()
