"""
Backoff calculation.
"""

import random

from .config import RetryConfig


def calculate_backoff(attempt: int, config: RetryConfig) -> float:
    """
    Calculate backoff delay for a given retry.

    delay = min(initial * factor^attempt, max) * (1 ± jitter)

    Args:
        attempt: Zero-based count of retries already performed
        config: Retry configuration with retry enabled

    Returns:
        Delay in seconds with jitter applied
    """
    try:
        delay = config.initial_backoff * config.backoff_factor**attempt
    except OverflowError:
        delay = config.max_backoff

    # Apply max delay cap
    delay = min(delay, config.max_backoff)

    # Apply jitter (±jitter_fraction)
    if config.jitter_fraction > 0:
        delay += delay * config.jitter_fraction * random.uniform(-1, 1)

    if delay < 0:
        return config.initial_backoff
    return delay
