"""
Inference Client - Retry Logic.

Exponential backoff with jitter and a cancellation-aware retry loop.
"""

from .config import RetryConfig
from .backoff import calculate_backoff
from .orchestrator import execute_with_retry

__all__ = [
    "RetryConfig",
    "calculate_backoff",
    "execute_with_retry",
]
