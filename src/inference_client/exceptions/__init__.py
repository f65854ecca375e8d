"""
Inference Client - Exception Hierarchy.

Categorized exceptions for inference calls with retry-awareness.
"""

from .base import (
    ErrorCategory,
    InferenceError,
    InvalidRequestError,
    AuthenticationError,
    RateLimitError,
    ServerError,
    RequestCancelledError,
)
from .classify import category_for_status, error_for_status, error_for_transport

__all__ = [
    "ErrorCategory",
    "InferenceError",
    "InvalidRequestError",
    "AuthenticationError",
    "RateLimitError",
    "ServerError",
    "RequestCancelledError",
    "category_for_status",
    "error_for_status",
    "error_for_transport",
]
