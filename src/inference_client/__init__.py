"""
Inference Client - Resilient calls to OpenAI-compatible inference gateways.

A single-request HTTP client with error classification, jittered exponential
backoff and cancellation-aware retries.
"""

from .clients import (
    HTTPInferenceClient,
    HTTPInferenceClientConfig,
    InferenceClient,
    InferenceRequest,
    InferenceResponse,
    Message,
    Role,
)
from .context import (
    ContextCancelled,
    ContextDeadlineExceeded,
    ContextError,
    ExecutionContext,
)
from .endpoints import CHAT_COMPLETIONS_PATH, COMPLETIONS_PATH, select_endpoint
from .exceptions import (
    ErrorCategory,
    InferenceError,
    InvalidRequestError,
    AuthenticationError,
    RateLimitError,
    ServerError,
    RequestCancelledError,
)
from .retry import RetryConfig, calculate_backoff, execute_with_retry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Clients
    "InferenceClient",
    "HTTPInferenceClient",
    "HTTPInferenceClientConfig",
    "InferenceRequest",
    "InferenceResponse",
    "Message",
    "Role",
    # Context
    "ExecutionContext",
    "ContextError",
    "ContextCancelled",
    "ContextDeadlineExceeded",
    # Endpoints
    "select_endpoint",
    "CHAT_COMPLETIONS_PATH",
    "COMPLETIONS_PATH",
    # Exceptions
    "ErrorCategory",
    "InferenceError",
    "InvalidRequestError",
    "AuthenticationError",
    "RateLimitError",
    "ServerError",
    "RequestCancelledError",
    # Retry
    "RetryConfig",
    "calculate_backoff",
    "execute_with_retry",
]
