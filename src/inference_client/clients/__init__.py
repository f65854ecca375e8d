"""
Inference Client - Clients.

Request/response types and the HTTP gateway client.
"""

from .base import (
    InferenceClient,
    InferenceRequest,
    InferenceResponse,
    Message,
    Role,
)
from .http import HTTPInferenceClient, HTTPInferenceClientConfig

__all__ = [
    "InferenceClient",
    "InferenceRequest",
    "InferenceResponse",
    "Message",
    "Role",
    "HTTPInferenceClient",
    "HTTPInferenceClientConfig",
]
