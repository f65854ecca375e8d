"""
Endpoint selection for OpenAI-compatible inference gateways.
"""

from typing import Any, Mapping

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
COMPLETIONS_PATH = "/v1/completions"


def select_endpoint(params: Mapping[str, Any]) -> str:
    """Pick the target path from the request payload's shape."""
    if "messages" in params:
        return CHAT_COMPLETIONS_PATH
    if "prompt" in params:
        return COMPLETIONS_PATH
    return CHAT_COMPLETIONS_PATH
