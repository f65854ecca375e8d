"""
Base inference client interface and request/response types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..context import ExecutionContext


class Role(str, Enum):
    """Message roles in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A single message in a conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict:
        """Convert to dictionary format for API requests."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=Role.ASSISTANT, content=content)


@dataclass(frozen=True)
class InferenceRequest:
    """
    One logical inference call.

    Attributes:
        model: Model name, used for logging
        params: JSON payload sent as the request body
        request_id: Correlation id sent as X-Request-ID when non-empty
    """

    model: str
    params: dict[str, Any] = field(default_factory=dict)
    request_id: str = ""

    @classmethod
    def chat(
        cls,
        model: str,
        messages: list[Message | dict],
        request_id: str = "",
        **params: Any,
    ) -> "InferenceRequest":
        """Build a chat completion request."""
        payload = {
            **params,
            "model": model,
            "messages": [m.to_dict() if isinstance(m, Message) else m for m in messages],
        }
        return cls(model=model, params=payload, request_id=request_id)

    @classmethod
    def completion(
        cls,
        model: str,
        prompt: str,
        request_id: str = "",
        **params: Any,
    ) -> "InferenceRequest":
        """Build a text completion request."""
        payload = {**params, "model": model, "prompt": prompt}
        return cls(model=model, params=payload, request_id=request_id)


@dataclass
class InferenceResponse:
    """
    Result of a successful attempt.

    `data` is None when the body was empty or not valid JSON.
    """

    request_id: str
    content: bytes
    data: Any = None
    status_code: int = 200

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class InferenceClient(ABC):
    """
    Abstract base class for inference clients.
    """

    @abstractmethod
    async def generate(
        self,
        request: InferenceRequest,
        context: ExecutionContext | None = None,
    ) -> InferenceResponse:
        """
        Run one inference request.

        Args:
            request: The request to send
            context: Cancellation/deadline handle for the whole call

        Returns:
            The response of the successful attempt

        Raises:
            InferenceError: If the call failed
        """
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
