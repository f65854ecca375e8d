"""
HTTP inference client for OpenAI-compatible gateways.

Sends chat and text completion requests as JSON POSTs, classifies every
failure, and retries transient ones with exponential backoff.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field

import httpx

from .base import InferenceClient, InferenceRequest, InferenceResponse
from ..context import ContextError, ExecutionContext
from ..endpoints import select_endpoint
from ..exceptions import InvalidRequestError, error_for_status, error_for_transport
from ..retry import RetryConfig, execute_with_retry

logger = logging.getLogger(__name__)


@dataclass
class HTTPInferenceClientConfig:
    """
    Connection and retry settings for `HTTPInferenceClient`.

    Attributes:
        base_url: Gateway base URL, e.g. "http://localhost:8000"
        timeout: Overall per-attempt timeout in seconds, body included (default: 5 minutes)
        max_idle_conns: Maximum pooled keep-alive connections (default: 100)
        idle_conn_timeout: Seconds an idle connection is kept (default: 90)
        api_key: Optional bearer token
        retry: Retry configuration (disabled by default)
    """

    base_url: str
    timeout: float = 300.0
    max_idle_conns: int = 100
    idle_conn_timeout: float = 90.0
    api_key: str | None = None
    retry: RetryConfig = field(default_factory=RetryConfig)


class HTTPInferenceClient(InferenceClient):
    """
    Client for HTTP inference gateways.

    Features:
    - Chat/text completion endpoint selection from the payload
    - Optional bearer authentication and request id correlation
    - Error classification into retryable and terminal categories
    - Exponential backoff with jitter, cancellable via ExecutionContext
    - One connection pool per client, shared by concurrent calls
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 300.0,
        max_idle_conns: int = 100,
        idle_conn_timeout: float = 90.0,
        retry_config: RetryConfig | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Gateway base URL
            api_key: Optional bearer token
            timeout: Overall per-attempt timeout in seconds, body included
            max_idle_conns: Maximum pooled keep-alive connections
            idle_conn_timeout: Seconds an idle connection is kept
            retry_config: Retry configuration (default: no retry)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig.no_retry()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            limits=httpx.Limits(
                max_keepalive_connections=max_idle_conns,
                keepalive_expiry=idle_conn_timeout,
            ),
        )

    @classmethod
    def from_config(cls, config: HTTPInferenceClientConfig) -> "HTTPInferenceClient":
        """Create a client from a configuration object."""
        return cls(
            config.base_url,
            api_key=config.api_key,
            timeout=config.timeout,
            max_idle_conns=config.max_idle_conns,
            idle_conn_timeout=config.idle_conn_timeout,
            retry_config=config.retry,
        )

    async def __aenter__(self) -> "HTTPInferenceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _get_headers(self, request_id: str) -> dict:
        """Get headers for a single attempt."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def _send(self, http_request: httpx.Request) -> httpx.Response:
        """Send and read the full body within `timeout` seconds overall."""
        return await asyncio.wait_for(self._client.send(http_request), timeout=self.timeout)

    async def generate(
        self,
        request: InferenceRequest,
        context: ExecutionContext | None = None,
    ) -> InferenceResponse:
        """Make an inference request, retrying transient failures."""
        if request is None:
            raise InvalidRequestError("request cannot be None")
        context = context or ExecutionContext()

        return await execute_with_retry(
            lambda: self._generate_once(request, context),
            self.retry_config,
            context,
            request_id=request.request_id,
        )

    async def _generate_once(
        self,
        request: InferenceRequest,
        context: ExecutionContext,
    ) -> InferenceResponse:
        """Make a single attempt without retry."""
        endpoint = select_endpoint(request.params)

        try:
            body = json.dumps(request.params, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise InvalidRequestError(f"failed to marshal request: {e}", cause=e) from e

        url = f"{self.base_url}{endpoint}"
        logger.debug(
            f"Sending inference request to {url} with "
            f"request_id={request.request_id}, model={request.model}"
        )

        try:
            http_request = self._client.build_request(
                "POST", url, content=body, headers=self._get_headers(request.request_id)
            )
        except (httpx.InvalidURL, ValueError) as e:
            # Non-ASCII header values fail here with UnicodeEncodeError
            raise InvalidRequestError(f"failed to create HTTP request: {e}", cause=e) from e

        try:
            response = await context.run(self._send, http_request)
        except (ContextError, asyncio.TimeoutError, httpx.RequestError, httpx.InvalidURL) as e:
            raise error_for_transport(e) from e

        if response.status_code != 200:
            raise error_for_status(response.status_code, response.content, response.headers)

        data = None
        try:
            data = json.loads(response.content)
        except ValueError as e:
            logger.warning(
                f"Failed to parse response as JSON for request_id={request.request_id}: {e}"
            )

        logger.debug(
            f"Received successful response for request_id={request.request_id}, "
            f"status={response.status_code}, body_size={len(response.content)}"
        )

        return InferenceResponse(
            request_id=request.request_id,
            content=response.content,
            data=data,
            status_code=response.status_code,
        )
