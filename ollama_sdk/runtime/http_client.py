"""
Async HTTP client for the Ollama API.

This module wraps a pooled ``httpx.AsyncClient`` configured from a
ClientConfig, injects the default headers and converts transport failures
into ServiceErrors. Status codes are checked by the caller through
``raise_for_status`` because some endpoints treat a 404 as an answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

from .errors import ErrorCode, RetryableError, ServiceError, error_from_status

if TYPE_CHECKING:
    from ollama_sdk.config import ClientConfig


class OllamaHttpClient:
    """Shared HTTP client for Ollama API calls.

    Features:
    - Connection pooling via httpx.AsyncClient
    - Default headers (User-Agent, Accept, configured custom headers)
    - Timeout and redirect policy from ClientConfig
    - Structured error conversion for transport failures
    - Unread streaming responses for NDJSON endpoints

    Example:
        http = OllamaHttpClient(ClientConfig.from_url("http://localhost:11434"))
        async with http:
            response = await http.get("/api/tags")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        max_connections: int = 100,
        max_keepalive: int = 20,
    ):
        """Initialize the HTTP client.

        Args:
            config: Validated client configuration.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
            max_connections: Maximum total connections in pool.
            max_keepalive: Maximum keepalive connections.
        """
        self.config = config
        self._transport = transport
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive,
            keepalive_expiry=30.0,
        )
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def default_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }
        headers.update(self.config.headers)
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                limits=self._limits,
                headers=self.default_headers(),
                follow_redirects=self.config.follow_redirects,
                max_redirects=self.config.max_redirects,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OllamaHttpClient":
        self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _build_url(self, path: str) -> str:
        return self.config.endpoint_url(path)

    def _convert_error(self, request: httpx.Request, error: httpx.HTTPError) -> ServiceError:
        """Map an httpx failure to the matching ServiceError."""
        if isinstance(error, httpx.TimeoutException):
            return RetryableError(
                code=ErrorCode.TIMEOUT,
                message_safe="Request timeout",
                message_debug=f"{request.method} {request.url} timed out after {self.config.timeout}s",
                cause=error,
            )
        if isinstance(error, httpx.TransportError):
            return RetryableError(
                code=ErrorCode.NETWORK_ERROR,
                message_safe=f"Network error: {error}",
                cause=error,
            )
        logger.error(f"Unexpected HTTP error for {request.method} {request.url}: {error}")
        return ServiceError(
            code=ErrorCode.INTERNAL_ERROR,
            message_safe="Unexpected error during request",
            message_debug=str(error),
            cause=error,
        )

    async def _send(self, request: httpx.Request, stream: bool) -> httpx.Response:
        """Send a built request, converting transport failures.

        Raises:
            RetryableError: On timeouts and connection failures.
            ServiceError: On any other httpx failure.
        """
        client = self._get_client()
        try:
            response = await client.send(request, stream=stream)
        except httpx.HTTPError as e:
            raise self._convert_error(request, e) from e

        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request and read the whole body.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Request path relative to base_url.
            **kwargs: Additional arguments passed to httpx (json, content,
                params, headers).

        Returns:
            The HTTP response, whatever its status.

        Raises:
            RetryableError: For timeouts and connection failures.
        """
        request = self._get_client().build_request(method, self._build_url(path), **kwargs)
        return await self._send(request, stream=False)

    async def send_stream(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request without reading the body.

        The caller owns the returned response and must close it
        (``await response.aclose()``).

        Returns:
            The HTTP response with an unread body.

        Raises:
            RetryableError: For timeouts and connection failures.
        """
        request = self._get_client().build_request(method, self._build_url(path), **kwargs)
        return await self._send(request, stream=True)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request (a JSON body is allowed)."""
        return await self.request("DELETE", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a HEAD request."""
        return await self.request("HEAD", path, **kwargs)

    async def raise_for_status(self, response: httpx.Response, model: str | None = None) -> None:
        """Raise the classified ServiceError for a non-success response.

        Works for streamed responses too: the body is read first.

        Args:
            response: Response to check.
            model: Model named by the request, used for MODEL_NOT_FOUND.

        Raises:
            ServiceError: If the status is not 2xx.
            RetryableError: If the error body cannot be read.
        """
        if response.is_success:
            return
        try:
            await response.aread()
        except httpx.HTTPError as e:
            raise self._convert_error(response.request, e) from e
        error = error_from_status(response.status_code, response.text, model=model)
        logger.debug(f"{response.request.method} {response.request.url.path} failed: {error}")
        raise error

