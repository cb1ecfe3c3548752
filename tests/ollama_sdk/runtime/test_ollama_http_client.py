"""Unit tests for OllamaHttpClient."""

import json

import httpx
import pytest

from ollama_sdk.config import ClientConfig
from ollama_sdk.runtime.errors import (
    ErrorCode,
    ModelNotFoundError,
    RetryableError,
    ServerError,
)
from ollama_sdk.runtime.http_client import OllamaHttpClient


def make_client(handler, **config_overrides) -> OllamaHttpClient:
    config = ClientConfig.from_url("http://ollama.test:11434/", **config_overrides)
    return OllamaHttpClient(config, transport=httpx.MockTransport(handler))


def ok(request):
    return httpx.Response(200)


class TestOllamaHttpClientInit:
    """Tests for client initialization."""

    def test_base_url_from_config(self):
        """Should expose the config's base_url without a trailing slash."""
        client = make_client(ok)
        assert client.base_url == "http://ollama.test:11434"

    def test_builds_url_with_and_without_slash(self):
        """Should handle paths with or without a leading slash."""
        client = make_client(ok)
        assert client._build_url("/api/tags") == "http://ollama.test:11434/api/tags"
        assert client._build_url("api/tags") == "http://ollama.test:11434/api/tags"

    def test_default_headers(self):
        """Should combine User-Agent, Accept and configured headers."""
        client = make_client(
            ok,
            user_agent="test-agent/1.0",
            headers={"Authorization": "Bearer t"},
        )
        headers = client.default_headers()

        assert headers["User-Agent"] == "test-agent/1.0"
        assert headers["Accept"] == "application/json"
        assert headers["Authorization"] == "Bearer t"


class TestRequests:
    """Tests for request sending."""

    @pytest.mark.asyncio
    async def test_sends_default_headers(self):
        """Should send default and custom headers with every request."""
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"models": []})

        async with make_client(handler, headers={"X-Custom": "yes"}) as client:
            response = await client.get("/api/tags")

        assert response.status_code == 200
        assert seen["url"] == "http://ollama.test:11434/api/tags"
        assert seen["headers"]["Accept"] == "application/json"
        assert seen["headers"]["X-Custom"] == "yes"
        assert seen["headers"]["User-Agent"].startswith("ollama-python-sdk/")

    @pytest.mark.asyncio
    async def test_delete_with_json_body(self):
        """Should allow a JSON body on DELETE."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = request.content
            return httpx.Response(200)

        async with make_client(handler) as client:
            await client.delete("api/delete", json={"name": "m"})

        assert seen["method"] == "DELETE"
        assert json.loads(seen["body"]) == {"name": "m"}

    @pytest.mark.asyncio
    async def test_non_success_is_returned_not_raised(self):
        """Should leave status checking to the caller."""
        async with make_client(lambda request: httpx.Response(500)) as client:
            response = await client.get("/")
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        """Should release the pool once and tolerate a second close."""
        client = make_client(ok)
        await client.get("/")
        await client.close()
        await client.close()
        assert client._client is None


class TestErrorHandling:
    """Tests for transport error conversion."""

    @pytest.mark.asyncio
    async def test_timeout_becomes_retryable(self):
        """Should convert httpx timeouts to RetryableError(TIMEOUT)."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(RetryableError) as exc_info:
                await client.get("/api/tags")

        assert exc_info.value.code == ErrorCode.TIMEOUT
        assert exc_info.value.message_safe == "Request timeout"
        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_connect_error_becomes_network_error(self):
        """Should convert connection failures to RetryableError(NETWORK_ERROR)."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(RetryableError) as exc_info:
                await client.get("/")

        assert exc_info.value.code == ErrorCode.NETWORK_ERROR
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_raise_for_status_passes_success(self):
        """Should not raise for a 2xx response."""
        async with make_client(lambda request: httpx.Response(204)) as client:
            response = await client.get("/")
            await client.raise_for_status(response)

    @pytest.mark.asyncio
    async def test_raise_for_status_maps_404_with_model(self):
        """Should raise ModelNotFoundError for a 404 naming a model."""

        def handler(request):
            return httpx.Response(404, json={"error": "model 'x' not found"})

        async with make_client(handler) as client:
            response = await client.post("api/show", json={"name": "x"})
            with pytest.raises(ModelNotFoundError) as exc_info:
                await client.raise_for_status(response, model="x")

        assert exc_info.value.model == "x"

    @pytest.mark.asyncio
    async def test_raise_for_status_reads_streamed_body(self):
        """Should read an unread streamed body before classifying it."""

        def handler(request):
            return httpx.Response(500, json={"error": "boom"})

        async with make_client(handler) as client:
            response = await client.send_stream("POST", "api/generate", json={})
            with pytest.raises(ServerError) as exc_info:
                await client.raise_for_status(response)
            await response.aclose()

        assert exc_info.value.message_safe == "Server error: 500 - boom"

    @pytest.mark.asyncio
    async def test_raise_for_status_error_body_connection_drop(self):
        """Should convert a dropped connection while reading an error body."""
        dropped = httpx.ReadError("connection reset")

        async def body():
            yield b'{"error": '
            raise dropped

        def handler(request):
            return httpx.Response(500, content=body())

        async with make_client(handler) as client:
            response = await client.send_stream("POST", "api/generate", json={})
            with pytest.raises(RetryableError) as exc_info:
                await client.raise_for_status(response)
            await response.aclose()

        assert exc_info.value.code == ErrorCode.NETWORK_ERROR
        assert exc_info.value.cause is dropped

    @pytest.mark.asyncio
    async def test_raise_for_status_error_body_timeout(self):
        """Should convert a timeout while reading an error body."""

        async def body():
            yield b"partial"
            raise httpx.ReadTimeout("timed out")

        def handler(request):
            return httpx.Response(503, content=body())

        async with make_client(handler) as client:
            response = await client.send_stream("POST", "api/chat", json={})
            with pytest.raises(RetryableError) as exc_info:
                await client.raise_for_status(response, model="llama3")
            await response.aclose()

        assert exc_info.value.code == ErrorCode.TIMEOUT
