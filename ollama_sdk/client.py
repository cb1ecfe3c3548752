"""
High-level async client for an Ollama server.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from ollama_sdk import api
from ollama_sdk.api.base import parse_model
from ollama_sdk.builders import ChatBuilder, EmbedBuilder, GenerateBuilder
from ollama_sdk.config import ClientConfig
from ollama_sdk.models import (
    CreateProgress,
    LegacyEmbeddingRequest,
    LegacyEmbeddingResponse,
    ModelInfo,
    ModelList,
    PullProgress,
    RunningModels,
    VersionInfo,
)
from ollama_sdk.runtime import OllamaHttpClient, ServiceError
from ollama_sdk.streaming import CreateStream, PullStream


class OllamaClient:
    """Entry point for the Ollama API.

    Example:
        async with OllamaClient("http://localhost:11434") as client:
            reply = await client.chat().model("llama3.2").add_user_message("Hi").send()
            print(reply.content)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Create a client.

        Args:
            base_url: Server URL. Ignored when ``config`` is given.
            config: Full configuration. Defaults to one read from the
                environment.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ConfigError: If ``base_url`` is not a valid http(s) URL.
        """
        if config is None:
            config = ClientConfig.from_url(base_url) if base_url else ClientConfig.from_settings()
        self._config = config
        self._http = OllamaHttpClient(config, transport=transport)
        logger.debug(f"OllamaClient created for {config.base_url}")

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> "OllamaClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def health(self) -> bool:
        """Return True if the server answers ``GET /`` with a 2xx status."""
        try:
            response = await self._http.get("/")
        except ServiceError as e:
            logger.warning(f"Health check failed: {e}")
            return False
        return response.is_success

    async def version(self) -> VersionInfo:
        response = await self._http.get("api/version")
        await self._http.raise_for_status(response)
        return parse_model(response, VersionInfo)

    # Builders

    def generate(self) -> GenerateBuilder:
        return GenerateBuilder(self._http)

    def chat(self) -> ChatBuilder:
        return ChatBuilder(self._http)

    def embed(self) -> EmbedBuilder:
        return EmbedBuilder(self._http)

    async def embeddings(self, model: str, prompt: str) -> LegacyEmbeddingResponse:
        """Embed one prompt with the legacy ``/api/embeddings`` endpoint."""
        return await api.embed_legacy(self._http, LegacyEmbeddingRequest(model=model, prompt=prompt))

    # Model management

    async def list_models(self) -> ModelList:
        return await api.list_models(self._http)

    async def show_model(self, name: str) -> ModelInfo:
        return await api.show_model(self._http, name)

    async def pull_model(self, name: str, insecure: bool | None = None) -> PullProgress:
        return await api.pull_model(self._http, name, insecure=insecure)

    async def pull_model_stream(self, name: str, insecure: bool | None = None) -> PullStream:
        return await api.pull_model_stream(self._http, name, insecure=insecure)

    async def create_model(
        self, name: str, modelfile: str, quantize: str | None = None
    ) -> CreateProgress:
        return await api.create_model(self._http, name, modelfile, quantize=quantize)

    async def create_model_stream(
        self, name: str, modelfile: str, quantize: str | None = None
    ) -> CreateStream:
        return await api.create_model_stream(self._http, name, modelfile, quantize=quantize)

    async def copy_model(self, source: str, destination: str) -> None:
        await api.copy_model(self._http, source, destination)

    async def delete_model(self, name: str) -> None:
        await api.delete_model(self._http, name)

    async def list_running_models(self) -> RunningModels:
        return await api.list_running_models(self._http)

    # Blobs

    async def blob_exists(self, digest: str) -> bool:
        return await api.blob_exists(self._http, digest)

    async def create_blob(self, digest: str, data: bytes) -> None:
        await api.create_blob(self._http, digest, data)
