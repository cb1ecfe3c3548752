"""
Fluent builder for batch embedding requests.
"""

from __future__ import annotations

from typing import Any

from ollama_sdk.api import embed
from ollama_sdk.models import EmbedInput, EmbedRequest, EmbedResponse, KeepAlive, Options
from ollama_sdk.runtime import OllamaHttpClient


class EmbedBuilder:
    def __init__(self, http: OllamaHttpClient):
        self._http = http
        self._request = EmbedRequest()

    def _set(self, **values: Any) -> "EmbedBuilder":
        self._request = self._request.model_copy(update=values)
        return self

    def model(self, model: str) -> "EmbedBuilder":
        return self._set(model=model)

    def input(self, input: EmbedInput) -> "EmbedBuilder":
        """A single string or a list of strings to embed."""
        return self._set(input=input if isinstance(input, str) else list(input))

    def options(self, options: Options) -> "EmbedBuilder":
        return self._set(options=options)

    def keep_alive(self, keep_alive: KeepAlive) -> "EmbedBuilder":
        return self._set(keep_alive=keep_alive)

    def truncate(self, truncate: bool = True) -> "EmbedBuilder":
        """Truncate inputs that exceed the model's context length."""
        return self._set(truncate=truncate)

    def build(self) -> EmbedRequest:
        return self._request

    async def send(self) -> EmbedResponse:
        return await embed(self._http, self._request)
