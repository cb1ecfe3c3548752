"""
Fluent builder for text completion requests.
"""

from __future__ import annotations

from typing import Any

from ollama_sdk.api import generate, generate_stream
from ollama_sdk.models import GenerateRequest, GenerateResponse, KeepAlive, ResponseFormat
from ollama_sdk.runtime import OllamaHttpClient
from ollama_sdk.streaming import GenerateStream

from .options_mixin import OptionsMixin


class GenerateBuilder(OptionsMixin):
    """Accumulates a ``GenerateRequest`` and sends it.

    Example:
        response = await (
            client.generate()
            .model("llama3.2")
            .prompt("Why is the sky blue?")
            .temperature(0.2)
            .send()
        )
    """

    def __init__(self, http: OllamaHttpClient):
        self._http = http
        self._request = GenerateRequest()
        self._options = None

    def _set(self, **values: Any) -> "GenerateBuilder":
        self._request = self._request.model_copy(update=values)
        return self

    def model(self, model: str) -> "GenerateBuilder":
        return self._set(model=model)

    def prompt(self, prompt: str) -> "GenerateBuilder":
        return self._set(prompt=prompt)

    def system(self, system: str) -> "GenerateBuilder":
        return self._set(system=system)

    def template(self, template: str) -> "GenerateBuilder":
        return self._set(template=template)

    def context(self, context: list[int]) -> "GenerateBuilder":
        """Continue from the ``context`` returned by an earlier response."""
        return self._set(context=list(context))

    def format(self, format: ResponseFormat | dict[str, Any]) -> "GenerateBuilder":
        """Request plain JSON output or output matching a JSON schema."""
        return self._set(format=format)

    def raw(self, raw: bool = True) -> "GenerateBuilder":
        """Skip the model's prompt template."""
        return self._set(raw=raw)

    def keep_alive(self, keep_alive: KeepAlive) -> "GenerateBuilder":
        return self._set(keep_alive=keep_alive)

    def images(self, images: list[str]) -> "GenerateBuilder":
        """Attach base64-encoded images for multimodal models."""
        return self._set(images=list(images))

    def build(self) -> GenerateRequest:
        return self._request.model_copy(update={"options": self._options})

    async def send(self) -> GenerateResponse:
        """Send with ``stream=false`` and return the whole response."""
        return await generate(self._http, self.build())

    async def stream(self) -> GenerateStream:
        """Send with ``stream=true`` and return the chunk stream."""
        return await generate_stream(self._http, self.build())
