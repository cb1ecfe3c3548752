"""
Embedding endpoints: batch ``/api/embed`` and single-prompt
``/api/embeddings`` (deprecated by the server).
"""

from __future__ import annotations

from ollama_sdk.models import (
    EmbedRequest,
    EmbedResponse,
    LegacyEmbeddingRequest,
    LegacyEmbeddingResponse,
)
from ollama_sdk.runtime import OllamaHttpClient

from .base import parse_model, post_json


async def embed(http: OllamaHttpClient, request: EmbedRequest) -> EmbedResponse:
    response = await post_json(http, "api/embed", request.to_payload(), model=request.model)
    return parse_model(response, EmbedResponse)


async def embed_legacy(
    http: OllamaHttpClient, request: LegacyEmbeddingRequest
) -> LegacyEmbeddingResponse:
    response = await post_json(http, "api/embeddings", request.to_payload(), model=request.model)
    return parse_model(response, LegacyEmbeddingResponse)
