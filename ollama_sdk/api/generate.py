"""
Text generation endpoint (``/api/generate``).
"""

from __future__ import annotations

from ollama_sdk.models import GenerateRequest, GenerateResponse
from ollama_sdk.runtime import OllamaHttpClient
from ollama_sdk.streaming import GenerateStream

from .base import open_stream, parse_model, post_json

GENERATE_PATH = "api/generate"


async def generate(http: OllamaHttpClient, request: GenerateRequest) -> GenerateResponse:
    """Generate a completion in one response."""
    request = request.model_copy(update={"stream": False})
    response = await post_json(http, GENERATE_PATH, request.to_payload(), model=request.model)
    return parse_model(response, GenerateResponse)


async def generate_stream(http: OllamaHttpClient, request: GenerateRequest) -> GenerateStream:
    """Generate a completion as a stream of chunks."""
    request = request.model_copy(update={"stream": True})
    return await open_stream(
        http, GENERATE_PATH, request.to_payload(), GenerateResponse, model=request.model
    )
