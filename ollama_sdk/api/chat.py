"""
Chat endpoint (``/api/chat``).
"""

from __future__ import annotations

from ollama_sdk.models import ChatRequest, ChatResponse
from ollama_sdk.runtime import OllamaHttpClient
from ollama_sdk.streaming import ChatStream

from .base import open_stream, parse_model, post_json

CHAT_PATH = "api/chat"


async def chat(http: OllamaHttpClient, request: ChatRequest) -> ChatResponse:
    """Send a conversation and receive the assistant's reply in one response."""
    request = request.model_copy(update={"stream": False})
    response = await post_json(http, CHAT_PATH, request.to_payload(), model=request.model)
    return parse_model(response, ChatResponse)


async def chat_stream(http: OllamaHttpClient, request: ChatRequest) -> ChatStream:
    """Send a conversation and stream the assistant's reply."""
    request = request.model_copy(update={"stream": True})
    return await open_stream(http, CHAT_PATH, request.to_payload(), ChatResponse, model=request.model)
