"""
Model management endpoints: list, show, pull, create, copy, delete and
running models.
"""

from __future__ import annotations

from loguru import logger

from ollama_sdk.models import (
    CopyRequest,
    CreateProgress,
    CreateRequest,
    DeleteRequest,
    ModelInfo,
    ModelList,
    PullProgress,
    PullRequest,
    RunningModels,
    ShowRequest,
)
from ollama_sdk.runtime import OllamaHttpClient
from ollama_sdk.streaming import CreateStream, PullStream

from .base import open_stream, parse_model, post_json


async def list_models(http: OllamaHttpClient) -> ModelList:
    """List locally available models."""
    response = await http.get("api/tags")
    await http.raise_for_status(response)
    return parse_model(response, ModelList)


async def show_model(http: OllamaHttpClient, name: str, verbose: bool = False) -> ModelInfo:
    """Show a model's modelfile, template, parameters and details."""
    request = ShowRequest(name=name, verbose=verbose)
    response = await post_json(http, "api/show", request.model_dump(exclude_none=True), model=name)
    return parse_model(response, ModelInfo)


async def pull_model(http: OllamaHttpClient, name: str, insecure: bool | None = None) -> PullProgress:
    """Pull a model from the registry and wait for it to finish.

    Returns:
        The final status reported by the server.
    """
    request = PullRequest(name=name, stream=False, insecure=insecure)
    logger.info(f"Pulling model {name}")
    response = await post_json(http, "api/pull", request.model_dump(exclude_none=True))
    return parse_model(response, PullProgress)


async def pull_model_stream(
    http: OllamaHttpClient, name: str, insecure: bool | None = None
) -> PullStream:
    """Pull a model, streaming download progress."""
    request = PullRequest(name=name, stream=True, insecure=insecure)
    return await open_stream(http, "api/pull", request.model_dump(exclude_none=True), PullProgress)


async def create_model(
    http: OllamaHttpClient, name: str, modelfile: str, quantize: str | None = None
) -> CreateProgress:
    """Create a model from a modelfile and wait for it to finish."""
    request = CreateRequest(name=name, modelfile=modelfile, stream=False, quantize=quantize)
    logger.info(f"Creating model {name}")
    response = await post_json(http, "api/create", request.model_dump(exclude_none=True))
    return parse_model(response, CreateProgress)


async def create_model_stream(
    http: OllamaHttpClient, name: str, modelfile: str, quantize: str | None = None
) -> CreateStream:
    """Create a model from a modelfile, streaming progress."""
    request = CreateRequest(name=name, modelfile=modelfile, stream=True, quantize=quantize)
    return await open_stream(http, "api/create", request.model_dump(exclude_none=True), CreateProgress)


async def copy_model(http: OllamaHttpClient, source: str, destination: str) -> None:
    """Copy ``source`` to a new name."""
    request = CopyRequest(source=source, destination=destination)
    await post_json(http, "api/copy", request.model_dump(), model=source)


async def delete_model(http: OllamaHttpClient, name: str) -> None:
    """Delete a model and its data."""
    request = DeleteRequest(name=name)
    response = await http.delete("api/delete", json=request.model_dump())
    await http.raise_for_status(response, model=name)
    logger.info(f"Deleted model {name}")


async def list_running_models(http: OllamaHttpClient) -> RunningModels:
    """List models currently loaded into memory."""
    response = await http.get("api/ps")
    await http.raise_for_status(response)
    return parse_model(response, RunningModels)
