"""
Shared helpers for the endpoint modules.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ollama_sdk.runtime import ErrorCode, OllamaHttpClient, TerminalError
from ollama_sdk.streaming import ChunkStream

M = TypeVar("M", bound=BaseModel)


def parse_model(response: httpx.Response, model_type: type[M]) -> M:
    """Parse a complete JSON response body.

    Raises:
        TerminalError: INVALID_RESPONSE if the body is not valid JSON of the
            expected shape.
    """
    try:
        return model_type.model_validate_json(response.content)
    except ValidationError as e:
        raise TerminalError(
            code=ErrorCode.INVALID_RESPONSE,
            message_safe=f"Invalid response format for {model_type.__name__}",
            message_debug=response.text[:500],
            cause=e,
            status=response.status_code,
        ) from e


async def post_json(
    http: OllamaHttpClient,
    path: str,
    payload: dict[str, Any],
    model: str | None = None,
) -> httpx.Response:
    """POST a JSON body and raise for a non-success status."""
    response = await http.post(path, json=payload)
    await http.raise_for_status(response, model=model)
    return response


async def open_stream(
    http: OllamaHttpClient,
    path: str,
    payload: dict[str, Any],
    chunk_type: type[M],
    model: str | None = None,
) -> ChunkStream[M]:
    """POST a JSON body and stream the NDJSON response.

    The status is checked before any chunk is decoded; a failed response
    is closed before its error is raised.

    Raises:
        ServiceError: For transport failures and non-success statuses.
    """
    response = await http.send_stream("POST", path, json=payload)
    if not response.is_success:
        try:
            await http.raise_for_status(response, model=model)
        finally:
            await response.aclose()
    return ChunkStream.from_response(response, chunk_type)
