"""
Blob endpoints (``/api/blobs/<digest>``), used to upload model files
before a create.
"""

from __future__ import annotations

from ollama_sdk.runtime import OllamaHttpClient, ServerError


def _blob_path(digest: str) -> str:
    return f"api/blobs/{digest}"


async def blob_exists(http: OllamaHttpClient, digest: str) -> bool:
    """Check whether the server already has a blob.

    Raises:
        ServerError: For any status other than 200 or 404.
    """
    response = await http.head(_blob_path(digest))
    if response.status_code == 200:
        return True
    if response.status_code == 404:
        return False
    raise ServerError(response.status_code, "Blob check failed")


async def create_blob(http: OllamaHttpClient, digest: str, data: bytes) -> None:
    """Upload a blob. The server verifies ``data`` against ``digest``."""
    response = await http.put(
        _blob_path(digest),
        content=data,
        headers={"Content-Type": "application/octet-stream"},
    )
    await http.raise_for_status(response)
