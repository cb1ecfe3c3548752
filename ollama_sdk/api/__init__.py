"""Endpoint functions. Each takes an OllamaHttpClient as its first argument."""

from .blobs import blob_exists, create_blob
from .chat import chat, chat_stream
from .embeddings import embed, embed_legacy
from .generate import generate, generate_stream
from .models import (
    copy_model,
    create_model,
    create_model_stream,
    delete_model,
    list_models,
    list_running_models,
    pull_model,
    pull_model_stream,
    show_model,
)

__all__ = [
    "blob_exists",
    "create_blob",
    "chat",
    "chat_stream",
    "embed",
    "embed_legacy",
    "generate",
    "generate_stream",
    "copy_model",
    "create_model",
    "create_model_stream",
    "delete_model",
    "list_models",
    "list_running_models",
    "pull_model",
    "pull_model_stream",
    "show_model",
]
