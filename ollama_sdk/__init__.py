"""
Typed async client for the Ollama HTTP API.
"""

from loguru import logger

from .client import OllamaClient
from .config import SDK_VERSION, ClientConfig, Settings, settings
from .logging import setup_logging
from .models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    EmbedRequest,
    EmbedResponse,
    GenerateRequest,
    GenerateResponse,
    MessageRole,
    Options,
    ResponseFormat,
    Tool,
    ToolCall,
)
from .runtime import (
    ConfigError,
    ErrorCode,
    ModelNotFoundError,
    RetryableError,
    RetryPolicy,
    ServerError,
    ServiceError,
    TerminalError,
)
from .streaming import ChunkStream, StreamError

__version__ = SDK_VERSION

# Library code stays quiet until the application calls setup_logging().
logger.disable("ollama_sdk")

__all__ = [
    "OllamaClient",
    "ClientConfig",
    "Settings",
    "settings",
    "setup_logging",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "EmbedRequest",
    "EmbedResponse",
    "GenerateRequest",
    "GenerateResponse",
    "MessageRole",
    "Options",
    "ResponseFormat",
    "Tool",
    "ToolCall",
    "ConfigError",
    "ErrorCode",
    "ModelNotFoundError",
    "RetryableError",
    "RetryPolicy",
    "ServerError",
    "ServiceError",
    "TerminalError",
    "ChunkStream",
    "StreamError",
    "__version__",
]
