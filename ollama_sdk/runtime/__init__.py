"""
HTTP runtime layer for ollama-sdk.

This package provides the shared request infrastructure:
- ServiceError: Standardized errors with retry semantics
- OllamaHttpClient: Pooled async HTTP client with default headers
- RetryPolicy: Retry configuration exposed to callers
"""

from .errors import (
    ConfigError,
    ErrorCode,
    ModelNotFoundError,
    RetryableError,
    ServerError,
    ServiceError,
    TerminalError,
    error_from_status,
)
from .http_client import OllamaHttpClient
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy

__all__ = [
    "ConfigError",
    "ErrorCode",
    "ModelNotFoundError",
    "RetryableError",
    "ServerError",
    "ServiceError",
    "TerminalError",
    "error_from_status",
    "OllamaHttpClient",
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
]
