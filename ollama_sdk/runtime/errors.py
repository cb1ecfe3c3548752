"""
Service-level error model with retry semantics.

Errors raised by the request-issuing layer (HTTP status failures, transport
failures before a response exists, unparsable non-streaming bodies) are
classified here. Failures that happen while decoding a streamed body live in
``ollama_sdk.streaming.errors`` instead.
"""

from __future__ import annotations

import json
import uuid
from typing import Any


class ErrorCode:
    """Standard error codes for Ollama API failures."""

    # Network/connectivity
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"

    # Client configuration
    CONFIG_ERROR = "CONFIG_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Models
    MODEL_NOT_FOUND = "MODEL_NOT_FOUND"
    INVALID_MODEL_NAME = "INVALID_MODEL_NAME"
    MODEL_LOADING = "MODEL_LOADING"
    INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"

    # Server responses
    SERVER_ERROR = "SERVER_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    # Authentication/Authorization
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Rate limiting
    RATE_LIMITED = "RATE_LIMITED"

    # Internal
    INTERNAL_ERROR = "INTERNAL_ERROR"


_MODEL_UNAVAILABLE_CODES = frozenset({ErrorCode.MODEL_NOT_FOUND, ErrorCode.MODEL_LOADING})


class ServiceError(Exception):
    """Standardized Ollama API error with retry classification.

    ServiceError carries structured information about failures:
    - code: Machine-readable error code (e.g., "MODEL_NOT_FOUND")
    - message_safe: Human-readable message safe for logs/users
    - message_debug: Detailed debug info, such as a truncated response body
    - retryable: Whether the operation can be retried
    - cause: The underlying exception, if any
    - debug_id: Unique ID for log correlation
    - status: HTTP status code, when the error came from a response

    Attributes:
        code: Error code for programmatic handling.
        message_safe: Safe message for logging and user display.
        message_debug: Optional detailed message for debugging.
        retryable: Whether this error can be retried.
        cause: Optional underlying exception.
        debug_id: Unique identifier for log correlation.
        status: Optional HTTP status code.
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
        status: int | None = None,
    ):
        """Initialize a ServiceError.

        Args:
            code: Machine-readable error code.
            message_safe: Human-readable message safe for logs.
            message_debug: Optional detailed debug message.
            retryable: Whether the operation can be retried.
            cause: Optional underlying exception.
            debug_id: Optional correlation ID (auto-generated if None).
            status: Optional HTTP status code of the failed response.
        """
        super().__init__(message_safe)
        self.code = code
        self.message_safe = message_safe
        self.message_debug = message_debug
        self.retryable = retryable
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]
        self.status = status

    def __str__(self) -> str:
        """Return string representation."""
        return f"[{self.code}] {self.message_safe}"

    def __repr__(self) -> str:
        """Return detailed representation."""
        return (
            f"{type(self).__name__}(code={self.code!r}, "
            f"message_safe={self.message_safe!r}, "
            f"retryable={self.retryable}, "
            f"status={self.status!r}, "
            f"debug_id={self.debug_id!r})"
        )

    @property
    def status_code(self) -> int | None:
        """HTTP status code, if this error came from a server response."""
        return self.status

    @property
    def is_model_unavailable(self) -> bool:
        """Whether the error means the requested model cannot serve right now."""
        return self.code in _MODEL_UNAVAILABLE_CODES

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging.

        Returns:
            Dictionary with error details (excludes debug info).
        """
        data: dict[str, Any] = {
            "code": self.code,
            "message": self.message_safe,
            "debug_id": self.debug_id,
        }
        if self.status is not None:
            data["status"] = self.status
        return data


class RetryableError(ServiceError):
    """Error that indicates the operation can be retried.

    Use this for transient failures like:
    - Network timeouts and dropped connections
    - A model that is still loading
    - Server errors (5xx)
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
        status: int | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=True,
            cause=cause,
            debug_id=debug_id,
            status=status,
        )


class TerminalError(ServiceError):
    """Error that indicates the operation should not be retried.

    Use this for permanent failures like:
    - Invalid configuration or parameters
    - Authorization failures (401, 403)
    - Unknown models (404)
    - Response bodies that do not match the expected shape
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
        status: int | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
            status=status,
        )


class ConfigError(TerminalError):
    """Client configuration could not be built."""

    def __init__(self, message_safe: str, cause: Exception | None = None):
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message_safe=message_safe,
            cause=cause,
        )


class ModelNotFoundError(TerminalError):
    """The server does not know the requested model."""

    def __init__(self, model: str, message_debug: str | None = None):
        super().__init__(
            code=ErrorCode.MODEL_NOT_FOUND,
            message_safe=f"Model '{model}' not found",
            message_debug=message_debug,
            status=404,
        )
        self.model = model


class ServerError(ServiceError):
    """Non-success HTTP response. Retryable when the status is 5xx."""

    def __init__(self, status: int, message: str, message_debug: str | None = None):
        super().__init__(
            code=ErrorCode.SERVER_ERROR,
            message_safe=f"Server error: {status} - {message}",
            message_debug=message_debug,
            retryable=500 <= status <= 599,
            status=status,
        )


def extract_error_message(body: str) -> str:
    """Pull the human-readable message out of an Ollama error body.

    Ollama reports failures as ``{"error": "..."}``. Anything else is
    returned as-is, truncated.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return body[:500]
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return body[:500]


def error_from_status(status: int, body: str = "", model: str | None = None) -> ServiceError:
    """Map a non-success HTTP response to a ServiceError.

    Args:
        status: HTTP status code.
        body: Response body text (may be empty).
        model: Model named by the request, if any. Enables MODEL_NOT_FOUND
            for 404 responses.

    Returns:
        The classified error. Callers raise it.
    """
    message = extract_error_message(body) if body else ""
    debug = body[:500] if body else None

    if status == 401:
        return TerminalError(
            code=ErrorCode.UNAUTHORIZED,
            message_safe=f"Authentication failed: {message or 'unauthorized'}",
            message_debug=debug,
            status=status,
        )

    if status == 403:
        return TerminalError(
            code=ErrorCode.FORBIDDEN,
            message_safe=f"Authentication failed: {message or 'forbidden'}",
            message_debug=debug,
            status=status,
        )

    if status == 404 and model:
        return ModelNotFoundError(model, message_debug=debug)

    if status == 429:
        return TerminalError(
            code=ErrorCode.RATE_LIMITED,
            message_safe="Rate limit exceeded",
            message_debug=debug,
            status=status,
        )

    if status == 503 and "loading" in message.lower():
        return RetryableError(
            code=ErrorCode.MODEL_LOADING,
            message_safe=f"Model '{model or 'unknown'}' is currently loading, please try again",
            message_debug=debug,
            status=status,
        )

    return ServerError(status, message or f"Request failed with status {status}", debug)
