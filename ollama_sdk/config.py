"""
Configuration for the Ollama client.

``Settings`` reads environment variables (and an optional ``.env`` file);
``ClientConfig`` is the immutable, validated configuration a client is built
from. ``ClientConfig.from_settings()`` bridges the two.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ollama_sdk.runtime.errors import ConfigError
from ollama_sdk.runtime.retry import RetryPolicy

SDK_VERSION = "0.1.0"

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_TIMEOUT = 120.0
DEFAULT_USER_AGENT = f"ollama-python-sdk/{SDK_VERSION}"


class Settings(BaseSettings):
    """
    Environment-driven defaults for the Ollama client.

    Environment variables are loaded from a .env file in the working
    directory and can be overridden by actual environment variables.
    """

    # Server
    OLLAMA_BASE_URL: str = DEFAULT_BASE_URL
    OLLAMA_TIMEOUT: float = DEFAULT_TIMEOUT
    OLLAMA_USER_AGENT: str = DEFAULT_USER_AGENT
    OLLAMA_FOLLOW_REDIRECTS: bool = True

    # Retry configuration (consumed by callers, see RetryPolicy)
    OLLAMA_MAX_RETRIES: int = 3
    OLLAMA_RETRY_DELAY: float = 1.0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


# Global settings instance
settings = Settings()  # type: ignore


class ClientConfig(BaseModel):
    """Validated, immutable configuration for an Ollama client.

    Attributes:
        base_url: Absolute http(s) URL of the Ollama server.
        timeout: Request timeout in seconds.
        user_agent: Value of the User-Agent header.
        retry_policy: Retry configuration exposed to callers.
        follow_redirects: Whether httpx follows redirects.
        max_redirects: Redirect limit when following.
        headers: Extra headers sent with every request.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)
    follow_redirects: bool = True
    max_redirects: int = 10
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid base URL {value!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid base URL {value!r}: expected an absolute http(s) URL")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @classmethod
    def from_url(cls, base_url: str, **overrides: Any) -> "ClientConfig":
        """Create a configuration for the given server URL.

        Args:
            base_url: Absolute http(s) URL of the Ollama server.
            **overrides: Any other ClientConfig field.

        Returns:
            A validated ClientConfig.

        Raises:
            ConfigError: If the URL or an override is invalid.
        """
        try:
            return cls(base_url=base_url, **overrides)
        except ValidationError as e:
            raise ConfigError(f"Invalid client configuration: {e.errors()[0]['msg']}", cause=e) from e

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ClientConfig":
        """Create a configuration from environment settings.

        Args:
            source: Settings to read. Defaults to the module-level ``settings``.

        Returns:
            A validated ClientConfig.

        Raises:
            ConfigError: If the environment holds an invalid value.
        """
        source = source or settings
        return cls.from_url(
            source.OLLAMA_BASE_URL,
            timeout=source.OLLAMA_TIMEOUT,
            user_agent=source.OLLAMA_USER_AGENT,
            follow_redirects=source.OLLAMA_FOLLOW_REDIRECTS,
            retry_policy=RetryPolicy.from_retries(
                source.OLLAMA_MAX_RETRIES, source.OLLAMA_RETRY_DELAY
            ),
        )

    def endpoint_url(self, path: str) -> str:
        """Build the full URL for an API path.

        Args:
            path: Request path (with or without leading slash).

        Returns:
            Full URL including base_url.
        """
        return f"{self.base_url}/{path.lstrip('/')}"

    def with_header(self, name: str, value: str) -> "ClientConfig":
        """Return a new config that also sends the given header."""
        return self.model_copy(update={"headers": {**self.headers, name: value}})

    def with_headers(self, **headers: str) -> "ClientConfig":
        """Return a new config with the given headers merged in."""
        return self.model_copy(update={"headers": {**self.headers, **headers}})

    def with_timeout(self, timeout: float) -> "ClientConfig":
        """Return a new config with a different timeout."""
        if timeout <= 0:
            raise ConfigError("timeout must be positive")
        return self.model_copy(update={"timeout": timeout})

    def with_retry_policy(self, policy: RetryPolicy) -> "ClientConfig":
        """Return a new config with a different retry policy."""
        return self.model_copy(update={"retry_policy": policy})
