"""
Option shortcuts shared by the generate and chat builders.
"""

from __future__ import annotations

from typing import Any

from ollama_sdk.models import Options

# num_predict is a signed 32-bit integer on the server.
MAX_NUM_PREDICT = 2**31 - 1


class OptionsMixin:
    """Builds up an ``Options`` instance one field at a time."""

    _options: Options | None

    def _set_option(self, **values: Any):
        self._options = (self._options or Options()).merged(**values)
        return self

    def options(self, options: Options):
        """Replace all runtime options."""
        self._options = options
        return self

    def temperature(self, temperature: float):
        return self._set_option(temperature=temperature)

    def max_tokens(self, max_tokens: int):
        """Cap the number of generated tokens.

        Values above the server's limit saturate at ``MAX_NUM_PREDICT``.

        Raises:
            ValueError: If ``max_tokens`` is negative.
        """
        if max_tokens < 0:
            raise ValueError("max_tokens must be non-negative")
        return self._set_option(num_predict=min(max_tokens, MAX_NUM_PREDICT))

    def top_k(self, top_k: int):
        return self._set_option(top_k=top_k)

    def top_p(self, top_p: float):
        return self._set_option(top_p=top_p)
