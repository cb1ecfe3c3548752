"""
Types shared by the generate, chat and embedding endpoints.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Duration string ("5m", "1h") or seconds; 0 unloads immediately, -1 keeps forever.
KeepAlive = Union[str, int]


class ResponseFormat(str, Enum):
    """Output format requested from the model."""

    TEXT = "text"
    JSON = "json"


class Options(BaseModel):
    """Model runtime options. Unset fields are left to the server's defaults."""

    num_predict: int | None = None
    seed: int | None = None
    temperature: float | None = None
    num_ctx: int | None = None
    top_k: int | None = None
    top_p: float | None = None
    tfs_z: float | None = None
    typical_p: float | None = None
    repeat_last_n: int | None = None
    repeat_penalty: float | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    mirostat: int | None = None
    mirostat_tau: float | None = None
    mirostat_eta: float | None = None
    penalize_newline: bool | None = None
    stop: list[str] | None = None
    numa: bool | None = None
    num_thread: int | None = None
    num_keep: int | None = None
    num_batch: int | None = None
    num_gpu: int | None = None
    main_gpu: int | None = None
    low_vram: bool | None = None
    f16_kv: bool | None = None
    logits_all: bool | None = None
    vocab_only: bool | None = None
    use_mmap: bool | None = None
    use_mlock: bool | None = None

    def merged(self, **values: Any) -> "Options":
        """Return a copy with the given options set."""
        return self.model_copy(update=values)


class ToolFunction(BaseModel):
    """Function definition offered to the model."""

    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class Tool(BaseModel):
    """A tool the model may call."""

    model_config = ConfigDict(populate_by_name=True)

    tool_type: str = Field(default="function", alias="type")
    function: ToolFunction

    @classmethod
    def from_function(
        cls, name: str, description: str, parameters: dict[str, Any] | None = None
    ) -> "Tool":
        return cls(function=ToolFunction(name=name, description=description, parameters=parameters or {}))


class FunctionCall(BaseModel):
    """A function invocation requested by the model.

    Some models send ``arguments`` as a JSON-encoded string. Such strings
    are decoded; blank or unparsable strings are kept verbatim.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: Any = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _decode_arguments(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip():
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value


class ToolCall(BaseModel):
    """A tool call emitted in an assistant message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    tool_type: str | None = Field(default=None, alias="type")
    function: FunctionCall


class Usage(BaseModel):
    """Token accounting."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


def usage_from_counts(prompt_eval_count: int | None, eval_count: int | None) -> Usage | None:
    if prompt_eval_count is None or eval_count is None:
        return None
    return Usage(
        prompt_tokens=prompt_eval_count,
        completion_tokens=eval_count,
        total_tokens=prompt_eval_count + eval_count,
    )


def tokens_per_second(count: int | None, duration_ns: int | None) -> float | None:
    """Throughput for a token count over a duration in nanoseconds."""
    if count is None or not duration_ns:
        return None
    return count / (duration_ns / 1e9)
