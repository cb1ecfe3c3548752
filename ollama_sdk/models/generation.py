"""
Request and response models for ``/api/generate``.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict

from .common import KeepAlive, Options, ResponseFormat, Usage, tokens_per_second, usage_from_counts


class GenerateRequest(BaseModel):
    """Body of a text completion request."""

    model: str = ""
    prompt: str = ""
    stream: bool | None = None
    system: str | None = None
    template: str | None = None
    context: list[int] | None = None
    options: Options | None = None
    format: ResponseFormat | dict[str, Any] | None = None
    raw: bool | None = None
    keep_alive: KeepAlive | None = None
    images: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body with unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class GenerateResponse(BaseModel):
    """One line of a generate stream, or a whole non-streamed response.

    Only the terminal line (``done=True``) is guaranteed to carry the
    context and timing fields. Durations are in nanoseconds.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    response: str = ""
    done: bool = False
    context: list[int] | None = None
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None
    prompt_eval_duration: int | None = None
    eval_count: int | None = None
    eval_duration: int | None = None

    @property
    def text_delta(self) -> str:
        return self.response

    def finalize(self, text: str, earlier: Sequence["GenerateResponse"] = ()) -> "GenerateResponse":
        """Build the accumulated response from this terminal chunk."""
        return self.model_copy(update={"response": text, "done": True})

    @property
    def usage(self) -> Usage | None:
        """Token counts, available on the terminal chunk."""
        return usage_from_counts(self.prompt_eval_count, self.eval_count)

    @property
    def prompt_eval_rate(self) -> float | None:
        """Prompt tokens per second."""
        return tokens_per_second(self.prompt_eval_count, self.prompt_eval_duration)

    @property
    def eval_rate(self) -> float | None:
        """Generated tokens per second."""
        return tokens_per_second(self.eval_count, self.eval_duration)

    @property
    def total_rate(self) -> float | None:
        """Prompt plus generated tokens per second over the whole request."""
        if self.prompt_eval_count is None or self.eval_count is None:
            return None
        return tokens_per_second(self.prompt_eval_count + self.eval_count, self.total_duration)
