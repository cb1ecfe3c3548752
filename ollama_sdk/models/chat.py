"""
Request and response models for ``/api/chat``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from .common import (
    KeepAlive,
    Options,
    ResponseFormat,
    Tool,
    ToolCall,
    Usage,
    tokens_per_second,
    usage_from_counts,
)


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"

    def __str__(self) -> str:
        return self.value


class ChatMessage(BaseModel):
    """A single message in a conversation.

    In a chat stream each chunk carries one of these with only the
    incremental ``content``.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str = ""
    images: list[str] | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.ASSISTANT, content=content)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> "ChatMessage":
        return cls(role=MessageRole.TOOL, content=content, tool_call_id=tool_call_id)

    def with_images(self, images: list[str]) -> "ChatMessage":
        """Attach base64-encoded images."""
        return self.model_copy(update={"images": list(images)})

    def with_tool_calls(self, tool_calls: list[ToolCall]) -> "ChatMessage":
        return self.model_copy(update={"tool_calls": list(tool_calls)})


class FunctionChoice(BaseModel):
    name: str


class SpecificToolChoice(BaseModel):
    """Forces a call to one named function."""

    model_config = ConfigDict(populate_by_name=True)

    tool_type: str = Field(default="function", alias="type")
    function: FunctionChoice

    @classmethod
    def for_function(cls, name: str) -> "SpecificToolChoice":
        return cls(function=FunctionChoice(name=name))


# "auto", "none", "required", or a specific function
ToolChoice = Union[str, SpecificToolChoice]


class ChatRequest(BaseModel):
    """Body of a chat completion request."""

    model: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)
    stream: bool | None = None
    options: Options | None = None
    format: ResponseFormat | dict[str, Any] | None = None
    keep_alive: KeepAlive | None = None
    tools: list[Tool] | None = None
    tool_choice: ToolChoice | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body with unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class ChatResponse(BaseModel):
    """One line of a chat stream, or a whole non-streamed response.

    Only the terminal line (``done=True``) is guaranteed to carry the
    timing fields. Durations are in nanoseconds.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    message: ChatMessage
    done: bool = False
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None
    prompt_eval_duration: int | None = None
    eval_count: int | None = None
    eval_duration: int | None = None

    @property
    def content(self) -> str:
        return self.message.content

    @property
    def text_delta(self) -> str:
        return self.message.content

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.message.tool_calls)

    @property
    def tool_calls(self) -> list[ToolCall]:
        return list(self.message.tool_calls or [])

    @property
    def usage(self) -> Usage | None:
        return usage_from_counts(self.prompt_eval_count, self.eval_count)

    @property
    def eval_rate(self) -> float | None:
        """Generated tokens per second."""
        return tokens_per_second(self.eval_count, self.eval_duration)

    def finalize(self, text: str, earlier: Sequence["ChatResponse"] = ()) -> "ChatResponse":
        """Build the accumulated response from this terminal chunk.

        Role, images and tool_call_id come from this chunk. Tool calls are
        gathered from every chunk in arrival order, since the server may
        emit them before the terminal line.
        """
        tool_calls = [call for chunk in (*earlier, self) for call in chunk.message.tool_calls or []]
        message = self.message.model_copy(
            update={"content": text, "tool_calls": tool_calls or None}
        )
        return self.model_copy(update={"message": message, "done": True})
