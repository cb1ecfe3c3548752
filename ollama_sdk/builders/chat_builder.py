"""
Fluent builder for chat requests.
"""

from __future__ import annotations

from typing import Any

from ollama_sdk.api import chat, chat_stream
from ollama_sdk.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    KeepAlive,
    ResponseFormat,
    Tool,
    ToolChoice,
)
from ollama_sdk.runtime import OllamaHttpClient
from ollama_sdk.streaming import ChatStream

from .options_mixin import OptionsMixin


class ChatBuilder(OptionsMixin):
    """Accumulates a ``ChatRequest`` and sends it.

    Messages are kept in the order they are added.
    """

    def __init__(self, http: OllamaHttpClient):
        self._http = http
        self._request = ChatRequest()
        self._options = None

    def _set(self, **values: Any) -> "ChatBuilder":
        self._request = self._request.model_copy(update=values)
        return self

    def model(self, model: str) -> "ChatBuilder":
        return self._set(model=model)

    def add_message(self, message: ChatMessage) -> "ChatBuilder":
        return self._set(messages=[*self._request.messages, message])

    def add_system_message(self, content: str) -> "ChatBuilder":
        return self.add_message(ChatMessage.system(content))

    def add_user_message(self, content: str) -> "ChatBuilder":
        return self.add_message(ChatMessage.user(content))

    def add_assistant_message(self, content: str) -> "ChatBuilder":
        return self.add_message(ChatMessage.assistant(content))

    def add_user_message_with_images(self, content: str, images: list[str]) -> "ChatBuilder":
        return self.add_message(ChatMessage.user(content).with_images(images))

    def add_tool_message(self, content: str, tool_call_id: str) -> "ChatBuilder":
        return self.add_message(ChatMessage.tool(content, tool_call_id))

    def messages(self, messages: list[ChatMessage]) -> "ChatBuilder":
        """Replace the whole conversation."""
        return self._set(messages=list(messages))

    def format(self, format: ResponseFormat | dict[str, Any]) -> "ChatBuilder":
        return self._set(format=format)

    def keep_alive(self, keep_alive: KeepAlive) -> "ChatBuilder":
        return self._set(keep_alive=keep_alive)

    def tools(self, tools: list[Tool]) -> "ChatBuilder":
        return self._set(tools=list(tools))

    def add_tool(self, tool: Tool) -> "ChatBuilder":
        return self._set(tools=[*(self._request.tools or []), tool])

    def tool_choice(self, tool_choice: ToolChoice) -> "ChatBuilder":
        return self._set(tool_choice=tool_choice)

    def build(self) -> ChatRequest:
        return self._request.model_copy(update={"options": self._options})

    async def send(self) -> ChatResponse:
        """Send with ``stream=false`` and return the whole response."""
        return await chat(self._http, self.build())

    async def stream(self) -> ChatStream:
        """Send with ``stream=true`` and return the chunk stream."""
        return await chat_stream(self._http, self.build())
