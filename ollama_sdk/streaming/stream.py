"""
Typed, pull-based chunk streams over NDJSON response bodies.
"""

from __future__ import annotations

from collections import deque
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Callable, Generic, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel

from ollama_sdk.models import ChatResponse, CreateProgress, GenerateResponse, PullProgress

from .aggregator import collect_response
from .decoder import DecodedItem, LineDecoder
from .errors import StreamError, TransportError

T = TypeVar("T", bound=BaseModel)


async def _line_buffers(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield each non-blank body line as UTF-8 bytes.

    Blank lines are keepalives, not chunks, and are skipped.
    """
    async for line in response.aiter_lines():
        if line.strip():
            yield line.encode("utf-8")


class ChunkStream(Generic[T]):
    """Single-consumer stream of decoded chunks.

    Nothing is read from the transport until the consumer asks for the next
    item. Error items are raised from ``next()`` but do not end the stream:
    a caller may catch a MalformedChunkError and keep pulling. A transport
    failure is reported once and then the stream is exhausted.

    Example:
        async with await client.generate().model("llama3").prompt("Hi").stream() as stream:
            async for chunk in stream:
                print(chunk.response, end="")
    """

    def __init__(
        self,
        buffers: AsyncIterable[bytes],
        chunk_type: type[T],
        on_close: Callable[[], Awaitable[Any]] | None = None,
    ):
        """Wrap a byte-buffer source.

        Args:
            buffers: Byte buffers in arrival order.
            chunk_type: Pydantic model each line is parsed as.
            on_close: Releases the underlying connection.
        """
        self.chunk_type = chunk_type
        self._decoder = LineDecoder(chunk_type)
        self._buffers = buffers.__aiter__()
        self._on_close = on_close
        self._pending: deque[DecodedItem] = deque()
        self._exhausted = False
        self._closed = False

    @classmethod
    def from_response(cls, response: httpx.Response, chunk_type: type[T]) -> "ChunkStream[T]":
        """Stream the body of an unread httpx response.

        httpx reassembles lines split across network reads, so each buffer
        handed to the decoder holds exactly one line. Closing the stream
        closes the response.
        """
        return cls(_line_buffers(response), chunk_type, on_close=response.aclose)

    @property
    def closed(self) -> bool:
        return self._closed

    async def _pull(self) -> bool:
        """Read one buffer from the transport into the pending queue.

        Returns:
            False once the source is exhausted.
        """
        try:
            buffer = await self._buffers.__anext__()
        except StopAsyncIteration:
            self._exhausted = True
            return False
        except (httpx.HTTPError, httpx.StreamError) as e:
            # Any httpx failure while reading the body ends the stream.
            logger.warning(f"{self.chunk_type.__name__} stream transport failure: {e!r}")
            self._exhausted = True
            self._pending.append(TransportError(e))
            return True
        self._pending.extend(self._decoder.decode(buffer))
        return True

    async def next_result(self) -> DecodedItem | None:
        """Advance one step without raising error items.

        Returns:
            The next chunk or StreamError, or None at end-of-stream.
        """
        while not self._pending:
            if self._closed or self._exhausted:
                await self.aclose()
                return None
            await self._pull()
        return self._pending.popleft()

    async def next(self) -> T | None:
        """Advance one step.

        Returns:
            The next chunk, or None at end-of-stream.

        Raises:
            StreamError: If the next item is an error. The stream may still
                be polled afterwards.
        """
        item = await self.next_result()
        if isinstance(item, StreamError):
            raise item
        return item

    async def results(self) -> AsyncIterator[DecodedItem]:
        """Iterate chunks and errors alike, without raising."""
        while True:
            item = await self.next_result()
            if item is None:
                return
            yield item

    def __aiter__(self) -> "ChunkStream[T]":
        return self

    async def __anext__(self) -> T:
        chunk = await self.next()
        if chunk is None:
            raise StopAsyncIteration
        return chunk

    async def collect_response(self) -> T:
        """Fold the whole stream into one response. See ``collect_response``."""
        return await collect_response(self)

    async def aclose(self) -> None:
        """Release the connection and discard anything not yet delivered."""
        if self._closed:
            return
        self._closed = True
        self._pending.clear()
        close_source = getattr(self._buffers, "aclose", None)
        try:
            if close_source is not None:
                await close_source()
        finally:
            if self._on_close is not None:
                await self._on_close()
            logger.debug(f"{self.chunk_type.__name__} stream closed")

    async def __aenter__(self) -> "ChunkStream[T]":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


GenerateStream = ChunkStream[GenerateResponse]
ChatStream = ChunkStream[ChatResponse]
PullStream = ChunkStream[PullProgress]
CreateStream = ChunkStream[CreateProgress]
