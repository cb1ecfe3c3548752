"""
Folds a chunk stream into one accumulated response.

The aggregator is all-or-nothing: it returns a response only after it has
seen a terminal chunk, and any error abandons whatever was accumulated.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Protocol, Sequence, TypeVar

from loguru import logger

from .errors import StreamEndedWithoutTerminalError, StreamError

if TYPE_CHECKING:
    from .stream import ChunkStream


class StreamedResponse(Protocol):
    """What a chunk type needs for aggregation."""

    done: bool

    @property
    def text_delta(self) -> str: ...

    def finalize(self, text: str, earlier: Sequence["StreamedResponse"]) -> "StreamedResponse": ...


R = TypeVar("R", bound=StreamedResponse)


class AggregationState(str, Enum):
    ACCUMULATING = "accumulating"
    COMPLETED = "completed"
    FAILED = "failed"


class StreamAggregator(Generic[R]):
    """State machine behind ``collect_response``.

    Starts in ACCUMULATING. ``push`` appends each chunk's text; the first
    terminal chunk moves it to COMPLETED with the finished response.
    ``fail`` moves it to FAILED and drops the accumulated text. Once out of
    ACCUMULATING the aggregator accepts nothing more.
    """

    def __init__(self) -> None:
        self.state = AggregationState.ACCUMULATING
        self.result: R | None = None
        self.error: StreamError | None = None
        self._parts: list[str] = []
        self._earlier: list[R] = []

    @property
    def text_so_far(self) -> str:
        return "".join(self._parts)

    @property
    def chunks_seen(self) -> int:
        return len(self._earlier) + (1 if self.result is not None else 0)

    def _require_accumulating(self) -> None:
        if self.state is not AggregationState.ACCUMULATING:
            raise RuntimeError(f"Aggregator is already {self.state.value}")

    def push(self, chunk: R) -> R | None:
        """Feed one chunk.

        Returns:
            The accumulated response if ``chunk`` was terminal, else None.
        """
        self._require_accumulating()
        self._parts.append(chunk.text_delta)
        if not chunk.done:
            self._earlier.append(chunk)
            return None

        self.result = chunk.finalize("".join(self._parts), self._earlier)
        self.state = AggregationState.COMPLETED
        self._parts.clear()
        return self.result

    def fail(self, error: StreamError) -> None:
        """Abandon aggregation because of ``error``."""
        self._require_accumulating()
        self.error = error
        self.state = AggregationState.FAILED
        self._parts.clear()
        self._earlier.clear()

    def finish(self) -> R:
        """Close out aggregation after the stream ran dry.

        Returns:
            The accumulated response.

        Raises:
            StreamError: The recorded error, or StreamEndedWithoutTerminalError
                if no terminal chunk was ever pushed.
        """
        if self.state is AggregationState.COMPLETED:
            return self.result  # type: ignore[return-value]
        if self.state is AggregationState.ACCUMULATING:
            self.fail(StreamEndedWithoutTerminalError(chunks_seen=len(self._earlier)))
        raise self.error  # type: ignore[misc]


async def collect_response(stream: "ChunkStream[R]") -> R:
    """Consume ``stream`` into a single accumulated response.

    Pulls until the first terminal chunk, then stops without reading any
    further and releases the stream. The stream cannot be reused afterwards.

    Args:
        stream: A fresh chunk stream of a type implementing StreamedResponse.

    Returns:
        The terminal chunk's metadata with the concatenated text of every
        chunk, in arrival order.

    Raises:
        StreamError: The first error item in the stream, or
            StreamEndedWithoutTerminalError.
    """
    aggregator: StreamAggregator[R] = StreamAggregator()
    try:
        while True:
            try:
                chunk = await stream.next()
            except StreamError as e:
                aggregator.fail(e)
                break
            if chunk is None:
                break
            if aggregator.push(chunk) is not None:
                break
    finally:
        await stream.aclose()

    if aggregator.state is AggregationState.ACCUMULATING:
        logger.warning(f"Stream ended without a terminal chunk after {aggregator.chunks_seen} chunk(s)")
    return aggregator.finish()
