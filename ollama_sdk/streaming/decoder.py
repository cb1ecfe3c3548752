"""
Newline-delimited JSON decoder.

Turns one transport buffer into the chunks (or per-line errors) it contains.
Each buffer is decoded on its own: a line split across two buffers is not
reassembled here. ``ChunkStream.from_response`` feeds the decoder one line
at a time from ``httpx.Response.aiter_lines``.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import EmptyChunkError, MalformedChunkError, StreamError

T = TypeVar("T", bound=BaseModel)

DecodedItem = Union[T, StreamError]


class LineDecoder(Generic[T]):
    """Decodes NDJSON buffers into ``chunk_type`` instances.

    Example:
        decoder = LineDecoder(GenerateResponse)
        for item in decoder.decode(b'{"model":"m","response":"hi","done":true}\\n'):
            ...
    """

    def __init__(self, chunk_type: type[T]):
        self.chunk_type = chunk_type

    def decode(self, buffer: bytes) -> Iterator[DecodedItem]:
        """Decode one buffer.

        Invalid UTF-8 is replaced, never fatal. Blank lines are skipped.

        Args:
            buffer: Raw bytes as delivered by the transport.

        Yields:
            A parsed chunk per non-blank line, or a MalformedChunkError for a
            line that does not parse. A buffer with no non-blank line yields
            a single EmptyChunkError.
        """
        text = buffer.decode("utf-8", errors="replace")
        found_line = False
        for raw in text.split("\n"):
            line = raw.strip()
            if not line:
                continue
            found_line = True
            try:
                yield self.chunk_type.model_validate_json(line)
            except ValidationError as e:
                logger.warning(f"Malformed {self.chunk_type.__name__} line: {line[:200]!r}")
                yield MalformedChunkError(line, e)
        if not found_line:
            yield EmptyChunkError()
