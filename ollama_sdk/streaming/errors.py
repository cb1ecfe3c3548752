"""
Errors produced while decoding and aggregating a streamed response.

Request-level failures live in ``ollama_sdk.runtime.errors``. Once a stream
exists the request has succeeded, and only the four cases below remain.
"""

from __future__ import annotations


class StreamError(Exception):
    """Base class for stream decoding and aggregation failures.

    Attributes:
        code: Machine-readable error code.
        retryable: Whether re-issuing the request may succeed.
    """

    code = "STREAM_ERROR"
    retryable = False

    def __str__(self) -> str:
        return f"[{self.code}] {self.args[0] if self.args else ''}"


class TransportError(StreamError):
    """The connection failed while the body was being read."""

    code = "STREAM_TRANSPORT"
    retryable = True

    def __init__(self, cause: Exception):
        super().__init__(f"Transport failed mid-stream: {cause}")
        self.cause = cause


class MalformedChunkError(StreamError):
    """A line did not parse as the expected chunk type.

    Attributes:
        raw_line: The offending line, whitespace-trimmed.
        cause: The parser's exception.
    """

    code = "STREAM_MALFORMED"

    def __init__(self, raw_line: str, cause: Exception):
        super().__init__(f"Malformed chunk {raw_line[:200]!r}: {cause}")
        self.raw_line = raw_line
        self.cause = cause


class EmptyChunkError(StreamError):
    """A delivered buffer held nothing but whitespace."""

    code = "STREAM_EMPTY_CHUNK"

    def __init__(self):
        super().__init__("Received a buffer with no content")


class StreamEndedWithoutTerminalError(StreamError):
    """The stream ended before a chunk with ``done=True`` arrived."""

    code = "STREAM_ENDED_WITHOUT_TERMINAL"

    def __init__(self, chunks_seen: int = 0):
        super().__init__(f"Stream ended without a final response after {chunks_seen} chunk(s)")
        self.chunks_seen = chunks_seen
