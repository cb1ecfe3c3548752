"""
Streaming layer: NDJSON decoding, typed chunk streams and aggregation.
"""

from .aggregator import AggregationState, StreamAggregator, StreamedResponse, collect_response
from .decoder import LineDecoder
from .errors import (
    EmptyChunkError,
    MalformedChunkError,
    StreamEndedWithoutTerminalError,
    StreamError,
    TransportError,
)
from .stream import ChatStream, ChunkStream, CreateStream, GenerateStream, PullStream

__all__ = [
    "AggregationState",
    "StreamAggregator",
    "StreamedResponse",
    "collect_response",
    "LineDecoder",
    "EmptyChunkError",
    "MalformedChunkError",
    "StreamEndedWithoutTerminalError",
    "StreamError",
    "TransportError",
    "ChatStream",
    "ChunkStream",
    "CreateStream",
    "GenerateStream",
    "PullStream",
]
