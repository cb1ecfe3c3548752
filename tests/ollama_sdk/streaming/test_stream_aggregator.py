"""Unit tests for StreamAggregator and collect_response."""

import httpx
import pytest

from ollama_sdk.models import (
    ChatMessage,
    ChatResponse,
    CreateProgress,
    FunctionCall,
    GenerateResponse,
    PullProgress,
    ToolCall,
)
from ollama_sdk.streaming import (
    AggregationState,
    ChunkStream,
    EmptyChunkError,
    MalformedChunkError,
    StreamAggregator,
    StreamEndedWithoutTerminalError,
    TransportError,
    collect_response,
)


async def buffers(*items: bytes):
    for item in items:
        yield item


def chunk(text: str, done: bool = False, **fields) -> bytes:
    response = GenerateResponse(model="m", response=text, done=done, **fields)
    return response.model_dump_json(exclude_none=True).encode() + b"\n"


def generate_stream(*items: bytes) -> ChunkStream[GenerateResponse]:
    return ChunkStream(buffers(*items), GenerateResponse)


class ScriptedStream:
    """Stream double that returns chunks and raises error items in order."""

    def __init__(self, *items):
        self.items = list(items)
        self.closed = False

    async def next(self):
        if not self.items:
            return None
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self):
        self.closed = True


class TestStreamAggregator:
    """Tests for the aggregation state machine."""

    def test_starts_accumulating(self):
        """Should start in ACCUMULATING with no text."""
        aggregator = StreamAggregator()
        assert aggregator.state is AggregationState.ACCUMULATING
        assert aggregator.text_so_far == ""

    def test_push_accumulates_until_terminal(self):
        """Should complete on the terminal chunk with the joined text."""
        aggregator = StreamAggregator()

        assert aggregator.push(GenerateResponse(model="m", response="Hel")) is None
        assert aggregator.text_so_far == "Hel"

        result = aggregator.push(GenerateResponse(model="m", response="lo", done=True))

        assert result.response == "Hello"
        assert aggregator.state is AggregationState.COMPLETED
        assert aggregator.finish() is result
        assert aggregator.chunks_seen == 2

    def test_empty_delta_is_noop(self):
        """Should ignore chunks with empty text."""
        aggregator = StreamAggregator()
        aggregator.push(GenerateResponse(model="m", response="a"))
        aggregator.push(GenerateResponse(model="m", response=""))
        assert aggregator.text_so_far == "a"

    def test_fail_discards_partial_text(self):
        """Should drop partial text and re-raise the failure."""
        aggregator = StreamAggregator()
        aggregator.push(GenerateResponse(model="m", response="partial"))
        error = MalformedChunkError("x", ValueError("bad"))

        aggregator.fail(error)

        assert aggregator.state is AggregationState.FAILED
        assert aggregator.text_so_far == ""
        with pytest.raises(MalformedChunkError) as exc_info:
            aggregator.finish()
        assert exc_info.value is error

    def test_finish_without_terminal(self):
        """Should fail when no terminal chunk arrived."""
        aggregator = StreamAggregator()
        aggregator.push(GenerateResponse(model="m", response="a"))

        with pytest.raises(StreamEndedWithoutTerminalError) as exc_info:
            aggregator.finish()

        assert exc_info.value.chunks_seen == 1
        assert aggregator.state is AggregationState.FAILED

    def test_rejects_push_after_completion(self):
        """Should refuse chunks after completion."""
        aggregator = StreamAggregator()
        aggregator.push(GenerateResponse(model="m", done=True))

        with pytest.raises(RuntimeError):
            aggregator.push(GenerateResponse(model="m", response="late"))


class TestCollectResponse:
    """Tests for folding a whole stream."""

    @pytest.mark.asyncio
    async def test_hello_scenario(self):
        """Should fold two chunks into "Hello" with terminal metadata."""
        stream = generate_stream(
            b'{"model":"m","response":"Hel","done":false}\n',
            b'{"model":"m","response":"lo","done":true,"eval_count":2}\n',
        )

        result = await collect_response(stream)

        assert result.model == "m"
        assert result.response == "Hello"
        assert result.done is True
        assert result.eval_count == 2

    @pytest.mark.asyncio
    async def test_concatenates_in_arrival_order(self):
        """Should concatenate text in arrival order."""
        parts = ["The", " sky", "", " is", " blue", "."]
        items = [chunk(text) for text in parts[:-1]] + [chunk(parts[-1], done=True, eval_count=6)]

        result = await generate_stream(*items).collect_response()

        assert result.response == "".join(parts)
        assert result.eval_count == 6

    @pytest.mark.asyncio
    async def test_empty_stream(self):
        """Should fail on a stream with no chunks."""
        with pytest.raises(StreamEndedWithoutTerminalError) as exc_info:
            await collect_response(generate_stream())
        assert exc_info.value.chunks_seen == 0

    @pytest.mark.asyncio
    async def test_no_terminal_chunk(self):
        """Should fail when the stream ends before done."""
        with pytest.raises(StreamEndedWithoutTerminalError):
            await collect_response(generate_stream(chunk("a"), chunk("b")))

    @pytest.mark.asyncio
    async def test_error_before_terminal_aborts(self):
        """Should abort on the first malformed line and close the stream."""
        stream = generate_stream(chunk("a"), b"{bad\n", chunk("b", done=True))

        with pytest.raises(MalformedChunkError) as exc_info:
            await collect_response(stream)

        assert exc_info.value.raw_line == "{bad"
        assert stream.closed

    @pytest.mark.asyncio
    async def test_not_json_only(self):
        """Should report the raw line of a lone malformed chunk."""
        with pytest.raises(MalformedChunkError) as exc_info:
            await collect_response(generate_stream(b"not json\n"))
        assert exc_info.value.raw_line == "not json"

    @pytest.mark.asyncio
    async def test_stops_at_first_terminal(self):
        """Should stop reading at the first terminal chunk."""
        reads = []

        async def source():
            for item in (chunk("a", done=True), chunk("ignored", done=True)):
                reads.append(item)
                yield item

        stream = ChunkStream(source(), GenerateResponse)
        result = await collect_response(stream)

        assert result.response == "a"
        assert len(reads) == 1
        assert stream.closed

    @pytest.mark.asyncio
    async def test_chat_tool_calls_gathered(self):
        """Should keep chat tool calls from non-terminal chunks."""
        call = ToolCall(function=FunctionCall(name="get_weather", arguments={"city": "Paris"}))
        first = ChatResponse(
            model="m", message=ChatMessage.assistant("").with_tool_calls([call])
        ).model_dump_json(exclude_none=True, by_alias=True)
        last = ChatResponse(
            model="m", message=ChatMessage.assistant("Done"), done=True
        ).model_dump_json(exclude_none=True, by_alias=True)

        stream = ChunkStream(buffers(first.encode() + b"\n", last.encode() + b"\n"), ChatResponse)
        result = await stream.collect_response()

        assert result.content == "Done"
        assert result.tool_calls[0].function.name == "get_weather"
        assert result.tool_calls[0].function.arguments == {"city": "Paris"}

    @pytest.mark.asyncio
    async def test_transport_error_mid_stream(self):
        """Should raise the TransportError carrying the read failure and close the stream."""
        dropped = httpx.ReadError("connection reset")

        async def source():
            yield chunk("a")
            raise dropped

        stream = ChunkStream(source(), GenerateResponse)

        with pytest.raises(TransportError) as exc_info:
            await collect_response(stream)

        assert exc_info.value.cause is dropped
        assert stream.closed

    @pytest.mark.asyncio
    async def test_empty_chunk_mid_stream(self):
        """Should abort on a blank buffer between chunks."""
        stream = generate_stream(chunk("a"), b"\n", chunk("b", done=True))

        with pytest.raises(EmptyChunkError):
            await collect_response(stream)
        assert stream.closed

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            TransportError(httpx.ReadError("connection reset")),
            EmptyChunkError(),
        ],
    )
    async def test_propagates_same_error_object(self, error):
        """Should re-raise the exact error item the stream produced."""
        stream = ScriptedStream(GenerateResponse(model="m", response="a"), error)

        with pytest.raises(type(error)) as exc_info:
            await collect_response(stream)

        assert exc_info.value is error
        assert stream.closed


class TestCollectProgress:
    """Tests for folding pull and create progress streams."""

    @pytest.mark.asyncio
    async def test_pull_progress(self):
        """Should return the success status of a pull stream."""
        stream = ChunkStream(
            buffers(
                b'{"status":"pulling manifest"}\n',
                b'{"status":"downloading","digest":"sha256:abc","total":10,"completed":5}\n',
                b'{"status":"success"}\n',
            ),
            PullProgress,
        )

        result = await stream.collect_response()

        assert result.status == "success"
        assert result.is_complete
        assert stream.closed

    @pytest.mark.asyncio
    async def test_create_progress(self):
        """Should return the success status of a create stream."""
        stream = ChunkStream(
            buffers(b'{"status":"reading model metadata"}\n', b'{"status":"success"}\n'),
            CreateProgress,
        )

        result = await collect_response(stream)

        assert result.status == "success"

    @pytest.mark.asyncio
    async def test_pull_without_success(self):
        """Should fail when a pull stream ends before reporting success."""
        stream = ChunkStream(buffers(b'{"status":"pulling manifest"}\n'), PullProgress)

        with pytest.raises(StreamEndedWithoutTerminalError) as exc_info:
            await collect_response(stream)
        assert exc_info.value.chunks_seen == 1
