"""Tests for StreamDecoder"""

import httpx
import pytest

from nexus_client.infrastructure.http.streaming import StreamDecoder, StreamState
from nexus_client.shared.exceptions import StreamError


async def _chunks(*chunks: bytes, consumed: list | None = None):
    for chunk in chunks:
        if consumed is not None:
            consumed.append(chunk)
        yield chunk


@pytest.mark.unit
@pytest.mark.asyncio
async def test_frames_delivered_in_order_until_sentinel():
    """Test frames before [DONE] are delivered and later chunks are skipped"""
    frames = []
    consumed = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(
        _chunks(
            b'data: {"a":1}\n',
            b'data: {"a":2}\ndata: [DONE]\n',
            b'data: {"a":3}\n',
            consumed=consumed,
        )
    )

    assert frames == [{"a": 1}, {"a": 2}]
    assert decoder.state is StreamState.DONE
    assert decoder.frames_decoded == 2
    assert len(consumed) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_lines_after_sentinel_in_same_chunk_are_ignored():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(_chunks(b'data: {"a":1}\ndata: [DONE]\ndata: {"a":2}\n'))

    assert frames == [{"a": 1}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_malformed_frame_is_skipped():
    """Test invalid JSON does not abort the stream"""
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(
        _chunks(
            b'data: {not json\ndata: {"b":1}\n',
            b'data: {"c":2}\n',
        )
    )

    assert frames == [{"b": 1}, {"c": 2}]
    assert decoder.frames_skipped == 1
    assert decoder.state is StreamState.DONE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_data_lines_are_ignored():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(
        _chunks(b'event: token\n: keepalive\n\nid: 7\ndata: {"t":"hi"}\n')
    )

    assert frames == [{"t": "hi"}]
    assert decoder.frames_skipped == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_crlf_line_endings():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(_chunks(b'data: {"a":1}\r\ndata: [DONE]\r\n'))

    assert frames == [{"a": 1}]
    assert decoder.is_done


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_end_without_sentinel_completes():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(_chunks(b'data: {"a":1}\n'))

    assert frames == [{"a": 1}]
    assert decoder.state is StreamState.DONE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_stream_completes():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(_chunks())

    assert frames == []
    assert decoder.is_done


@pytest.mark.unit
@pytest.mark.asyncio
async def test_frame_split_across_chunks_is_lost():
    """Test partial lines are not carried into the next chunk"""
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.decode(_chunks(b'data: {"a":', b'1}\ndata: {"b":2}\n'))

    assert frames == [{"b": 2}]
    assert decoder.frames_skipped == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_error_mid_stream():
    frames = []
    decoder = StreamDecoder(frames.append)

    async def failing_chunks():
        yield b'data: {"a":1}\n'
        raise httpx.ReadError("connection reset")

    with pytest.raises(StreamError) as exc_info:
        await decoder.decode(failing_chunks())

    assert exc_info.value.code == "STREAM_ERROR"
    assert isinstance(exc_info.value.__cause__, httpx.ReadError)
    assert decoder.state is StreamState.ERROR
    assert frames == [{"a": 1}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_consumer_is_awaited():
    frames = []

    async def consumer(frame):
        frames.append(frame)

    decoder = StreamDecoder(consumer)

    await decoder.decode(_chunks(b'data: {"a":1}\ndata: {"a":2}\n'))

    assert frames == [{"a": 1}, {"a": 2}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_consumer_failure_skips_only_that_frame():
    """Test a raising consumer loses one frame and the stream continues"""
    attempted = []

    def consumer(frame):
        attempted.append(frame)
        if frame == {"a": 1}:
            raise RuntimeError("consumer broke")

    decoder = StreamDecoder(consumer)

    await decoder.decode(
        _chunks(b'data: {"a":1}\ndata: {"a":2}\n', b'data: {"a":3}\n')
    )

    assert attempted == [{"a": 1}, {"a": 2}, {"a": 3}]
    assert decoder.frames_decoded == 2
    assert decoder.frames_skipped == 1
    assert decoder.state is StreamState.DONE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_consumer_failure_skips_frame():
    frames = []

    async def consumer(frame):
        if frame["n"] == 2:
            raise ValueError("bad frame")
        frames.append(frame)

    decoder = StreamDecoder(consumer)

    await decoder.decode(_chunks(b'data: {"n":1}\ndata: {"n":2}\ndata: {"n":3}\n'))

    assert frames == [{"n": 1}, {"n": 3}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unreadable_chunk_is_parse_error():
    decoder = StreamDecoder(lambda frame: None)

    with pytest.raises(StreamError) as exc_info:
        await decoder.decode(_chunks(b'data: {"a":1}\n', 42))

    assert exc_info.value.code == "STREAM_PARSE_ERROR"
    assert decoder.state is StreamState.ERROR
    assert decoder.frames_decoded == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_feed_after_done_is_ignored():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.feed(b"data: [DONE]\n")
    await decoder.feed(b'data: {"a":1}\n')

    assert frames == []
    assert decoder.is_done


@pytest.mark.unit
@pytest.mark.asyncio
async def test_feed_accepts_text():
    frames = []
    decoder = StreamDecoder(frames.append)

    await decoder.feed('data: {"msg":"café"}\n')

    assert frames == [{"msg": "café"}]
