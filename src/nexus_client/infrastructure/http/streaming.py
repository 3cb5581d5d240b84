"""StreamDecoder - incremental decoding of data-framed responses

A streamed response is a sequence of newline-delimited lines. Lines of the
form ``data: <json>`` carry one frame each; ``data: [DONE]`` ends the stream.
Any other line is ignored.

Each chunk is split into lines on its own. A frame split across two chunks
is not reassembled: both halves fail to decode and are dropped.
"""

import inspect
import json
from collections.abc import AsyncIterator, Callable
from enum import Enum
from typing import Any

import httpx
from loguru import logger

from nexus_client.shared.exceptions import StreamError

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

FrameConsumer = Callable[[Any], Any]


class StreamState(Enum):
    OPEN = "open"
    DONE = "done"
    ERROR = "error"


class StreamDecoder:
    """Feeds decoded frames to a consumer as chunks arrive

    State machine: OPEN -> DONE on the sentinel or transport end,
    OPEN -> ERROR on a transport fault or an unreadable chunk. Once DONE,
    further chunks are ignored. A consumer that raises only loses the frame
    it was handed.
    """

    def __init__(self, on_frame: FrameConsumer) -> None:
        self._on_frame = on_frame
        self._state = StreamState.OPEN
        self.frames_decoded = 0
        self.frames_skipped = 0

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_done(self) -> bool:
        return self._state is StreamState.DONE

    async def feed(self, chunk: bytes | str) -> None:
        """Process one chunk, delivering every complete frame in order"""
        if self._state is not StreamState.OPEN:
            return

        if isinstance(chunk, (bytes, bytearray)):
            text = bytes(chunk).decode("utf-8", errors="replace")
        elif isinstance(chunk, str):
            text = chunk
        else:
            self._state = StreamState.ERROR
            raise StreamError(
                "Error parsing stream data",
                "STREAM_PARSE_ERROR",
                details={"chunk_type": type(chunk).__name__},
            )

        for line in text.split("\n"):
            line = line.rstrip("\r")
            if not line.strip() or not line.startswith(DATA_PREFIX):
                continue

            data = line[len(DATA_PREFIX) :]
            if data == DONE_SENTINEL:
                self._state = StreamState.DONE
                logger.debug(
                    f"Stream sentinel received after {self.frames_decoded} frames"
                )
                return

            try:
                frame = json.loads(data)
            except ValueError:
                self.frames_skipped += 1
                logger.debug(f"Skipping malformed frame: {data[:80]!r}")
                continue

            await self._deliver(frame)

    async def decode(self, chunks: AsyncIterator[bytes]) -> None:
        """Consume a chunk iterator until the sentinel or transport end

        Raises:
            StreamError: If the transport fails mid-stream or a chunk cannot
                be read
        """
        try:
            async for chunk in chunks:
                await self.feed(chunk)
                if self._state is not StreamState.OPEN:
                    break
        except StreamError:
            self._state = StreamState.ERROR
            raise
        except (httpx.HTTPError, httpx.StreamError, OSError) as e:
            self._state = StreamState.ERROR
            raise StreamError(
                "Stream error", "STREAM_ERROR", details={"error": str(e)}
            ) from e

        if self._state is StreamState.OPEN:
            self._state = StreamState.DONE
            logger.debug(
                f"Stream ended without sentinel after {self.frames_decoded} frames"
            )

    async def _deliver(self, frame: Any) -> None:
        try:
            result = self._on_frame(frame)
            if inspect.isawaitable(result):
                await result
        except Exception:
            self.frames_skipped += 1
            logger.exception("Stream frame consumer failed, frame skipped")
            return
        self.frames_decoded += 1
