"""Readers over blob bodies.

``RangeReader`` serves a fixed, end-inclusive byte range with one range
request per read. The coordinator is asked for the blob's location again on
every read because a blob may move between storage nodes while it is being
consumed. Readers are forward-only and must not be shared between threads or
tasks; fetch disjoint ranges with separate readers to parallelise.

``ResponseReader`` wraps the streamed body of a whole-blob download.
"""

from __future__ import annotations

import io
from collections.abc import AsyncIterator, Iterator
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from .._core.debug import debug
from .._core.iter_coroutine import iter_coroutine
from .._core.redirect import resolve_redirect
from .._core.response import is_status_success
from ..errors import ShortReadError, TransportError, UnexpectedStatusError
from .types import Range

if TYPE_CHECKING:
    from .._core.transport import BaseTransport

DEFAULT_CHUNK_SIZE = 64 * 1024


def blob_path(blob_id: str, suffix: str = "") -> str:
    return f"/blob/{quote(blob_id, safe='')}{suffix}"


def _serves_segment(response: httpx.Response, cursor: int) -> bool:
    """Whether a node reply carries bytes starting at ``cursor``.

    A node that ignores ``Range`` answers 200 with the whole body, which only
    lines up with the requested segment when it starts at offset 0.
    """
    if response.status_code == 206:
        content_range = response.headers.get("content-range")
        if content_range is None:
            return True
        start = content_range.removeprefix("bytes ").split("-", 1)[0]
        return start.strip() == str(cursor)
    return is_status_success(response.status_code) and cursor == 0


async def read_segment(
    transport: BaseTransport,
    blob_id: str,
    cursor: int,
    range_end: int,
    size: int,
) -> bytes:
    """Fetch up to ``size`` bytes of a blob starting at ``cursor``.

    Returns ``b""`` once ``cursor`` is past ``range_end``.
    """
    if cursor > range_end or size == 0:
        return b""

    amount = min(size, range_end - cursor + 1)
    segment = Range(cursor, cursor + amount - 1)

    target = await resolve_redirect(transport, "GET", blob_path(blob_id))
    response = await transport.send(
        "GET", target, headers={"range": segment.header_value()}, stream=True
    )
    if not _serves_segment(response, cursor):
        await transport.close_response(response)
        request = response.request
        raise UnexpectedStatusError(request.method, str(request.url), response)

    data = await transport.read_prefix(response, amount)
    if len(data) < amount:
        raise ShortReadError(blob_id, amount, len(data))
    debug(f"read {segment.header_value()} of blob {blob_id}")
    return data[:amount]


async def open_blob_stream(transport: BaseTransport, blob_id: str) -> httpx.Response:
    """Resolve the blob's location and open a streamed GET of its whole body."""
    target = await resolve_redirect(transport, "GET", blob_path(blob_id))
    response = await transport.send("GET", target, stream=True)
    if not is_status_success(response.status_code):
        await transport.close_response(response)
        request = response.request
        raise UnexpectedStatusError(request.method, str(request.url), response)
    return response


class _RangeState:
    def __init__(self, transport: BaseTransport, blob_id: str, read_range: Range) -> None:
        self._transport = transport
        self.blob_id = blob_id
        self.cursor = read_range.start
        self.range_end = read_range.end

    @property
    def remaining(self) -> int:
        return max(0, self.range_end - self.cursor + 1)

    async def _next(self, size: int) -> bytes:
        data = await read_segment(self._transport, self.blob_id, self.cursor, self.range_end, size)
        self.cursor += len(data)
        return data


class RangeReader(_RangeState, io.RawIOBase):
    """Blocking reader over ``read_range`` of a blob."""

    def __init__(self, transport: BaseTransport, blob_id: str, read_range: Range) -> None:
        io.RawIOBase.__init__(self)
        _RangeState.__init__(self, transport, blob_id, read_range)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        view = memoryview(buffer).cast("B")
        data = iter_coroutine(self._next(len(view)))
        view[: len(data)] = data
        return len(data)

    def readall(self) -> bytes:
        return iter_coroutine(self._next(self.remaining))

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        while chunk := self.read(chunk_size):
            yield chunk


class AsyncRangeReader(_RangeState):
    """Async reader over ``read_range`` of a blob."""

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = self.remaining
        return await self._next(size)

    async def aclose(self) -> None:
        pass

    async def __aenter__(self) -> AsyncRangeReader:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def __aiter__(self) -> AsyncIterator[bytes]:
        while chunk := await self.read(DEFAULT_CHUNK_SIZE):
            yield chunk


class ResponseReader(io.RawIOBase):
    """Blocking reader over a streamed whole-blob response. Closing it closes the response."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__()
        self._response = response
        self._chunks = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        view = memoryview(buffer).cast("B")
        while not self._pending:
            try:
                chunk = next(self._chunks, None)
            except httpx.TransportError as exc:
                raise TransportError("GET", str(self._response.url), exc) from exc
            if chunk is None:
                return 0
            self._pending = chunk
        count = min(len(view), len(self._pending))
        view[:count] = self._pending[:count]
        self._pending = self._pending[count:]
        return count

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        while chunk := self.read(chunk_size):
            yield chunk

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


class AsyncResponseReader:
    """Async reader over a streamed whole-blob response."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._chunks = response.aiter_bytes()
        self._pending = b""
        self._exhausted = False

    async def _fill(self) -> bool:
        while not self._pending and not self._exhausted:
            try:
                self._pending = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
            except httpx.TransportError as exc:
                raise TransportError("GET", str(self._response.url), exc) from exc
        return bool(self._pending)

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            parts = [self._pending]
            self._pending = b""
            try:
                async for chunk in self._chunks:
                    parts.append(chunk)
            except httpx.TransportError as exc:
                raise TransportError("GET", str(self._response.url), exc) from exc
            self._exhausted = True
            return b"".join(parts)

        if not await self._fill():
            return b""
        data, self._pending = self._pending[:size], self._pending[size:]
        return data

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> AsyncResponseReader:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def __aiter__(self) -> AsyncIterator[bytes]:
        while chunk := await self.read(DEFAULT_CHUNK_SIZE):
            yield chunk


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "blob_path",
    "read_segment",
    "open_blob_stream",
    "RangeReader",
    "AsyncRangeReader",
    "ResponseReader",
    "AsyncResponseReader",
]
