"""Menmos clients.

``MenmosClient`` and ``AsyncMenmosClient`` share their logic through
``BaseMenmosClient``, whose methods are coroutines. The blocking client runs
them over a ``BlockingTransport`` that never suspends, so each call completes
in a single ``iter_coroutine`` step.

The only state a client keeps between calls is its auth token (fixed once the
client is built) and the transport's connection pool, so one client may serve
concurrent, independent calls. Readers returned by ``get_body`` hold per-call
state and belong to a single caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from ._core.config import DEFAULT_TIMEOUT, ClientConfig
from ._core.iter_coroutine import iter_coroutine
from ._core.response import decode_response
from ._core.transport import AsyncTransport, BaseTransport, BlockingTransport
from .blob import transfer
from .blob.reader import (
    AsyncRangeReader,
    AsyncResponseReader,
    RangeReader,
    ResponseReader,
    blob_path,
    open_blob_stream,
)
from .blob.transfer import BlobBody
from .blob.types import Range
from .errors import BlobNotFoundError, MenmosError
from .models import (
    BlobMeta,
    GetMetadataResponse,
    ListStorageNodesResponse,
    LoginResponse,
    MessageResponse,
    QueryResponse,
    StorageNodeInfo,
)
from .query.expression import Expression
from .query.query import Query

MetaLike = BlobMeta | Mapping[str, Any]


class BaseMenmosClient:
    """Async business logic shared by the sync and async clients."""

    def __init__(self, transport: BaseTransport, config: ClientConfig):
        self._transport = transport
        self._config = config
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise MenmosError("Client is closed")

    @property
    def host(self) -> str:
        return self._config.resolve_host()

    async def _authenticate(self, username: str, password: str) -> str:
        response = await self._transport.send(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        return decode_response(response, LoginResponse).token

    async def _health(self) -> str:
        self._ensure_open()
        response = await self._transport.send("GET", "/health")
        return decode_response(response, MessageResponse).message

    async def _query(self, query: Query | Expression | str | None) -> QueryResponse:
        self._ensure_open()
        if not isinstance(query, Query):
            query = Query(query)
        response = await self._transport.send("POST", "/query", json=query.to_dict())
        return decode_response(response, QueryResponse)

    async def _get_metadata(self, blob_id: str) -> BlobMeta:
        self._ensure_open()
        response = await self._transport.send("GET", blob_path(blob_id, "/metadata"))
        if response.status_code == 404:
            raise BlobNotFoundError(blob_id)
        meta = decode_response(response, GetMetadataResponse).meta
        if meta is None:
            raise BlobNotFoundError(blob_id)
        return meta

    async def _list_storage_nodes(self) -> list[StorageNodeInfo]:
        self._ensure_open()
        response = await self._transport.send("GET", "/node/storage")
        return decode_response(response, ListStorageNodesResponse).storage_nodes

    async def _open_blob(self, blob_id: str) -> httpx.Response:
        self._ensure_open()
        return await open_blob_stream(self._transport, blob_id)

    async def _create_blob(self, body: BlobBody | None, meta: MetaLike) -> str:
        self._ensure_open()
        return await transfer.create_blob(self._transport, body, meta)

    async def _update_blob(self, blob_id: str, body: BlobBody | None, meta: MetaLike) -> None:
        self._ensure_open()
        await transfer.update_blob(self._transport, blob_id, body, meta)

    async def _update_meta(self, blob_id: str, meta: MetaLike) -> None:
        self._ensure_open()
        await transfer.update_blob_meta(self._transport, blob_id, meta)

    async def _delete(self, blob_id: str) -> None:
        self._ensure_open()
        await transfer.delete_blob(self._transport, blob_id)


class MenmosClient(BaseMenmosClient):
    """Synchronous menmos client.

    Build it from a token (or ``MENMOS_TOKEN``), or log in with
    ``MenmosClient.connect(host, username, password)``.
    """

    def __init__(
        self,
        *,
        host: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ):
        config = ClientConfig(
            host=host,
            token=token,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            headers=dict(headers or {}),
        )
        super().__init__(BlockingTransport(config, client=client), config)

    @classmethod
    def connect(
        cls,
        host: str,
        username: str,
        password: str,
        *,
        timeout: float | None = None,
    ) -> MenmosClient:
        """Log in with a username and password and return an authenticated client."""
        client = cls(host=host, timeout=timeout)
        try:
            token = iter_coroutine(client._authenticate(username, password))
        except BaseException:
            client.close()
            raise
        client._config.token = token
        return client

    def health(self) -> str:
        return iter_coroutine(self._health())

    def query(self, query: Query | Expression | str | None = None) -> QueryResponse:
        return iter_coroutine(self._query(query))

    def get_metadata(self, blob_id: str) -> BlobMeta:
        return iter_coroutine(self._get_metadata(blob_id))

    def list_storage_nodes(self) -> list[StorageNodeInfo]:
        return iter_coroutine(self._list_storage_nodes())

    def get_body(
        self, blob_id: str, read_range: Range | None = None
    ) -> RangeReader | ResponseReader:
        """Open a reader over a blob's body, or over ``read_range`` of it.

        A range reader issues one range request per ``read``; a whole-body
        reader streams a single response and must be closed by the caller.
        """
        self._ensure_open()
        if read_range is not None:
            return RangeReader(self._transport, blob_id, read_range)
        return ResponseReader(iter_coroutine(self._open_blob(blob_id)))

    def create_blob(self, body: BlobBody | None, meta: MetaLike) -> str:
        """Create a blob and return its id. A ``None`` body creates an empty blob."""
        return iter_coroutine(self._create_blob(body, meta))

    def update_blob(self, blob_id: str, body: BlobBody | None, meta: MetaLike) -> None:
        """Replace both the body and the metadata of a blob."""
        iter_coroutine(self._update_blob(blob_id, body, meta))

    def update_meta(self, blob_id: str, meta: MetaLike) -> None:
        iter_coroutine(self._update_meta(blob_id, meta))

    def delete(self, blob_id: str) -> None:
        iter_coroutine(self._delete(blob_id))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        iter_coroutine(self._transport.close())

    def __enter__(self) -> MenmosClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncMenmosClient(BaseMenmosClient):
    """Asynchronous menmos client."""

    def __init__(
        self,
        *,
        host: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        config = ClientConfig(
            host=host,
            token=token,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            headers=dict(headers or {}),
        )
        super().__init__(AsyncTransport(config, client=client), config)

    @classmethod
    async def connect(
        cls,
        host: str,
        username: str,
        password: str,
        *,
        timeout: float | None = None,
    ) -> AsyncMenmosClient:
        client = cls(host=host, timeout=timeout)
        try:
            token = await client._authenticate(username, password)
        except BaseException:
            await client.close()
            raise
        client._config.token = token
        return client

    async def health(self) -> str:
        return await self._health()

    async def query(self, query: Query | Expression | str | None = None) -> QueryResponse:
        return await self._query(query)

    async def get_metadata(self, blob_id: str) -> BlobMeta:
        return await self._get_metadata(blob_id)

    async def list_storage_nodes(self) -> list[StorageNodeInfo]:
        return await self._list_storage_nodes()

    async def get_body(
        self, blob_id: str, read_range: Range | None = None
    ) -> AsyncRangeReader | AsyncResponseReader:
        self._ensure_open()
        if read_range is not None:
            return AsyncRangeReader(self._transport, blob_id, read_range)
        return AsyncResponseReader(await self._open_blob(blob_id))

    async def create_blob(self, body: BlobBody | None, meta: MetaLike) -> str:
        return await self._create_blob(body, meta)

    async def update_blob(self, blob_id: str, body: BlobBody | None, meta: MetaLike) -> None:
        await self._update_blob(blob_id, body, meta)

    async def update_meta(self, blob_id: str, meta: MetaLike) -> None:
        await self._update_meta(blob_id, meta)

    async def delete(self, blob_id: str) -> None:
        await self._delete(blob_id)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._transport.close()

    async def __aenter__(self) -> AsyncMenmosClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = ["BaseMenmosClient", "MenmosClient", "AsyncMenmosClient"]
