"""Transport layer for HTTP operations."""

from __future__ import annotations

import abc
from typing import Any

import httpx

from ..errors import TransportError
from .config import ClientConfig


class BaseTransport(abc.ABC):
    """Abstract transport with async interface.

    Redirects are never followed: the coordinator answers blob requests with a
    307 and callers issue the second hop themselves.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Request:
        request_headers = self.config.get_auth_headers()
        if headers:
            request_headers.update(headers)
        return client.build_request(
            method,
            self.config.build_url(path),
            json=json,
            files=files,
            headers=request_headers,
        )

    @abc.abstractmethod
    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response: ...

    @abc.abstractmethod
    async def read_prefix(self, response: httpx.Response, limit: int) -> bytes:
        """Read at most ``limit`` bytes of a streamed response body, then close it."""
        ...

    @abc.abstractmethod
    async def close_response(self, response: httpx.Response) -> None:
        """Release a response opened with stream=True."""
        ...

    @abc.abstractmethod
    async def close(self) -> None: ...


class BlockingTransport(BaseTransport):
    """Sync I/O transport. Methods are async def but don't suspend."""

    def __init__(self, config: ClientConfig, *, client: httpx.Client | None = None):
        super().__init__(config)
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=False,
            )
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response:
        client = self._get_client()
        request = self._build_request(
            client, method, path, json=json, files=files, headers=headers
        )
        try:
            return client.send(request, stream=stream, follow_redirects=False)
        except httpx.TransportError as exc:
            raise TransportError(method, str(request.url), exc) from exc

    async def read_prefix(self, response: httpx.Response, limit: int) -> bytes:
        buffer = bytearray()
        try:
            for chunk in response.iter_bytes():
                buffer += chunk
                if len(buffer) >= limit:
                    break
        except httpx.TransportError as exc:
            raise TransportError(response.request.method, str(response.request.url), exc) from exc
        finally:
            response.close()
        return bytes(buffer[:limit])

    async def close_response(self, response: httpx.Response) -> None:
        response.close()

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class AsyncTransport(BaseTransport):
    """Async I/O transport using httpx.AsyncClient."""

    def __init__(self, config: ClientConfig, *, client: httpx.AsyncClient | None = None):
        super().__init__(config)
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=False,
            )
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response:
        client = self._get_client()
        request = self._build_request(
            client, method, path, json=json, files=files, headers=headers
        )
        try:
            return await client.send(request, stream=stream, follow_redirects=False)
        except httpx.TransportError as exc:
            raise TransportError(method, str(request.url), exc) from exc

    async def read_prefix(self, response: httpx.Response, limit: int) -> bytes:
        buffer = bytearray()
        try:
            async for chunk in response.aiter_bytes():
                buffer += chunk
                if len(buffer) >= limit:
                    break
        except httpx.TransportError as exc:
            raise TransportError(response.request.method, str(response.request.url), exc) from exc
        finally:
            await response.aclose()
        return bytes(buffer[:limit])

    async def close_response(self, response: httpx.Response) -> None:
        await response.aclose()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
