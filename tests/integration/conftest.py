"""Fixtures for integration tests using respx mocking."""

from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio
import respx

from menmos._core import AsyncTransport, BlockingTransport, ClientConfig, iter_coroutine

HOST = "https://menmos.test"


@pytest.fixture
def api_mock():
    """A respx router shared by the coordinator and storage node routes."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client_config(mock_env_clear) -> ClientConfig:
    return ClientConfig(host=HOST, token="test-token")


@pytest.fixture
def sync_transport(client_config):
    transport = BlockingTransport(client_config)
    yield transport
    iter_coroutine(transport.close())


@pytest_asyncio.fixture
async def async_transport(client_config):
    transport = AsyncTransport(client_config)
    yield transport
    await transport.close()


@pytest.fixture
def range_server() -> Callable[[bytes], Callable[[httpx.Request], httpx.Response]]:
    """Build a storage node handler that honours ``Range: bytes=a-b`` headers."""

    def build(body: bytes) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            header = request.headers.get("range")
            if header is None:
                return httpx.Response(200, content=body)
            start, end = header.removeprefix("bytes=").split("-")
            return httpx.Response(
                206,
                content=body[int(start) : int(end) + 1],
                headers={"content-range": f"bytes {start}-{end}/{len(body)}"},
            )

        return handler

    return build


@pytest.fixture
def mock_blob_meta_response() -> dict:
    return {
        "meta": {
            "name": "report.pdf",
            "blob_type": "File",
            "metadata": {"owner": "alice"},
            "tags": ["reports"],
            "parents": [],
            "size": 256,
        }
    }


@pytest.fixture
def mock_query_response() -> dict:
    node = "https://node-1.menmos.test:8443"
    return {
        "count": 2,
        "total": 2,
        "hits": [
            {
                "id": "blob-1",
                "meta": {"name": "a.jpg", "blob_type": "File", "tags": ["photos"], "size": 10},
                "url": f"{node}/blob/blob-1?signature=s1",
            },
            {
                "id": "blob-2",
                "meta": {"name": "b.jpg", "blob_type": "File", "tags": ["photos"], "size": 20},
                "url": f"{node}/blob/blob-2?signature=s2",
            },
        ],
        "facets": {"tags": {"photos": 2}, "meta": {}},
    }
