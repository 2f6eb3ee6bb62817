"""Shared plumbing for the sync and async menmos clients."""

from __future__ import annotations

from .config import DEFAULT_TIMEOUT, ClientConfig
from .iter_coroutine import iter_coroutine
from .redirect import resolve_redirect
from .response import decode_response, raise_for_status
from .transport import AsyncTransport, BaseTransport, BlockingTransport

__all__ = [
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "iter_coroutine",
    "raise_for_status",
    "decode_response",
    "resolve_redirect",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
]
