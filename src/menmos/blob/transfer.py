"""Blob uploads and mutations across the coordinator redirect.

Every mutation is two requests. The first goes to the coordinator, which
decides which storage node owns the blob and answers with a redirect; the
second carries the payload to that node. Nothing is committed by the first
request, so a failed second leg leaves no server-side state behind.

Blob metadata travels in the ``x-blob-meta`` header (base64 of the compact
JSON form) on both legs of a create/replace, because the coordinator only sees
the preliminary, body-less request.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, BinaryIO, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .._core.debug import debug
from .._core.redirect import resolve_redirect
from .._core.response import decode_response, raise_for_status
from ..errors import SerializationError
from ..models import BlobMeta, PushResponse
from .reader import blob_path

if TYPE_CHECKING:
    from .._core.transport import BaseTransport

META_HEADER = "x-blob-meta"
BODY_FIELD = "src"

BlobBody = Union[bytes, bytearray, memoryview, str, BinaryIO]


def coerce_meta(meta: BlobMeta | Mapping[str, Any]) -> BlobMeta:
    if isinstance(meta, BlobMeta):
        return meta
    try:
        return BlobMeta.model_validate(meta)
    except ValidationError as exc:
        raise SerializationError(f"invalid blob metadata: {exc}") from exc


def meta_payload(meta: BlobMeta | Mapping[str, Any]) -> dict[str, Any]:
    """JSON-ready dict of the metadata, as sent in request bodies."""
    try:
        return coerce_meta(meta).model_dump(mode="json")
    except PydanticSerializationError as exc:
        raise SerializationError(f"failed to serialize blob metadata: {exc}") from exc


def encode_meta_header(meta: BlobMeta | Mapping[str, Any]) -> str:
    """Encode metadata for the ``x-blob-meta`` header."""
    try:
        raw = coerce_meta(meta).model_dump_json()
    except PydanticSerializationError as exc:
        raise SerializationError(f"failed to serialize blob metadata: {exc}") from exc
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_meta_header(value: str) -> BlobMeta:
    try:
        return BlobMeta.model_validate_json(base64.b64decode(value, validate=True))
    except (ValueError, ValidationError) as exc:
        raise SerializationError(f"invalid {META_HEADER} header: {exc}") from exc


def multipart_files(body: BlobBody | None) -> dict[str, Any] | None:
    """Multipart form holding ``body`` in the single ``src`` field.

    File-like bodies are handed to httpx as-is and streamed in chunks by its
    multipart encoder instead of being read into memory first.
    """
    if body is None:
        return None
    if isinstance(body, str):
        body = body.encode("utf-8")
    elif isinstance(body, (bytearray, memoryview)):
        body = bytes(body)
    elif not isinstance(body, bytes) and not hasattr(body, "read"):
        raise SerializationError(
            "Body must be bytes, a string or a binary file-like object, "
            f"got {type(body).__name__}."
        )
    # No filename: the storage node expects a plain form field.
    return {BODY_FIELD: (None, body)}


async def push_blob(
    transport: BaseTransport,
    path: str,
    body: BlobBody | None,
    meta: BlobMeta | Mapping[str, Any],
) -> str:
    """Upload ``body`` and ``meta`` to ``path`` and return the blob id."""
    meta_header = encode_meta_header(meta)
    files = multipart_files(body)

    target = await resolve_redirect(transport, "POST", path, headers={META_HEADER: meta_header})

    response = await transport.send(
        "POST", target, files=files, headers={META_HEADER: meta_header}
    )
    blob_id = decode_response(response, PushResponse).id
    debug(f"pushed blob {blob_id} to {target}")
    return blob_id


async def create_blob(
    transport: BaseTransport,
    body: BlobBody | None,
    meta: BlobMeta | Mapping[str, Any],
) -> str:
    return await push_blob(transport, "/blob", body, meta)


async def update_blob(
    transport: BaseTransport,
    blob_id: str,
    body: BlobBody | None,
    meta: BlobMeta | Mapping[str, Any],
) -> None:
    await push_blob(transport, blob_path(blob_id), body, meta)


async def update_blob_meta(
    transport: BaseTransport,
    blob_id: str,
    meta: BlobMeta | Mapping[str, Any],
) -> None:
    """Replace a blob's metadata without touching its body."""
    payload = meta_payload(meta)
    path = blob_path(blob_id, "/metadata")

    target = await resolve_redirect(transport, "PUT", path, json=payload)

    response = await transport.send("PUT", target, json=payload)
    raise_for_status(response)
    debug(f"updated metadata of blob {blob_id}")


async def delete_blob(transport: BaseTransport, blob_id: str) -> None:
    target = await resolve_redirect(transport, "DELETE", blob_path(blob_id))

    response = await transport.send("DELETE", target)
    raise_for_status(response)
    debug(f"deleted blob {blob_id}")


__all__ = [
    "META_HEADER",
    "BODY_FIELD",
    "BlobBody",
    "coerce_meta",
    "meta_payload",
    "encode_meta_header",
    "decode_meta_header",
    "multipart_files",
    "push_blob",
    "create_blob",
    "update_blob",
    "update_blob_meta",
    "delete_blob",
]
