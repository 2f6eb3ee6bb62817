from .reader import (
    AsyncRangeReader,
    AsyncResponseReader,
    RangeReader,
    ResponseReader,
    open_blob_stream,
    read_segment,
)
from .transfer import (
    META_HEADER,
    create_blob,
    decode_meta_header,
    delete_blob,
    encode_meta_header,
    push_blob,
    update_blob,
    update_blob_meta,
)
from .types import Range

__all__ = [
    "Range",
    "RangeReader",
    "AsyncRangeReader",
    "ResponseReader",
    "AsyncResponseReader",
    "open_blob_stream",
    "read_segment",
    "META_HEADER",
    "encode_meta_header",
    "decode_meta_header",
    "push_blob",
    "create_blob",
    "update_blob",
    "update_blob_meta",
    "delete_blob",
]
