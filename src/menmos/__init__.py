"""Python client for menmos blob-storage clusters."""

from .blob import AsyncRangeReader, AsyncResponseReader, Range, RangeReader, ResponseReader
from .client import AsyncMenmosClient, MenmosClient
from .errors import (
    BlobNotFoundError,
    ExpressionError,
    InvalidResponseError,
    InvalidShapeError,
    MenmosError,
    RedirectError,
    RedirectExpectedError,
    RedirectMalformedError,
    SerializationError,
    ShortReadError,
    TransportError,
    UnexpectedStatusError,
    UnknownExpressionError,
)
from .models import (
    BlobMeta,
    FacetResponse,
    Hit,
    QueryResponse,
    StorageNodeInfo,
)
from .query import (
    And,
    Expression,
    HasKey,
    KeyValue,
    Not,
    Or,
    Parent,
    Query,
    Tag,
    parse_expression,
)
from .version import VERSION

__version__ = VERSION

__all__ = [
    "MenmosClient",
    "AsyncMenmosClient",
    "Range",
    "RangeReader",
    "AsyncRangeReader",
    "ResponseReader",
    "AsyncResponseReader",
    "BlobMeta",
    "Hit",
    "FacetResponse",
    "QueryResponse",
    "StorageNodeInfo",
    "Expression",
    "Tag",
    "KeyValue",
    "HasKey",
    "Parent",
    "And",
    "Or",
    "Not",
    "Query",
    "parse_expression",
    "MenmosError",
    "TransportError",
    "RedirectError",
    "RedirectExpectedError",
    "RedirectMalformedError",
    "UnexpectedStatusError",
    "ShortReadError",
    "SerializationError",
    "InvalidResponseError",
    "BlobNotFoundError",
    "ExpressionError",
    "InvalidShapeError",
    "UnknownExpressionError",
]
