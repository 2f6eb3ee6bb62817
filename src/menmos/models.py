"""Wire models for menmos requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BLOB_TYPE = "File"


class BlobMeta(BaseModel):
    """Metadata of a single blob.

    A client-side snapshot: it is sent on create/update and returned by
    queries, but never reconciled with the server automatically.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    blob_type: str = DEFAULT_BLOB_TYPE
    metadata: dict[str, str] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    parents: list[str] = Field(default_factory=list)
    size: int = Field(default=0, ge=0)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: list[str]) -> list[str]:
        return list(dict.fromkeys(tags))

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


class Hit(BaseModel):
    id: str
    meta: BlobMeta = Field(default_factory=BlobMeta)
    url: str | None = None


class FacetResponse(BaseModel):
    tags: dict[str, int] = Field(default_factory=dict)
    meta: dict[str, dict[str, int]] = Field(default_factory=dict)


class QueryResponse(BaseModel):
    count: int = 0
    total: int = 0
    hits: list[Hit] = Field(default_factory=list)
    facets: FacetResponse | None = None


class StorageNodeInfo(BaseModel):
    id: str
    port: int = 0
    size: int = 0
    available_space: int = 0


class ListStorageNodesResponse(BaseModel):
    storage_nodes: list[StorageNodeInfo] = Field(default_factory=list)


class GetMetadataResponse(BaseModel):
    meta: BlobMeta | None = None


class PushResponse(BaseModel):
    id: str


class MessageResponse(BaseModel):
    message: str = ""


class LoginResponse(BaseModel):
    token: str


__all__ = [
    "DEFAULT_BLOB_TYPE",
    "BlobMeta",
    "Hit",
    "FacetResponse",
    "QueryResponse",
    "StorageNodeInfo",
    "ListStorageNodesResponse",
    "GetMetadataResponse",
    "PushResponse",
    "MessageResponse",
    "LoginResponse",
]
