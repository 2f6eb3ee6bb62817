"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest

from menmos.models import BlobMeta


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear menmos environment variables so tests never pick up real settings."""
    for var in ("MENMOS_HOST", "MENMOS_TOKEN", "DEBUG"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_token() -> str:
    return "test_token_123456789"


@pytest.fixture
def blob_meta() -> BlobMeta:
    return BlobMeta(
        name="report.pdf",
        blob_type="File",
        metadata={"owner": "alice", "project": "atlas"},
        tags=["reports", "q3"],
        parents=["folder-1"],
        size=4,
    )
