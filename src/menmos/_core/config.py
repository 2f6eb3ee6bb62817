"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..version import VERSION

DEFAULT_TIMEOUT = 60.0
USER_AGENT = f"menmos-py/{VERSION}"


@dataclass
class ClientConfig:
    """Connection settings for a menmos cluster."""

    host: str | None = None
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)

    def resolve_host(self) -> str:
        resolved = self.host or os.getenv("MENMOS_HOST")
        if not resolved:
            raise RuntimeError("Missing menmos host. Pass host=... or set MENMOS_HOST.")
        return resolved.rstrip("/")

    def resolve_token(self) -> str | None:
        return self.token or os.getenv("MENMOS_TOKEN") or None

    def get_auth_headers(self) -> dict[str, str]:
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        token = self.resolve_token()
        if token:
            headers["authorization"] = f"Bearer {token}"
        headers.update(self.headers)
        return headers

    def build_url(self, path: str) -> str:
        # Redirect targets are already absolute.
        if path.startswith(("http://", "https://")):
            return path
        return self.resolve_host() + "/" + path.lstrip("/")
