"""Coordinator redirect resolution.

The coordinator never serves blob bytes itself; it answers with a
``307 Temporary Redirect`` naming the storage node that does. Transports are
configured not to follow redirects so that the second hop can carry headers
and bodies that a generic redirect-follow would drop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from ..errors import RedirectExpectedError, RedirectMalformedError
from .debug import debug

if TYPE_CHECKING:
    from .transport import BaseTransport


def is_temporary_redirect(status_code: int) -> bool:
    return status_code == 307


def redirect_location(response: httpx.Response) -> str:
    """Extract the absolute redirect target from a coordinator response."""
    request = response.request
    method, url = request.method, str(request.url)

    if not is_temporary_redirect(response.status_code):
        raise RedirectExpectedError(method, url, response.status_code)

    location = response.headers.get("location")
    if not location:
        raise RedirectMalformedError(method, url, None)

    try:
        target = request.url.join(location)
    except httpx.InvalidURL as exc:
        raise RedirectMalformedError(method, url, location) from exc
    if target.scheme not in ("http", "https") or not target.host:
        raise RedirectMalformedError(method, url, location)

    return str(target)


async def resolve_redirect(
    transport: BaseTransport,
    method: str,
    path: str,
    *,
    json: Any | None = None,
    headers: dict[str, str] | None = None,
) -> str:
    """Send a request to the coordinator and return where it redirects to.

    The target is valid for exactly one follow-up request; callers resolve
    again for every logical operation.
    """
    response = await transport.send(method, path, json=json, headers=headers)
    target = redirect_location(response)
    debug(f"{method} {path} redirected to {target}")
    return target


__all__ = [
    "is_temporary_redirect",
    "redirect_location",
    "resolve_redirect",
]
