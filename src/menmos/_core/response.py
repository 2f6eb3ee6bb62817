from __future__ import annotations

from typing import TypeVar

import httpx
from pydantic import BaseModel

from ..errors import InvalidResponseError, UnexpectedStatusError

_M = TypeVar("_M", bound=BaseModel)


def is_status_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def raise_for_status(response: httpx.Response) -> None:
    """Raise UnexpectedStatusError unless the response is 2xx."""
    if not is_status_success(response.status_code):
        request = response.request
        raise UnexpectedStatusError(request.method, str(request.url), response)


def decode_response(response: httpx.Response, model: type[_M]) -> _M:
    """Check the status of a terminal response and parse its JSON body."""
    raise_for_status(response)
    try:
        return model.model_validate(response.json())
    except ValueError as exc:
        # Covers both malformed JSON and pydantic.ValidationError.
        request = response.request
        raise InvalidResponseError(request.method, str(request.url), exc) from exc


__all__ = ["is_status_success", "raise_for_status", "decode_response"]
