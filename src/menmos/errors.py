from __future__ import annotations

import httpx


class MenmosError(Exception):
    def __init__(self, message: str = "") -> None:
        super().__init__(f"menmos: {message}" if message else "menmos: unknown error")


class TransportError(MenmosError):
    """The request never produced a response (connection, DNS, timeout...)."""

    def __init__(self, method: str, url: str, cause: Exception) -> None:
        super().__init__(f"{method} {url} - request failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class RedirectError(MenmosError):
    pass


class RedirectExpectedError(RedirectError):
    """The coordinator answered with something other than a temporary redirect."""

    def __init__(self, method: str, url: str, status_code: int) -> None:
        super().__init__(f"{method} {url} - expected redirect, got status {status_code}")
        self.method = method
        self.url = url
        self.status_code = status_code


class RedirectMalformedError(RedirectError):
    def __init__(self, method: str, url: str, location: str | None) -> None:
        if location is None:
            detail = "redirect has no Location header"
        else:
            detail = f"redirect Location {location!r} is not a valid URL"
        super().__init__(f"{method} {url} - {detail}")
        self.method = method
        self.url = url
        self.location = location


class UnexpectedStatusError(MenmosError):
    def __init__(self, method: str, url: str, response: httpx.Response) -> None:
        super().__init__(
            f"{method} {url} - unexpected status '{response.status_code} {response.reason_phrase}'"
        )
        self.method = method
        self.url = url
        self.response = response
        self.status_code = response.status_code


class ShortReadError(MenmosError):
    """A range request returned fewer bytes than the range width."""

    def __init__(self, blob_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"range read of blob '{blob_id}' returned incorrect amount of bytes: "
            f"expected {expected}, got {actual}"
        )
        self.blob_id = blob_id
        self.expected = expected
        self.actual = actual


class SerializationError(MenmosError):
    pass


class BlobNotFoundError(MenmosError):
    def __init__(self, blob_id: str) -> None:
        super().__init__(f"blob '{blob_id}' not found")
        self.blob_id = blob_id


class ExpressionError(MenmosError):
    """Base class for structured query parsing failures."""

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class InvalidShapeError(ExpressionError):
    pass


class UnknownExpressionError(ExpressionError):
    def __init__(self, path: str = "$") -> None:
        super().__init__("unknown expression", path)


class InvalidResponseError(MenmosError):
    """A 2xx response whose body does not have the expected JSON shape."""

    def __init__(self, method: str, url: str, cause: Exception) -> None:
        super().__init__(f"{method} {url} - failed to deserialize response: {cause}")
        self.method = method
        self.url = url
        self.cause = cause
