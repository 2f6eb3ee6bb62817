from __future__ import annotations

from typing import Any

from .expression import Expression

DEFAULT_QUERY_FROM = 0
DEFAULT_QUERY_SIZE = 20


class Query:
    """A query request.

    ``expression`` is either free text (``str``), a structured ``Expression``,
    or ``None`` to match every blob. The ``with_*`` setters return the query so
    calls can be chained::

        Query(Expression().and_tag("photos")).with_size(50).with_facets(True)
    """

    def __init__(
        self,
        expression: str | Expression | None = None,
        *,
        from_: int = DEFAULT_QUERY_FROM,
        size: int = DEFAULT_QUERY_SIZE,
        sign_urls: bool = True,
        facets: bool = False,
    ) -> None:
        if expression is not None and not isinstance(expression, (str, Expression)):
            raise TypeError(
                f"query expression must be a string or an Expression, got {type(expression).__name__}"
            )
        self.expression = expression
        self.from_ = _validate_from(from_)
        self.size = _validate_size(size)
        self.sign_urls = sign_urls
        self.facets = facets

    def with_from(self, from_: int) -> Query:
        self.from_ = _validate_from(from_)
        return self

    def with_size(self, size: int) -> Query:
        self.size = _validate_size(size)
        return self

    def with_sign_urls(self, sign_urls: bool) -> Query:
        self.sign_urls = sign_urls
        return self

    def with_facets(self, facets: bool) -> Query:
        self.facets = facets
        return self

    def is_structured(self) -> bool:
        return isinstance(self.expression, Expression)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "from": self.from_,
            "size": self.size,
            "sign_urls": self.sign_urls,
            "facets": self.facets,
        }
        if isinstance(self.expression, Expression):
            tree = self.expression.to_dict()
            if tree is not None:
                body["expression"] = tree
        elif self.expression is not None:
            body["expression"] = self.expression
        return body

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Query(expression={self.expression!r}, from_={self.from_}, size={self.size}, "
            f"sign_urls={self.sign_urls}, facets={self.facets})"
        )


def _validate_from(from_: int) -> int:
    if from_ < 0:
        raise ValueError(f"query 'from' must be non-negative, got {from_}")
    return from_


def _validate_size(size: int) -> int:
    if size <= 0:
        raise ValueError(f"query 'size' must be positive, got {size}")
    return size


__all__ = ["Query", "DEFAULT_QUERY_FROM", "DEFAULT_QUERY_SIZE"]
