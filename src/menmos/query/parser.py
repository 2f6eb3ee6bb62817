"""Parse decoded JSON into structured query expressions.

The parser fails closed: anything that is not exactly one of the known wire
shapes raises instead of being guessed at. Keys are checked in a fixed order
(``tag``, ``value``, ``key``, ``parent``, ``not``, ``and``, ``or``), so an
object carrying several of them is read as the first match.

``and``/``or`` bodies are JSON arrays of two or more expressions folded from
the left: ``{"and": [A, B, C]}`` parses to ``And(And(A, B), C)``, the same tree
``Expression().and_...`` calls in that order would build.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..errors import InvalidShapeError, UnknownExpressionError
from .expression import And, Expression, HasKey, KeyValue, Node, Not, Or, Parent, Tag


def _require_str(value: Any, field: str, path: str) -> str:
    if not isinstance(value, str):
        raise InvalidShapeError(f"{field} should be a string", path)
    return value


def _parse_fold(
    body: Any,
    operator: str,
    combine: Callable[[Node, Node], Node],
    path: str,
) -> Node:
    # Only a list is a runtime-sized sequence on the wire; tuples are the
    # fixed pair encoding and are rejected with everything else.
    if not isinstance(body, list):
        raise InvalidShapeError(f"{operator} must be a list of expressions", path)
    if len(body) < 2:
        raise InvalidShapeError(f"{operator} needs at least two expressions", path)

    nodes = [_parse_node(item, f"{path}[{i}]") for i, item in enumerate(body)]
    root = nodes[0]
    for node in nodes[1:]:
        root = combine(root, node)
    return root


def _parse_node(data: Any, path: str) -> Node:
    if not isinstance(data, Mapping):
        raise InvalidShapeError("expression should be an object", path)

    if "tag" in data:
        return Tag(_require_str(data["tag"], "tag", path))
    if "value" in data:
        if "key" not in data:
            raise InvalidShapeError("invalid key/value condition", path)
        key = _require_str(data["key"], "key", path)
        value = _require_str(data["value"], "value", path)
        return KeyValue(key, value)
    if "key" in data:
        return HasKey(_require_str(data["key"], "key", path))
    if "parent" in data:
        return Parent(_require_str(data["parent"], "parent", path))
    if "not" in data:
        return Not(_parse_node(data["not"], f"{path}.not"))
    if "and" in data:
        return _parse_fold(data["and"], "and", And, f"{path}.and")
    if "or" in data:
        return _parse_fold(data["or"], "or", Or, f"{path}.or")

    raise UnknownExpressionError(path)


def parse_node(data: Any) -> Node:
    """Parse a single expression object into its AST node."""
    try:
        return _parse_node(data, "$")
    except RecursionError:
        raise InvalidShapeError("expression nested too deeply") from None


def parse_expression(data: Any) -> Expression:
    """Parse a decoded JSON expression object into an ``Expression``.

    Raises:
        InvalidShapeError: A recognised key holds a value of the wrong shape, or
            the tree is nested deeper than the interpreter can recurse.
        UnknownExpressionError: An object has none of the known keys.
    """
    return Expression(parse_node(data))


__all__ = ["parse_node", "parse_expression"]
