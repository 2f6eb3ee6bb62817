"""Structured query expressions.

An expression is a tree of predicates over blob metadata. Leaves test a tag,
a metadata field, or a parent id; ``And``/``Or`` always combine exactly two
sub-expressions and ``Not`` negates one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Tag:
    """Matches blobs carrying the tag ``name``."""

    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.name}


@dataclass(frozen=True, slots=True)
class KeyValue:
    """Matches blobs whose metadata field ``key`` equals ``value``."""

    key: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True, slots=True)
class HasKey:
    """Matches blobs that have the metadata field ``key``, whatever its value."""

    key: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key}


@dataclass(frozen=True, slots=True)
class Parent:
    """Matches blobs listing ``id`` among their parents."""

    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"parent": self.id}


@dataclass(frozen=True, slots=True)
class And:
    left: Node
    right: Node

    def to_dict(self) -> dict[str, Any]:
        return {"and": [self.left.to_dict(), self.right.to_dict()]}


@dataclass(frozen=True, slots=True)
class Or:
    left: Node
    right: Node

    def to_dict(self) -> dict[str, Any]:
        return {"or": [self.left.to_dict(), self.right.to_dict()]}


@dataclass(frozen=True, slots=True)
class Not:
    inner: Node

    def to_dict(self) -> dict[str, Any]:
        return {"not": self.inner.to_dict()}


Node = Union[Tag, KeyValue, HasKey, Parent, And, Or, Not]


@dataclass(frozen=True, slots=True)
class Expression:
    """Fluent builder for structured queries.

    Every combinator returns a new expression. On an empty expression the new
    condition becomes the root; otherwise the current root becomes the left
    operand and the new condition the right operand of a fresh ``And``/``Or``::

        Expression().and_tag("a").and_has_key("b").or_parent("p")
        # Or(And(Tag("a"), HasKey("b")), Parent("p"))
    """

    root: Node | None = None

    def is_empty(self) -> bool:
        return self.root is None

    def to_dict(self) -> dict[str, Any] | None:
        """Wire shape of the expression, ``None`` when empty (match-all)."""
        if self.root is None:
            return None
        return self.root.to_dict()

    def _and(self, node: Node) -> Expression:
        if self.root is None:
            return Expression(node)
        return Expression(And(self.root, node))

    def _or(self, node: Node) -> Expression:
        if self.root is None:
            return Expression(node)
        return Expression(Or(self.root, node))

    def and_tag(self, tag: str) -> Expression:
        return self._and(Tag(tag))

    def and_key_value(self, key: str, value: str) -> Expression:
        return self._and(KeyValue(key, value))

    def and_has_key(self, key: str) -> Expression:
        return self._and(HasKey(key))

    def and_parent(self, parent_id: str) -> Expression:
        return self._and(Parent(parent_id))

    def or_tag(self, tag: str) -> Expression:
        return self._or(Tag(tag))

    def or_key_value(self, key: str, value: str) -> Expression:
        return self._or(KeyValue(key, value))

    def or_has_key(self, key: str) -> Expression:
        return self._or(HasKey(key))

    def or_parent(self, parent_id: str) -> Expression:
        return self._or(Parent(parent_id))


__all__ = ["Tag", "KeyValue", "HasKey", "Parent", "And", "Or", "Not", "Node", "Expression"]
