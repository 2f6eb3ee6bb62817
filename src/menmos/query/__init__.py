from .expression import And, Expression, HasKey, KeyValue, Node, Not, Or, Parent, Tag
from .parser import parse_expression, parse_node
from .query import DEFAULT_QUERY_FROM, DEFAULT_QUERY_SIZE, Query

__all__ = [
    "Tag",
    "KeyValue",
    "HasKey",
    "Parent",
    "And",
    "Or",
    "Not",
    "Node",
    "Expression",
    "parse_expression",
    "parse_node",
    "Query",
    "DEFAULT_QUERY_FROM",
    "DEFAULT_QUERY_SIZE",
]
