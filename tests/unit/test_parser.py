"""Tests for parsing decoded JSON into expressions."""

import json

import pytest

from menmos.errors import ExpressionError, InvalidShapeError, UnknownExpressionError
from menmos.query import (
    And,
    Expression,
    HasKey,
    KeyValue,
    Not,
    Or,
    Parent,
    Tag,
    parse_expression,
    parse_node,
)


class TestLeaves:
    @pytest.mark.parametrize(
        "src,expected",
        [
            ({"tag": "bing"}, Expression().and_tag("bing")),
            ({"key": "bing"}, Expression().and_has_key("bing")),
            ({"key": "bing", "value": "bong"}, Expression().and_key_value("bing", "bong")),
            ({"parent": "asdf"}, Expression().and_parent("asdf")),
        ],
        ids=["tag", "has_key", "key_value", "parent"],
    )
    def test_basic(self, src, expected):
        assert parse_expression(src) == expected

    @pytest.mark.parametrize(
        "src",
        [
            {"tag": 1},
            {"key": ["a"]},
            {"key": "k", "value": 3},
            {"key": None, "value": "v"},
            {"parent": {"id": "x"}},
        ],
    )
    def test_non_string_values_are_rejected(self, src):
        with pytest.raises(InvalidShapeError):
            parse_expression(src)

    def test_value_without_key_is_rejected(self):
        with pytest.raises(InvalidShapeError, match="invalid key/value condition"):
            parse_expression({"value": "v"})


class TestPriority:
    def test_tag_wins_over_everything(self):
        assert parse_node({"tag": "t", "key": "k", "parent": "p"}) == Tag("t")

    def test_value_selects_key_value_over_has_key(self):
        assert parse_node({"key": "k", "value": "v", "parent": "p"}) == KeyValue("k", "v")

    def test_key_wins_over_parent(self):
        assert parse_node({"key": "k", "parent": "p"}) == HasKey("k")

    def test_not_wins_over_and(self):
        node = parse_node({"not": {"tag": "a"}, "and": [{"tag": "b"}, {"tag": "c"}]})
        assert node == Not(Tag("a"))


class TestAndOr:
    def test_list_of_two(self):
        src = {"and": [{"tag": "bing"}, {"key": "bong"}]}
        assert parse_expression(src) == Expression().and_tag("bing").and_has_key("bong")

    def test_tuple_pair_is_rejected(self):
        src = {"and": ({"tag": "bing"}, {"key": "bong"})}
        with pytest.raises(InvalidShapeError, match="must be a list"):
            parse_expression(src)

    def test_or_tuple_pair_is_rejected(self):
        with pytest.raises(InvalidShapeError):
            parse_expression({"or": ({"tag": "a"}, {"tag": "b"})})

    def test_list_of_three_folds_left(self):
        src = {"and": [{"tag": "a"}, {"tag": "b"}, {"tag": "c"}]}
        assert parse_node(src) == And(And(Tag("a"), Tag("b")), Tag("c"))

    def test_or_list_folds_left(self):
        src = {"or": [{"tag": "a"}, {"key": "b"}, {"parent": "c"}, {"key": "d", "value": "e"}]}
        assert parse_node(src) == Or(
            Or(Or(Tag("a"), HasKey("b")), Parent("c")), KeyValue("d", "e")
        )

    def test_fold_matches_builder(self):
        src = {"and": [{"tag": "a"}, {"key": "b"}, {"parent": "c"}]}
        expected = Expression().and_tag("a").and_has_key("b").and_parent("c")
        assert parse_expression(src) == expected

    @pytest.mark.parametrize("body", [[], [{"tag": "a"}]], ids=["empty", "single"])
    def test_too_short_is_rejected(self, body):
        with pytest.raises(InvalidShapeError, match="at least two"):
            parse_expression({"and": body})

    @pytest.mark.parametrize("body", ["ab", {"tag": "a"}, None, 2])
    def test_non_list_is_rejected(self, body):
        with pytest.raises(InvalidShapeError):
            parse_expression({"or": body})

    def test_error_reports_path(self):
        with pytest.raises(InvalidShapeError) as exc_info:
            parse_expression({"and": [{"tag": "a"}, {"not": {"tag": 5}}]})
        assert exc_info.value.path == "$.and[1].not"


class TestFailures:
    def test_unknown_expression(self):
        with pytest.raises(UnknownExpressionError):
            parse_expression({"label": "x"})

    def test_unknown_nested_expression(self):
        with pytest.raises(UnknownExpressionError) as exc_info:
            parse_expression({"or": [{"tag": "a"}, {}]})
        assert exc_info.value.path == "$.or[1]"

    @pytest.mark.parametrize("src", ["tag", ["tag", "a"], None, 42])
    def test_non_object_is_rejected(self, src):
        with pytest.raises(InvalidShapeError, match="should be an object"):
            parse_expression(src)

    def test_deep_nesting_raises_shape_error(self):
        src: dict = {"tag": "a"}
        for _ in range(5000):
            src = {"not": src}

        with pytest.raises(InvalidShapeError, match="nested too deeply"):
            parse_expression(src)
        with pytest.raises(InvalidShapeError, match="nested too deeply"):
            parse_node(src)

    def test_moderate_nesting_parses(self):
        src: dict = {"tag": "a"}
        for _ in range(50):
            src = {"not": src}

        node = parse_node(src)
        for _ in range(50):
            assert isinstance(node, Not)
            node = node.inner
        assert node == Tag("a")

    def test_errors_share_a_base_class(self):
        with pytest.raises(ExpressionError):
            parse_expression({"nope": 1})
        with pytest.raises(ExpressionError):
            parse_expression({"not": "x"})


class TestRoundTrip:
    @pytest.mark.parametrize(
        "expr",
        [
            Expression().and_tag("a"),
            Expression().and_key_value("k", "v"),
            Expression().and_has_key("k"),
            Expression().and_parent("p"),
            Expression().and_tag("a").and_has_key("b"),
            Expression().or_tag("a").or_parent("b"),
            Expression(Not(Tag("a"))),
            Expression().and_tag("a").or_key_value("k", "v").and_parent("p"),
            Expression(And(Tag("a"), Or(HasKey("b"), Not(Parent("c"))))),
        ],
        ids=[
            "tag",
            "key_value",
            "has_key",
            "parent",
            "and",
            "or",
            "not",
            "left_deep",
            "right_nested",
        ],
    )
    def test_builder_tree_survives_json(self, expr):
        wire = json.loads(json.dumps(expr.to_dict()))
        assert parse_expression(wire) == expr
