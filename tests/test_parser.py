"""Tests for the Pratt parser."""

import pytest

from taskquery.exceptions import SearchError
from taskquery.models import (
    AndNode,
    NotNode,
    OrNode,
    PhraseNode,
    PrefixField,
    PrefixFilter,
    PropertyFilter,
    RangeFilter,
    TermNode,
)
from taskquery.search import parse_query
from taskquery.search.parser import RANGE_ERROR


def shape(node) -> str:
    """Compact rendering of an AST for structural assertions."""
    match node:
        case AndNode(children=children):
            return "and(" + ", ".join(shape(c) for c in children) + ")"
        case OrNode(children=children):
            return "or(" + ", ".join(shape(c) for c in children) + ")"
        case NotNode(child=child):
            return f"not({shape(child)})"
        case TermNode(value=value):
            return value
        case PhraseNode(value=value):
            return f'"{value}"'
        case PrefixFilter(field=field, value=value):
            return f"{field.value}:{value}"
        case RangeFilter(field=field, start=start, end=end):
            return f"{field.value}:{start}..{end}"
        case PropertyFilter():
            return f"[{node.value}]"
    raise AssertionError(node)


class TestTerms:
    """Single atoms."""

    def test_word(self):
        assert parse_query("meeting") == TermNode("meeting", 0)

    def test_phrase(self):
        assert parse_query('"star wars"') == PhraseNode("star wars", 0)

    def test_prefix_filter(self):
        """Prefix filters carry field, value and position."""
        assert parse_query("state:TODO") == PrefixFilter(PrefixField.STATE, "TODO", False, 0)

    def test_quoted_prefix_is_exact(self):
        assert parse_query('tag:"work"') == PrefixFilter(PrefixField.TAG, "work", True, 0)

    def test_property_filter(self):
        assert parse_query("[type:Project]") == PropertyFilter("type", "Project", False, 0)

    def test_property_key_only(self):
        assert parse_query("[status]") == PropertyFilter("status", None, False, 0)

    def test_property_quoted_value(self):
        node = parse_query('[type:"Big Project"]')
        assert node == PropertyFilter("type", "Big Project", True, 0)

    def test_date_range(self):
        """A range after a date prefix becomes a RangeFilter."""
        node = parse_query("scheduled:2024-01-01..2024-01-31")
        assert node == RangeFilter(PrefixField.SCHEDULED, "2024-01-01", "2024-01-31", 20)

    def test_deadline_range(self):
        node = parse_query("deadline:2024-01..2024-03")
        assert isinstance(node, RangeFilter)
        assert node.field is PrefixField.DEADLINE
        assert (node.start, node.end) == ("2024-01", "2024-03")


class TestPrecedence:
    """Operator binding and implicit AND."""

    def test_implicit_and(self):
        assert shape(parse_query("a b")) == "and(a, b)"

    def test_implicit_and_flattens(self):
        """Adjacent atoms join a single AND node."""
        assert shape(parse_query("a b c")) == "and(a, b, c)"

    def test_not_after_term(self):
        assert shape(parse_query("a -b")) == "and(a, not(b))"

    def test_leading_not(self):
        assert shape(parse_query("-a b")) == "and(not(a), b)"

    def test_not_group(self):
        assert shape(parse_query("-(a OR b)")) == "not(or(a, b))"

    def test_and_binds_tighter_than_or(self):
        assert shape(parse_query("a AND b OR c")) == "or(and(a, b), c)"
        assert shape(parse_query("a OR b AND c")) == "or(a, and(b, c))"

    def test_implicit_and_binds_looser_than_or(self):
        """Juxtaposition has the lowest binding power."""
        assert shape(parse_query("a OR b c")) == "and(or(a, b), c)"

    def test_lowercase_operators(self):
        assert shape(parse_query("a or b")) == "or(a, b)"

    def test_grouping(self):
        assert shape(parse_query("(a OR b) c")) == "and(or(a, b), c)"
        assert shape(parse_query("a (b OR c)")) == "and(a, or(b, c))"

    def test_nested_groups(self):
        assert shape(parse_query("((a))")) == "a"

    def test_prefix_filters_combine(self):
        assert shape(parse_query("state:TODO tag:work")) == "and(state:TODO, tag:work)"

    def test_negated_prefix(self):
        assert shape(parse_query("meeting -state:DONE")) == "and(meeting, not(state:DONE))"

    def test_property_with_text(self):
        assert shape(parse_query("meeting [type:Project]")) == "and(meeting, [type:Project])"

    def test_dashed_prefix_value(self):
        assert shape(parse_query("state:in-progress")) == "state:in-progress"


class TestErrors:
    """Malformed queries raise SearchError."""

    @pytest.mark.parametrize(
        ("query", "message"),
        [
            ("", "Unexpected end of expression"),
            ("meeting OR", "Unexpected end of expression"),
            ("a AND", "Unexpected end of expression"),
            ("-", "Unexpected end of expression"),
            ("(a OR b", "Expected closing parenthesis"),
            ("a )", "Unexpected token: )"),
            ("OR a", "Unexpected token: OR"),
            ("tag:", "Expected value after prefix"),
            ("scheduled:..2024", "Expected prefix value, got range"),
            ("tag:a..b", RANGE_ERROR),
            ("foo ..bar", RANGE_ERROR),
            ("scheduled:2024-01-01..", "Expected date value after range operator"),
        ],
    )
    def test_error_messages(self, query, message):
        with pytest.raises(SearchError) as exc_info:
            parse_query(query)
        assert exc_info.value.message == message

    def test_error_position(self):
        """Errors report the offset of the offending token."""
        with pytest.raises(SearchError) as exc_info:
            parse_query("a )")
        assert exc_info.value.position == 2

    def test_end_of_input_position(self):
        """End-of-input errors point just past the last token."""
        with pytest.raises(SearchError) as exc_info:
            parse_query("meeting OR")
        assert exc_info.value.position == 10

    def test_dashed_tag_range_is_rejected(self):
        """tag:foo-bar..baz tokenizes to a range on a non-date field."""
        with pytest.raises(SearchError, match="Range operator"):
            parse_query("tag:foo-bar..baz")


class TestDeterminism:
    """Parsing is a pure function of the query text."""

    @pytest.mark.parametrize(
        "query",
        [
            "a b -c",
            "(a OR b) AND state:TODO",
            'tag:"work" [status:Draft OR Published]',
            "scheduled:2024-01-01..2024-01-31 deadline:overdue",
        ],
    )
    def test_repeated_parse_is_equal(self, query):
        assert parse_query(query) == parse_query(query)
