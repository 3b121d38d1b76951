"""Tests for mermaid_peg.syntax.engine: tree values, ordered choice and failure reporting."""

import pytest

from mermaid_peg.errors import GrammarContractError
from mermaid_peg.syntax.common import eof
from mermaid_peg.syntax.engine import (
    Failure,
    Forward,
    Grammar,
    Match,
    any_char,
    char_class,
    choice,
    literal,
    lookahead,
    lookahead_not,
    repeat,
    sequence,
)


def _match(rule, text):
    return Grammar("test", rule).match(text)


class TestTreeValues:
    def test_uncaptured_literal_yields_text(self):
        result = _match(literal("ab"), "ab")
        assert result == Match(tree="ab", end=2)

    def test_capture_yields_mapping(self):
        rule = literal("a").capture("x") + literal("b").capture("y")
        assert _match(rule, "ab").tree == {"x": "a", "y": "b"}

    def test_sequence_without_captures_yields_slice(self):
        rule = literal("a") + char_class("0-9").repeat(1) + literal("b")
        assert _match(rule, "a12b").tree == "a12b"

    def test_repeat_of_capture_yields_list(self):
        rule = char_class("a-z").capture("c").repeat()
        assert _match(rule, "abc").tree == [{"c": "a"}, {"c": "b"}, {"c": "c"}]

    def test_repeat_of_plain_rule_yields_text(self):
        assert _match(char_class("0-9").repeat(1), "123").tree == "123"

    def test_absent_optional_fills_fields_with_none(self):
        rule = literal("a").capture("x").maybe() + literal("b").capture("y")
        assert _match(rule, "b").tree == {"x": None, "y": "b"}

    def test_string_operands_are_coerced(self):
        rule = "(" + char_class("a-z").capture("name") + ")"
        assert _match(rule, "(q)").tree == {"name": "q"}

    def test_sequence_and_repeat_constructors(self):
        rule = sequence("a", repeat("b", 1))
        assert _match(rule, "abbb").tree == "abbb"

    def test_case_insensitive_literal_keeps_source_text(self):
        assert _match(literal("graph", ignore_case=True), "GRAPH").tree == "GRAPH"


class TestOrderedChoice:
    def test_longer_alternative_listed_first_wins(self):
        rule = choice(literal("-->"), literal("--")).capture("op") + eof
        assert _match(rule, "-->").tree == {"op": "-->"}

    def test_shorter_prefix_listed_first_commits(self):
        rule = choice(literal("--"), literal("-->")).capture("op") + eof
        assert isinstance(_match(rule, "-->"), Failure)

    def test_first_match_wins(self):
        rule = (literal("a").capture("first") | literal("a").capture("second")) + eof
        assert _match(rule, "a").tree == {"first": "a"}


class TestLookahead:
    def test_negative_lookahead_consumes_nothing(self):
        rule = lookahead_not(literal("x")) + any_char()
        assert _match(rule, "y").tree == "y"
        assert isinstance(_match(rule, "x"), Failure)

    def test_invert_operator(self):
        rule = (~literal("end") + any_char()).repeat(1)
        assert isinstance(_match(rule, "end"), Failure)

    def test_positive_lookahead_consumes_nothing(self):
        rule = literal("a").capture("a") + lookahead(literal("b")) + literal("b")
        assert _match(rule, "ab").tree == {"a": "a"}
        failure = _match(rule, "ac")
        assert failure == Failure(offset=1, expected=("'b'",))


class TestFailures:
    def test_failure_at_start(self):
        result = _match(literal("ab"), "ax")
        assert result == Failure(offset=0, expected=("'ab'",))

    def test_trailing_input_expects_end(self):
        result = _match(literal("a"), "ab")
        assert isinstance(result, Failure)
        assert result.offset == 1
        assert result.expected == ("end of input",)

    def test_furthest_failure_is_reported(self):
        rule = choice(literal("a") + literal("b") + literal("c"), literal("a") + literal("x"))
        result = _match(rule, "abz")
        assert result.offset == 2
        assert result.expected == ("'c'",)

    def test_failures_at_same_offset_accumulate(self):
        rule = literal("a") + (literal("b") | literal("c"))
        result = _match(rule, "az")
        assert result.offset == 1
        assert result.expected == ("'b'", "'c'")

    def test_label_replaces_inner_expectations(self):
        rule = (literal("b") | literal("c")).label("b or c letter")
        assert _match(rule, "z").expected == ("b or c letter",)

    def test_label_keeps_deeper_failure(self):
        rule = (literal("a") + literal("b")).label("ab pair")
        result = _match(rule, "ax")
        assert result.offset == 1
        assert result.expected == ("'b'",)

    def test_repeat_minimum(self):
        result = _match(char_class("0-9").repeat(1), "")
        assert isinstance(result, Failure)
        assert result.offset == 0

    def test_describe_limits_expectations(self):
        failure = Failure(offset=0, expected=("a", "b", "c"))
        assert failure.describe() == "a or b or c"
        assert failure.describe(limit=2) == "a or b or ..."
        assert Failure(offset=0, expected=()).describe() == "valid input"


class TestRepetition:
    def test_zero_width_body_terminates(self):
        rule = literal("a").maybe().repeat()
        assert _match(rule, "") == Match(tree="", end=0)

    def test_zero_width_final_iteration_adds_no_item(self):
        item = literal("x").maybe().capture("v") + literal(",").maybe()
        rule = item.repeat(1).capture("items")
        assert _match(rule, "x,x").tree == {"items": [{"v": "x"}, {"v": "x"}]}
        assert _match(rule, "").tree == {"items": []}

    def test_max_bound(self):
        rule = literal("a").repeat(0, 2) + literal("a").capture("last")
        assert _match(rule, "aaa").tree == {"last": "a"}

    def test_bad_bounds_raise(self):
        with pytest.raises(GrammarContractError):
            literal("a").repeat(2, 1)


class TestForward:
    def test_recursive_rule(self):
        nested = Forward("nested")
        nested.define(literal("(") + nested.maybe() + literal(")"))
        assert isinstance(_match(nested, "((()))"), Match)
        assert isinstance(_match(nested, "(()"), Failure)

    def test_undefined_forward_raises(self):
        with pytest.raises(GrammarContractError):
            _match(Forward("missing"), "x")

    def test_undefined_forward_raises_when_grammar_is_built(self):
        with pytest.raises(GrammarContractError, match="never defined"):
            Grammar("t", literal("a") + Forward("missing"))

    def test_double_definition_raises(self):
        rule = Forward("twice").define("a")
        with pytest.raises(GrammarContractError):
            rule.define("b")


class TestContract:
    def test_empty_literal_rejected(self):
        with pytest.raises(GrammarContractError):
            literal("")

    def test_fields_mixed_with_uncaptured_repetition(self):
        rule = literal("a").capture("x") + literal("b").capture("y").repeat().label("bs") + literal("c")
        assert _match(rule + eof, "ac").tree == {"x": "a"}
        with pytest.raises(GrammarContractError):
            _match(rule, "abc")

    def test_grammar_is_reusable(self):
        grammar = Grammar("digits", char_class("0-9").repeat(1))
        assert grammar.match("12").tree == "12"
        assert isinstance(grammar.match("x"), Failure)
        assert grammar.match("345").tree == "345"

    def test_matching_leaves_rules_unchanged(self):
        items = literal("x").capture("v").repeat()
        tail = literal("y").capture("y").maybe()
        grammar = Grammar("t", items.capture("items") + tail)
        before = (dict(vars(items)), dict(vars(tail)))
        assert grammar.match("xx").tree == {"items": [{"v": "x"}, {"v": "x"}], "y": None}
        assert (vars(items), vars(tail)) == before
