"""Radar chart grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    eof,
    identifier,
    keyword,
    line_end,
    number,
    opt_spaces,
    quoted,
    spaces,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, choice, literal


class AxisItemTree(TypedDict):
    axis_id: str
    axis_label: str | None


class AxesTree(TypedDict):
    axes: list[Any]


class RadarValueTree(TypedDict):
    value_axis: str | None
    value: str


class CurveTree(TypedDict):
    curve: str
    curve_label: str | None
    values: list[Any]


class RadarTree(TypedDict):
    statements: list[Any]


OPTION_KEYWORDS: list[str] = ["ticks", "showLegend", "graticule", "min", "max"]


@cache
def grammar() -> Grammar:
    axis_item = identifier.capture("axis_id") + (literal("[") + quoted("axis_label") + literal("]")).maybe()
    axes = keyword("axis") + spaces + comma_list(axis_item).capture("axes") + line_end

    value = (identifier.capture("value_axis") + opt_spaces + literal(":") + opt_spaces).maybe() + number.capture("value")
    curve = (
        keyword("curve")
        + spaces
        + identifier.capture("curve")
        + (literal("[") + quoted("curve_label") + literal("]")).maybe()
        + opt_spaces
        + literal("{")
        + opt_spaces
        + comma_list(value).capture("values")
        + opt_spaces
        + literal("}").label("closing brace")
        + line_end
    )
    option = (
        choice(*(keyword(word) for word in OPTION_KEYWORDS)).capture("key")
        + spaces
        + text_until("%%", ";", name="option value").capture("value")
        + line_end
    )

    statement = title_line | accessibility | axes | curve | option
    header = keyword("radar-beta") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("radar", root)
