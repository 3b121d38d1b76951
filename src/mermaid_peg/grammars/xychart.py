"""XY chart grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    eof,
    keyword,
    line_end,
    number,
    opt_spaces,
    quoted,
    quoted_string,
    spaces,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, literal, pattern


class CategoryTree(TypedDict):
    category: str


class ChartAxisTree(TypedDict):
    chart_axis: str
    axis_title: str | None
    categories: list[Any] | None
    range_min: str | None
    range_max: str | None


class SeriesTree(TypedDict):
    series: str
    series_title: str | None
    points: str


class XYChartTree(TypedDict):
    orientation: str | None
    statements: list[Any]


@cache
def grammar() -> Grammar:
    category = (quoted_string | text_until(",", "]", name="category")).capture("category")
    categories = opt_spaces + literal("[") + opt_spaces + comma_list(category).capture("categories") + literal("]")
    value_range = (
        opt_spaces
        + number.capture("range_min")
        + opt_spaces
        + literal("-->")
        + opt_spaces
        + number.capture("range_max")
    )
    axis_title = spaces + (quoted_string | pattern(r"[A-Za-z_][\w]*", "axis title")).capture("axis_title")
    axis = (
        (keyword("x-axis") | keyword("y-axis")).capture("chart_axis")
        + axis_title.maybe()
        + categories.maybe()
        + value_range.maybe()
        + line_end
    )
    series = (
        (keyword("line") | keyword("bar")).capture("series")
        + (spaces + quoted("series_title")).maybe()
        + opt_spaces
        + literal("[")
        + opt_spaces
        + comma_list(number).capture("points")
        + opt_spaces
        + literal("]").label("']'")
        + line_end
    )
    statement = title_line | accessibility | axis | series

    header = (
        keyword("xychart-beta")
        + (spaces + (keyword("horizontal") | keyword("vertical")).capture("orientation")).maybe()
        + line_end
    )
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("xychart", root)
