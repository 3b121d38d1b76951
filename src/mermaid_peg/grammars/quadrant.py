"""Quadrant chart grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, class_def, title_line
from mermaid_peg.syntax.common import (
    eof,
    identifier,
    keyword,
    line_end,
    number,
    opt_spaces,
    rest_of_line,
    spaces,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, literal, pattern


class AxisTree(TypedDict):
    axis: str
    axis_low: str
    axis_high: str | None


class QuadrantLabelTree(TypedDict):
    quadrant: str
    quadrant_label: str


class PointTree(TypedDict):
    point: str
    point_class: str | None
    x: str
    y: str
    point_style: str | None


class QuadrantTree(TypedDict):
    statements: list[Any]


@cache
def grammar() -> Grammar:
    axis = (
        (keyword("x-axis") | keyword("y-axis")).capture("axis")
        + spaces
        + text_until("-->", "%%", name="axis label").capture("axis_low")
        + (literal("-->") + opt_spaces + text_until("%%", ";", name="axis label").capture("axis_high")).maybe()
        + line_end
    )
    quadrant = (
        pattern(r"quadrant-[1-4]", "quadrant-1..4").capture("quadrant")
        + spaces
        + rest_of_line.capture("quadrant_label")
        + line_end
    )
    point = (
        text_until(":", name="point name").capture("point")
        + (literal(":::") + identifier.capture("point_class")).maybe()
        + opt_spaces
        + literal(":")
        + opt_spaces
        + literal("[")
        + opt_spaces
        + number.capture("x")
        + opt_spaces
        + literal(",")
        + opt_spaces
        + number.capture("y")
        + opt_spaces
        + literal("]").label("']'")
        + (spaces + text_until("%%", ";", name="point style").capture("point_style")).maybe()
        + line_end
    )
    statement = title_line | accessibility | axis | quadrant | class_def | point

    header = keyword("quadrantChart") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("quadrant", root)
