"""Pie chart grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, keyword, line_end, number, opt_spaces, quoted, rest_of_line, spaces, ws
from mermaid_peg.syntax.engine import Grammar, literal


class SliceTree(TypedDict):
    label: str
    value: str


class PieTree(TypedDict):
    show_data: str | None
    header_title: str | None
    statements: list[Any]


@cache
def grammar() -> Grammar:
    header = (
        keyword("pie")
        + (spaces + keyword("showData")).maybe().capture("show_data")
        + (spaces + keyword("title") + spaces + rest_of_line.capture("header_title")).maybe()
        + line_end
    )
    pie_slice = quoted("label") + opt_spaces + literal(":") + opt_spaces + number.capture("value") + line_end
    statement = title_line | accessibility | pie_slice
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("pie", root)
