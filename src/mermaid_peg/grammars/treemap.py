"""Treemap grammar.

Nesting follows indentation, as in mindmaps.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, class_def, title_line
from mermaid_peg.syntax.common import (
    blank_lines,
    eof,
    identifier,
    keyword,
    line_end,
    number,
    opt_spaces,
    quoted,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, literal


class TreemapNodeTree(TypedDict):
    indent: str
    node_label: str
    node_value: str | None
    node_class: str | None


class TreemapTree(TypedDict):
    lines: list[Any]


@cache
def grammar() -> Grammar:
    node = (
        opt_spaces.capture("indent")
        + quoted("node_label")
        + (literal(":::") + identifier.capture("node_class")).maybe()
        + (opt_spaces + literal(":") + opt_spaces + number.capture("node_value")).maybe()
        + line_end
    )
    setting = opt_spaces + (title_line | accessibility | class_def)
    header = (keyword("treemap-beta") | keyword("treemap")) + line_end
    root = ws + header + (blank_lines + (setting | node)).repeat().capture("lines") + ws + eof
    return Grammar("treemap", root)
