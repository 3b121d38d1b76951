"""Mindmap grammar.

Mindmaps are indentation sensitive, so statements are separated by
``blank_lines`` rather than ``ws`` and every line keeps its leading spaces
in ``indent``.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.syntax.common import (
    blank_lines,
    eof,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, choice, literal, pattern


class _MindmapNodeRequired(TypedDict):
    indent: str


class MindmapNodeTree(_MindmapNodeRequired, total=False):
    node_id: str
    open: str
    label: str
    close: str
    text: str


class IconTree(TypedDict):
    indent: str
    icon: str


class NodeClassesTree(TypedDict):
    indent: str
    node_classes: str


class MindmapTree(TypedDict):
    lines: list[Any]


# (open, close, label stops), longer openers first.
SHAPE_TOKENS: list[tuple[str, str, str]] = [
    ("((", "))", ")"),
    ("))", "((", "("),
    (")", "(", "("),
    ("{{", "}}", "}"),
    ("(", ")", ")"),
    ("[", "]", "]"),
]


@cache
def grammar() -> Grammar:
    shapes = choice(
        *(
            literal(open_token).capture("open")
            + (quoted_string | text_until(stop, name="node text")).capture("label")
            + literal(close_token).capture("close")
            for open_token, close_token, stop in SHAPE_TOKENS
        )
    )
    shaped = pattern(r"[\w-]*", "node id").capture("node_id") + shapes
    plain = text_until("%%", name="node text").capture("text")

    indent = opt_spaces.capture("indent")
    icon = indent + literal("::icon(") + text_until(")", name="icon").capture("icon") + literal(")") + line_end
    node_classes = indent + literal(":::") + text_until("%%", name="class names").capture("node_classes") + line_end
    node = indent + (shaped + line_end | plain + line_end)

    line = icon | node_classes | node
    header = keyword("mindmap") + line_end
    root = ws + header + (blank_lines + line).repeat().capture("lines") + ws + eof
    return Grammar("mindmap", root)
