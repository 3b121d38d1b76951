"""Kanban grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.syntax.common import (
    blank_lines,
    comma_list,
    eof,
    identifier,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    single_quoted_string,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, literal, pattern


class KanbanItemTree(TypedDict):
    indent: str
    item: str
    text: str | None
    metadata: list[Any] | None


class KanbanTree(TypedDict):
    lines: list[Any]


@cache
def grammar() -> Grammar:
    entry = (
        identifier.capture("key")
        + opt_spaces
        + literal(":")
        + opt_spaces
        + (quoted_string | single_quoted_string | text_until(",", "}", name="metadata value")).capture("value")
    )
    metadata = (
        opt_spaces
        + literal("@{")
        + opt_spaces
        + comma_list(entry).capture("metadata")
        + opt_spaces
        + literal("}").label("closing brace")
    ).maybe()
    text = (literal("[") + (quoted_string | text_until("]", name="item text")).capture("text") + literal("]")).maybe()
    item = (
        opt_spaces.capture("indent")
        + pattern(r"[\w-]+", "item id").capture("item")
        + text
        + metadata
        + line_end
    )
    header = keyword("kanban") + line_end
    root = ws + header + (blank_lines + item).repeat().capture("lines") + ws + eof
    return Grammar("kanban", root)
