"""Error diagram grammar: the ``error`` keyword and an optional message."""

from __future__ import annotations

from functools import cache
from typing import TypedDict

from mermaid_peg.syntax.common import eof, keyword, line_end, rest_of_line, spaces, ws
from mermaid_peg.syntax.engine import Grammar


class ErrorTree(TypedDict):
    message: str | None


@cache
def grammar() -> Grammar:
    header = keyword("error") + (spaces + rest_of_line.capture("message")).maybe() + line_end
    return Grammar("error", ws + header + ws + eof)
