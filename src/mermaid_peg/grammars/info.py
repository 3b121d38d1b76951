"""Info grammar: ``info`` with an optional ``showInfo`` flag."""

from __future__ import annotations

from functools import cache
from typing import TypedDict

from mermaid_peg.syntax.common import eof, keyword, line_end, spaces, ws
from mermaid_peg.syntax.engine import Grammar


class InfoTree(TypedDict):
    show_info: str | None
    body: str


@cache
def grammar() -> Grammar:
    header = keyword("info") + (spaces + keyword("showInfo")).capture("show_info").maybe() + line_end
    body = (ws + keyword("showInfo") + line_end).repeat().capture("body")
    return Grammar("info", ws + header + body + ws + eof)
