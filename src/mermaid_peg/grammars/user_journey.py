"""User journey grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, keyword, line_end, number, opt_spaces, rest_of_line, spaces, text_until, ws
from mermaid_peg.syntax.engine import Grammar, literal


class SectionTree(TypedDict):
    section: str


class TaskTree(TypedDict):
    task: str
    score: str
    actors: str | None


class JourneyTree(TypedDict):
    statements: list[Any]


@cache
def grammar() -> Grammar:
    section = keyword("section") + spaces + rest_of_line.capture("section") + line_end
    task = (
        text_until(":", name="task name").capture("task")
        + literal(":")
        + opt_spaces
        + number.capture("score")
        + opt_spaces
        + (literal(":") + opt_spaces + text_until(";", "%%", name="actor").maybe().capture("actors")).maybe()
        + line_end
    )
    statement = title_line | accessibility | section | task

    header = keyword("journey") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("user_journey", root)
