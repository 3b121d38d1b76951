"""Timeline grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import direction_token
from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, keyword, line_end, opt_spaces, rest_of_line, spaces, text_until, ws
from mermaid_peg.syntax.engine import Grammar, literal


class TimelineSectionTree(TypedDict):
    section: str


class EventTree(TypedDict):
    event: str


class PeriodTree(TypedDict):
    period: str
    events: list[Any]


class ContinuationTree(TypedDict):
    continuation: list[Any]


class TimelineTree(TypedDict):
    header_direction: str | None
    statements: list[Any]


@cache
def grammar() -> Grammar:
    event = opt_spaces + literal(":") + opt_spaces + text_until(":", "%%", name="event").capture("event")
    section = keyword("section") + spaces + rest_of_line.capture("section") + line_end
    period = text_until(":", "%%", name="time period").capture("period") + event.repeat().capture("events") + line_end
    continuation = event.repeat(1).capture("continuation") + line_end
    statement = title_line | accessibility | section | continuation | period

    header = keyword("timeline") + (spaces + direction_token().capture("header_direction")).maybe() + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("timeline", root)
