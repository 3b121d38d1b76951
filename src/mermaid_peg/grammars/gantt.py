"""Gantt chart grammar.

Task details after the colon are captured as one comma separated list; the
transform classifies each item (tag, id, start, end or duration).
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, keyword, line_end, opt_spaces, rest_of_line, spaces, text_until, ws
from mermaid_peg.syntax.engine import Grammar, choice, literal, pattern


class GanttSettingTree(TypedDict):
    setting: str
    setting_value: str | None


class GanttSectionTree(TypedDict):
    section: str


class GanttClickTree(TypedDict):
    click: str
    click_kind: str
    click_target: str


class GanttTaskTree(TypedDict):
    task: str
    details: str


class GanttTree(TypedDict):
    statements: list[Any]


# Longer names first where one is a prefix of another.
SETTINGS: list[str] = [
    "dateFormat",
    "axisFormat",
    "tickInterval",
    "excludes",
    "includes",
    "todayMarker",
    "weekday",
    "inclusiveEndDates",
    "topAxis",
    "displayMode",
]


@cache
def grammar() -> Grammar:
    task_id = pattern(r"[A-Za-z0-9_][A-Za-z0-9_-]*", "task id")
    setting = (
        choice(*(keyword(name) for name in SETTINGS)).capture("setting")
        + (spaces + rest_of_line.capture("setting_value")).maybe()
        + line_end
    )
    section = keyword("section") + spaces + rest_of_line.capture("section") + line_end
    click = (
        keyword("click")
        + spaces
        + task_id.capture("click")
        + spaces
        + (keyword("href") | keyword("call")).capture("click_kind")
        + spaces
        + rest_of_line.capture("click_target")
        + line_end
    )
    task = (
        text_until(":", name="task description").capture("task")
        + literal(":")
        + opt_spaces
        + text_until("%%", ";", name="task details").capture("details")
        + line_end
    )
    statement = title_line | accessibility | setting | section | click | task

    header = keyword("gantt") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("gantt", root)
