"""State diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import direction_token
from mermaid_peg.grammars.shared import accessibility, class_assignment, class_def, title_line
from mermaid_peg.syntax.common import (
    dashed_id,
    eof,
    keyword,
    line_end,
    newline,
    opt_spaces,
    quoted,
    rest_of_line,
    spaces,
    ws,
)
from mermaid_peg.syntax.engine import Forward, Grammar, char_class, choice, literal


class _StateDeclRequired(TypedDict):
    state: str


class StateDeclTree(_StateDeclRequired, total=False):
    quoted_desc: str | None
    marker: str | None
    description: str | None
    body: list[Any] | None


class StateDescriptionTree(TypedDict):
    described: str
    description: str


class TransitionTree(TypedDict):
    source: str
    target: str
    label: str | None


class NoteTree(TypedDict):
    note_position: str
    note_target: str
    note: str


class SeparatorTree(TypedDict):
    separator: str


class DirectionTree(TypedDict):
    direction: str


class StandaloneStateTree(TypedDict):
    state_ref: str


class StateDiagramTree(TypedDict):
    statements: list[Any]


START_END = "[*]"


@cache
def grammar() -> Grammar:
    sid = dashed_id()
    endpoint = literal(START_END) | sid
    statement = Forward("statement")

    marker = literal("<<") + (keyword("choice") | keyword("fork") | keyword("join")).capture("marker") + literal(">>")
    body = (
        literal("{")
        + (ws + ~literal("}") + (literal("--").capture("separator") + line_end | statement)).repeat().capture("body")
        + ws
        + literal("}").label("closing brace")
    )
    state_decl = (
        keyword("state")
        + spaces
        + choice(
            quoted("quoted_desc") + spaces + keyword("as") + spaces + sid.capture("state"),
            sid.capture("state"),
        )
        + choice(
            opt_spaces + marker,
            opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("description"),
            opt_spaces + body,
        ).maybe()
        + line_end
    )
    transition = (
        endpoint.capture("source")
        + opt_spaces
        + literal("-->").label("'-->'")
        + opt_spaces
        + endpoint.capture("target")
        + (opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("label")).maybe()
        + line_end
    )
    description = sid.capture("described") + opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("description") + line_end

    end_note = opt_spaces + keyword("end") + spaces + keyword("note")
    note_head = (
        keyword("note")
        + spaces
        + (keyword("left") | keyword("right")).capture("note_position")
        + spaces
        + keyword("of")
        + spaces
        + sid.capture("note_target")
    )
    note = note_head + choice(
        opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("note") + line_end,
        line_end
        + (~end_note + char_class("^\r\n").repeat() + newline).repeat().capture("note")
        + end_note
        + line_end,
    )
    direction = keyword("direction") + spaces + direction_token().capture("direction") + line_end
    standalone = sid.capture("state_ref") + line_end

    statement.define(
        state_decl
        | note
        | direction
        | title_line
        | accessibility
        | class_def
        | class_assignment(sid)
        | transition
        | description
        | standalone
    )

    header = (keyword("stateDiagram-v2") | keyword("stateDiagram")) + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("state_diagram", root)
