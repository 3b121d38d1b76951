"""Sequence diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import comma_list, eof, keyword, line_end, opt_spaces, rest_of_line, spaces, ws
from mermaid_peg.syntax.engine import Forward, Grammar, Rule, char_class, choice, literal


class ParticipantTree(TypedDict):
    participant_type: str
    participant: str
    alias: str | None


class MessageTree(TypedDict):
    source: str
    arrow: str
    marker: str | None
    target: str
    text: str | None


class ActivationTree(TypedDict):
    activation: str
    participant: str


class NoteTree(TypedDict):
    position: str
    note_targets: str
    note: str


class AutonumberTree(TypedDict):
    autonumber: str | None


class BoxTree(TypedDict):
    box: str | None
    members: list[Any]


class BranchTree(TypedDict):
    branch: str
    label: str | None
    body: list[Any]


class FragmentTree(TypedDict):
    fragment: str
    label: str | None
    body: list[Any]
    branches: list[Any]


class SequenceTree(TypedDict):
    statements: list[Any]


# Longer arrows before their prefixes: ``-->>`` before ``-->`` before ``->``.
ARROW_TOKENS: list[str] = ["<<-->>", "<<->>", "-->>", "->>", "--)", "-)", "--x", "-x", "-->", "->"]

FRAGMENT_KEYWORDS: list[str] = ["loop", "alt", "opt", "par", "critical", "break", "rect"]
BRANCH_KEYWORDS: list[str] = ["else", "and", "option"]


def participant_id() -> Rule:
    """A participant name; a dash is kept only when it cannot start an arrow."""
    word = char_class("A-Za-z0-9_")
    return (word + (char_class("A-Za-z0-9_.") | literal("-") + ~char_class("-<>x)")).repeat()).label("participant")


def _label() -> Rule:
    return (spaces + rest_of_line.capture("label")).maybe()


@cache
def grammar() -> Grammar:
    pid = participant_id()
    end = keyword("end")
    statement = Forward("statement")

    participant = (
        (keyword("participant") | keyword("actor")).capture("participant_type")
        + spaces
        + pid.capture("participant")
        + (spaces + keyword("as") + spaces + rest_of_line.capture("alias")).maybe()
        + line_end
    )
    autonumber = keyword("autonumber") + (spaces + rest_of_line).maybe().capture("autonumber") + line_end
    activation = (
        (keyword("activate") | keyword("deactivate")).capture("activation")
        + spaces
        + pid.capture("participant")
        + line_end
    )
    position = choice(
        keyword("left") + spaces + keyword("of"),
        keyword("right") + spaces + keyword("of"),
        keyword("over"),
    ).label("note position")
    note = (
        keyword("note")
        + spaces
        + position.capture("position")
        + spaces
        + comma_list(pid).capture("note_targets")
        + opt_spaces
        + literal(":")
        + opt_spaces
        + rest_of_line.capture("note")
        + line_end
    )
    box = (
        keyword("box")
        + (spaces + rest_of_line).maybe().capture("box")
        + line_end
        + (ws + ~end + participant).repeat().capture("members")
        + ws
        + end
        + line_end
    )

    branch_start = choice(*(keyword(word) for word in BRANCH_KEYWORDS))
    body = (ws + ~end + ~branch_start + statement).repeat().capture("body")
    branch = ws + branch_start.capture("branch") + _label() + line_end + body
    fragment = (
        choice(*(keyword(word) for word in FRAGMENT_KEYWORDS)).capture("fragment")
        + _label()
        + line_end
        + body
        + branch.repeat().capture("branches")
        + ws
        + end
        + line_end
    )

    arrow = choice(*(literal(token) for token in ARROW_TOKENS)).label("arrow")
    message = (
        pid.capture("source")
        + opt_spaces
        + arrow.capture("arrow")
        + (literal("+") | literal("-")).maybe().capture("marker")
        + opt_spaces
        + pid.capture("target")
        + (opt_spaces + literal(":") + opt_spaces + rest_of_line.maybe().capture("text")).maybe()
        + line_end
    )

    statement.define(
        participant
        | autonumber
        | activation
        | note
        | box
        | fragment
        | title_line
        | accessibility
        | message
    )

    header = keyword("sequenceDiagram") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("sequence", root)
