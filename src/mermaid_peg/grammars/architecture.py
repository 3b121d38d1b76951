"""Architecture diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, keyword, line_end, opt_spaces, quoted_string, spaces, text_until, ws
from mermaid_peg.syntax.engine import Grammar, choice, literal, pattern


class GroupTree(TypedDict):
    group: str
    icon: str | None
    label: str | None
    parent: str | None


class ServiceTree(TypedDict):
    service: str
    icon: str | None
    label: str | None
    parent: str | None


class JunctionTree(TypedDict):
    junction: str
    parent: str | None


class ArchEdgeTree(TypedDict):
    edge_from: str
    from_group: str | None
    from_side: str
    edge_arrow: str
    to_side: str
    edge_to: str
    to_group: str | None


class ArchitectureTree(TypedDict):
    statements: list[Any]


EDGE_TOKENS: list[str] = ["<-->", "<--", "-->", "--"]
SIDES: list[str] = ["L", "R", "T", "B"]


@cache
def grammar() -> Grammar:
    node_id = pattern(r"[A-Za-z_][\w-]*", "identifier")
    icon = (literal("(") + text_until(")", name="icon").capture("icon") + literal(")")).maybe()
    label = (literal("[") + (quoted_string | text_until("]", name="label")).capture("label") + literal("]")).maybe()
    parent = (spaces + keyword("in") + spaces + node_id.capture("parent")).maybe()

    group = keyword("group") + spaces + node_id.capture("group") + icon + label + parent + line_end
    service = keyword("service") + spaces + node_id.capture("service") + icon + label + parent + line_end
    junction = keyword("junction") + spaces + node_id.capture("junction") + parent + line_end

    side = choice(*(literal(s) for s in SIDES)).label("side L, R, T or B")
    group_marker = literal("{group}")
    edge = (
        node_id.capture("edge_from")
        + group_marker.capture("from_group").maybe()
        + literal(":")
        + side.capture("from_side")
        + opt_spaces
        + choice(*(literal(token) for token in EDGE_TOKENS)).label("'--' or '-->'").capture("edge_arrow")
        + opt_spaces
        + side.capture("to_side")
        + literal(":")
        + node_id.capture("edge_to")
        + group_marker.capture("to_group").maybe()
        + line_end
    )

    statement = title_line | accessibility | group | service | junction | edge
    header = keyword("architecture-beta") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("architecture", root)
