"""Requirement diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import direction_token
from mermaid_peg.grammars.shared import accessibility, class_assignment, class_def, style_statement, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    eof,
    identifier,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    rest_of_line,
    spaces,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, choice, literal, pattern


class RequirementTree(TypedDict):
    req_kind: str
    req_name: str
    req_classes: str | None
    properties: list[Any]


class ElementTree(TypedDict):
    element: str
    element_classes: str | None
    properties: list[Any]


class RelationTree(TypedDict):
    rel_left: str
    rel_head: str
    rel_type: str
    rel_tail: str
    rel_right: str


class DirectionTree(TypedDict):
    direction: str


class RequirementDiagramTree(TypedDict):
    statements: list[Any]


REQUIREMENT_KINDS: list[str] = [
    "functionalRequirement",
    "interfaceRequirement",
    "performanceRequirement",
    "physicalRequirement",
    "designConstraint",
    "requirement",
]
PROPERTY_KEYS: list[str] = ["id", "text", "risk", "verifymethod", "type", "docref"]
RELATION_KINDS: list[str] = ["contains", "copies", "derives", "satisfies", "verifies", "refines", "traces"]


@cache
def grammar() -> Grammar:
    name = quoted_string | pattern(r"[\w.-]*\w", "name")
    prop = (
        choice(*(keyword(key) for key in PROPERTY_KEYS)).capture("key")
        + opt_spaces
        + literal(":")
        + opt_spaces
        + rest_of_line.capture("value")
        + line_end
    )
    body = (
        opt_spaces
        + literal("{")
        + line_end.maybe()
        + (ws + ~literal("}") + prop).repeat().capture("properties")
        + ws
        + literal("}").label("closing brace")
        + line_end
    )

    requirement = (
        choice(*(keyword(kind) for kind in REQUIREMENT_KINDS)).capture("req_kind")
        + spaces
        + name.capture("req_name")
        + (literal(":::") + comma_list(identifier).capture("req_classes")).maybe()
        + body
    )
    element = (
        keyword("element")
        + spaces
        + name.capture("element")
        + (literal(":::") + comma_list(identifier).capture("element_classes")).maybe()
        + body
    )
    relation = (
        name.capture("rel_left")
        + opt_spaces
        + (literal("<-") | literal("-")).capture("rel_head")
        + opt_spaces
        + choice(*(keyword(kind) for kind in RELATION_KINDS)).capture("rel_type")
        + opt_spaces
        + (literal("->") | literal("-")).capture("rel_tail")
        + opt_spaces
        + name.capture("rel_right")
        + line_end
    )
    direction = keyword("direction") + spaces + direction_token().capture("direction") + line_end

    statement = (
        title_line
        | accessibility
        | direction
        | requirement
        | element
        | style_statement(name)
        | class_def
        | class_assignment(name)
        | relation
    )
    header = keyword("requirementDiagram") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("requirement", root)
