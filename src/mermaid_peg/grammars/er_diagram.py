"""Entity relationship diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import direction_token
from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    dashed_id,
    eof,
    keyword,
    line_end,
    opt_spaces,
    quoted,
    quoted_string,
    rest_of_line,
    spaces,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, choice, literal, pattern


class ErAttributeTree(TypedDict):
    attr_type: str
    attr_name: str
    keys: str | None
    comment: str | None


class EntityTree(TypedDict):
    entity: str
    alias: str | None
    attributes: list[Any]


class ErRelationshipTree(TypedDict):
    source: str
    left_card: str
    operator: str
    right_card: str
    target: str
    label: str | None


class EntityRefTree(TypedDict):
    entity_ref: str
    alias: str | None


class DirectionTree(TypedDict):
    direction: str


class ErDiagramTree(TypedDict):
    statements: list[Any]


# Crow's foot markers as seen from each end of the line.
LEFT_CARDINALITIES: list[str] = ["|o", "||", "}o", "}|"]
RIGHT_CARDINALITIES: list[str] = ["o|", "||", "o{", "|{"]
OPERATORS: list[str] = ["--", "..", "=="]


@cache
def grammar() -> Grammar:
    entity_name = dashed_id()
    alias = (literal("[") + (quoted_string | pattern(r"[^\]\r\n]+", "alias")).capture("alias") + literal("]")).maybe()

    attr_type = pattern(r"[A-Za-z_][A-Za-z0-9_()\[\],.-]*", "attribute type")
    attr_name = pattern(r"\*?[A-Za-z_][A-Za-z0-9_()\[\].-]*", "attribute name")
    key = keyword("PK") | keyword("FK") | keyword("UK")
    attribute = (
        attr_type.capture("attr_type")
        + spaces
        + attr_name.capture("attr_name")
        + (spaces + comma_list(key).capture("keys")).maybe()
        + (opt_spaces + quoted("comment")).maybe()
        + line_end
    )
    entity = (
        entity_name.capture("entity")
        + alias
        + opt_spaces
        + literal("{")
        + line_end.maybe()
        + (ws + ~literal("}") + attribute).repeat().capture("attributes")
        + ws
        + literal("}").label("closing brace")
        + line_end
    )

    left = choice(*(literal(token) for token in LEFT_CARDINALITIES)).label("cardinality")
    right = choice(*(literal(token) for token in RIGHT_CARDINALITIES)).label("cardinality")
    operator = choice(*(literal(token) for token in OPERATORS)).label("'--' or '..'")
    relationship = (
        entity_name.capture("source")
        + opt_spaces
        + left.capture("left_card")
        + operator.capture("operator")
        + right.capture("right_card")
        + opt_spaces
        + entity_name.capture("target")
        + (opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("label")).maybe()
        + line_end
    )
    entity_ref = entity_name.capture("entity_ref") + alias + line_end
    direction = keyword("direction") + spaces + direction_token().capture("direction") + line_end

    statement = direction | title_line | accessibility | entity | relationship | entity_ref

    header = keyword("erDiagram") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("er_diagram", root)
