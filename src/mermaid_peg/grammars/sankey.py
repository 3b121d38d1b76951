"""Sankey diagram grammar.

Flows are CSV rows; a field may be double quoted, with ``""`` standing for
a literal quote inside it.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.syntax.common import eof, keyword, line_end, opt_spaces, text_until, ws
from mermaid_peg.syntax.engine import Grammar, char_class, literal, pattern


class FlowTree(TypedDict):
    source: str
    target: str
    value: str


class SankeyNodeTree(TypedDict):
    sankey_node: str
    node_label: str


class SankeyTree(TypedDict):
    statements: list[Any]


@cache
def grammar() -> Grammar:
    quoted_field = literal('"') + (literal('""') | char_class('^"')).repeat() + literal('"').label("closing quote")
    bare_field = pattern(r"[^,\r\n\"\[%][^,\r\n]*", "field")
    csv_field = quoted_field | bare_field
    comma = opt_spaces + literal(",") + opt_spaces
    flow = (
        csv_field.capture("source")
        + comma
        + csv_field.capture("target")
        + comma
        + pattern(r"[^,\r\n%]+", "value").capture("value")
        + line_end
    )
    node = (
        pattern(r"[\w-]+", "node id").capture("sankey_node")
        + opt_spaces
        + literal("[")
        + text_until("]", name="node label").capture("node_label")
        + literal("]")
        + line_end
    )
    statement = node | flow
    header = (keyword("sankey-beta") | keyword("sankey")) + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("sankey", root)
