"""Flowchart grammar.

Parses ``flowchart``/``graph`` sources: a header with an optional direction,
then subgraphs, styling statements, edge chains and standalone nodes.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, class_assignment, class_def, style_statement, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    dashed_id,
    eof,
    identifier,
    integer,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    rest_of_line,
    spaces,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Forward, Grammar, Rule, choice, literal


class NodeTree(TypedDict):
    id: str
    open: str | None
    label: str | None
    close: str | None
    classes: str | None


class LinkTree(TypedDict):
    arrow: str
    text: str | None
    to: Any


class EdgeTree(TypedDict):
    source: Any
    links: list[Any]


class NodeStatementTree(TypedDict):
    node: Any


class _SubgraphRequired(TypedDict):
    subgraph: str
    body: list[Any]


class SubgraphTree(_SubgraphRequired, total=False):
    title: str | None


class DirectionTree(TypedDict):
    direction: str


class LinkStyleTree(TypedDict):
    link_style: str
    props: str


class ClickTree(TypedDict):
    click: str
    action: str


class FlowchartTree(TypedDict):
    header_direction: str | None
    statements: list[Any]


# (open, close, label stops). Longer openers come first so that ``(((`` is
# never read as ``((`` followed by ``(``.
SHAPE_TOKENS: list[tuple[str, str, tuple[str, ...]]] = [
    ("(((", ")))", (")",)),
    ("([", "])", ("]",)),
    ("[[", "]]", ("]",)),
    ("[(", ")]", (")",)),
    ("((", "))", (")",)),
    ("{{", "}}", ("}",)),
    ("[/", "/]", ("/]", "\\]")),
    ("[\\", "\\]", ("/]", "\\]")),
    ("[/", "\\]", ("/]", "\\]")),
    ("[\\", "/]", ("/]", "\\]")),
    (">", "]", ("]",)),
    ("[", "]", ("]",)),
    ("(", ")", (")",)),
    ("{", "}", ("}",)),
]

# Longer arrows before their prefixes: ``-.->`` before ``-.-``, ``-->``
# before ``--x`` and ``---``.
ARROW_TOKENS: list[str] = ["<-.->", "<==>", "<-->", "-.->", "-.-", "==>", "===", "-->", "---", "--x", "--o"]

DIRECTIONS: list[str] = ["TD", "TB", "LR", "RL", "BT"]


def direction_token() -> Rule:
    return choice(*(literal(d) for d in DIRECTIONS)).label("direction")


def node_shape() -> Rule:
    """The fourteen bracketed node shapes, capturing open, label and close."""
    alternatives = []
    for open_token, close_token, stops in SHAPE_TOKENS:
        label = (quoted_string | text_until(*stops, name="node label")).maybe()
        alternatives.append(
            literal(open_token).capture("open")
            + label.capture("label")
            + literal(close_token).capture("close")
        )
    return choice(*alternatives)


def _link(node_ref: Rule) -> Rule:
    plain = choice(*(literal(token) for token in ARROW_TOKENS)).label("link")
    piped_text = (opt_spaces + literal("|") + text_until("|").maybe().capture("text") + literal("|")).maybe()
    inline = choice(
        literal("--") + spaces + text_until("-->", "---").capture("text") + (literal("-->") | literal("---")).capture("arrow"),
        literal("==") + spaces + text_until("==>", "===").capture("text") + (literal("==>") | literal("===")).capture("arrow"),
        literal("-.") + spaces + text_until(".->", ".-").capture("text") + (literal(".->") | literal(".-")).capture("arrow"),
    )
    return (plain.capture("arrow") + piped_text | inline) + opt_spaces + node_ref.capture("to")


@cache
def grammar() -> Grammar:
    node_id = dashed_id()
    classes = (literal(":::") + comma_list(identifier).capture("classes")).maybe()
    node_ref = node_id.capture("id") + node_shape().maybe() + classes

    statement = Forward("statement")
    reserved = keyword("end") | keyword("subgraph")

    subgraph_head = choice(
        node_id.capture("subgraph")
        + (opt_spaces + literal("[") + (quoted_string | text_until("]")).capture("title") + literal("]")).maybe()
        + line_end,
        (quoted_string | rest_of_line).capture("subgraph") + line_end,
    )
    subgraph = (
        keyword("subgraph")
        + spaces
        + subgraph_head
        + (ws + ~keyword("end") + statement).repeat().capture("body")
        + ws
        + keyword("end")
        + line_end
    )
    direction = keyword("direction") + spaces + direction_token().capture("direction") + line_end
    link_style = (
        keyword("linkStyle")
        + spaces
        + (comma_list(integer) | keyword("default")).capture("link_style")
        + spaces
        + rest_of_line.capture("props")
        + line_end
    )
    click = keyword("click") + spaces + node_id.capture("click") + spaces + rest_of_line.capture("action") + line_end
    edge = (
        ~reserved
        + node_ref.capture("source")
        + (opt_spaces + _link(node_ref)).repeat(1).capture("links")
        + line_end
    )
    standalone = ~reserved + node_ref.capture("node") + line_end

    statement.define(
        subgraph
        | direction
        | style_statement(node_id)
        | link_style
        | class_def
        | class_assignment(node_id)
        | click
        | title_line
        | accessibility
        | edge
        | standalone
    )

    header = (
        (keyword("flowchart") | keyword("graph"))
        + (spaces + direction_token().capture("header_direction")).maybe()
        + line_end
    )
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("flowchart", root)
