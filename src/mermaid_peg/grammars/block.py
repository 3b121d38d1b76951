"""Block diagram grammar.

A line of a block diagram may hold several blocks side by side, so the
``items`` statement is a list of block, space and arrow-block mappings.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import node_shape
from mermaid_peg.grammars.shared import accessibility, class_assignment, class_def, style_statement, title_line
from mermaid_peg.syntax.common import (
    dashed_id,
    eof,
    integer,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    spaces,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Forward, Grammar, choice, literal


class BlockItemTree(TypedDict):
    block: str
    open: str | None
    label: str | None
    close: str | None
    width: str | None


class SpaceBlockTree(TypedDict):
    spacer: str
    space_width: str | None


class ArrowBlockTree(TypedDict):
    arrow_block: str
    arrow_label: str
    arrow_dir: str


class ItemsTree(TypedDict):
    items: list[Any]


class ColumnsTree(TypedDict):
    columns: str


class CompoundTree(TypedDict):
    compound: str | None
    compound_width: str | None
    body: list[Any]


class BlockLinkTree(TypedDict):
    link_from: str
    link_arrow: str
    link_text: str | None
    link_to: str


class BlockTree(TypedDict):
    statements: list[Any]


LINK_TOKENS: list[str] = ["-.->", "-->", "---", "==>"]
ARROW_DIRECTIONS: list[str] = ["up", "down", "left", "right", "x", "y"]


@cache
def grammar() -> Grammar:
    reserved = keyword("end") | keyword("block") | keyword("space") | keyword("columns")
    block_id = ~reserved + dashed_id()
    width = (literal(":") + integer.capture("width")).maybe()

    spacer = keyword("space").capture("spacer") + (literal(":") + integer.capture("space_width")).maybe()
    arrow_block = (
        block_id.capture("arrow_block")
        + literal("<[")
        + (quoted_string | text_until("]", name="arrow label")).capture("arrow_label")
        + literal("]>")
        + opt_spaces
        + literal("(")
        + choice(*(keyword(d) for d in ARROW_DIRECTIONS)).capture("arrow_dir")
        + literal(")")
    )
    shaped = block_id.capture("block") + node_shape().maybe() + width
    item = spacer | arrow_block | shaped
    items = (item + opt_spaces).repeat(1).capture("items") + line_end

    arrow = choice(*(literal(token) for token in LINK_TOKENS)).label("link")
    link = (
        block_id.capture("link_from")
        + opt_spaces
        + choice(
            literal("--")
            + spaces
            + (quoted_string | text_until("-->", "---", name="link text")).capture("link_text")
            + opt_spaces
            + (literal("-->") | literal("---")).capture("link_arrow"),
            arrow.capture("link_arrow")
            + (opt_spaces + literal("|") + text_until("|", name="link text").capture("link_text") + literal("|")).maybe(),
        )
        + opt_spaces
        + block_id.capture("link_to")
        + line_end
    )

    columns = keyword("columns") + spaces + (integer | keyword("auto")).capture("columns") + line_end

    statement = Forward("statement")
    compound = (
        keyword("block")
        + (
            literal(":")
            + dashed_id().capture("compound")
            + (literal(":") + integer.capture("compound_width")).maybe()
        ).maybe()
        + line_end
        + (ws + ~keyword("end") + statement).repeat().capture("body")
        + ws
        + keyword("end").label("'end'")
        + line_end
    )
    statement.define(
        columns
        | compound
        | title_line
        | accessibility
        | style_statement(block_id)
        | class_def
        | class_assignment(block_id)
        | link
        | items
    )

    header = keyword("block-beta") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("block", root)
