"""Packet diagram grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import eof, integer, keyword, line_end, opt_spaces, quoted, rest_of_line, ws
from mermaid_peg.syntax.engine import Grammar, literal


class PacketRangeTree(TypedDict):
    start: str
    end: str | None
    field_label: str


class PacketBitsTree(TypedDict):
    bits: str
    field_label: str


class PacketTree(TypedDict):
    statements: list[Any]


@cache
def grammar() -> Grammar:
    label = opt_spaces + literal(":") + opt_spaces + (quoted("field_label") | rest_of_line.capture("field_label")) + line_end
    bit_range = (
        integer.capture("start")
        + (opt_spaces + literal("-") + opt_spaces + integer.capture("end")).maybe()
        + label
    )
    bit_count = literal("+") + opt_spaces + integer.capture("bits") + label
    statement = title_line | accessibility | bit_range | bit_count
    header = (keyword("packet-beta") | keyword("packet")) + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("packet", root)
