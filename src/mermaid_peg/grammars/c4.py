"""C4 diagram grammar.

Every C4 statement is a macro call, ``Name(arg, $key="value", ...)``,
optionally followed by a braced body of further statements. The transform
decides what each macro name means.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import (
    comma_list,
    eof,
    identifier,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    text_until,
    ws,
)
from mermaid_peg.syntax.engine import Forward, Grammar, choice, literal, pattern


class MacroArgTree(TypedDict):
    arg_name: str | None
    arg_value: str | None


class MacroTree(TypedDict):
    macro: str
    args: list[Any] | None
    body: list[Any] | None


class C4Tree(TypedDict):
    c4_kind: str
    statements: list[Any]


DIAGRAM_KINDS: list[str] = ["C4Context", "C4Container", "C4Component", "C4Dynamic", "C4Deployment"]


@cache
def grammar() -> Grammar:
    statement = Forward("statement")
    arg = (
        (literal("$") + identifier.capture("arg_name") + opt_spaces + literal("=") + opt_spaces).maybe()
        + (quoted_string | text_until(",", ")", name="argument")).maybe().capture("arg_value")
    )
    body = (
        opt_spaces
        + literal("{")
        + (ws + ~literal("}") + statement).repeat().capture("body")
        + ws
        + literal("}").label("closing brace")
    )
    macro = (
        pattern(r"[A-Za-z_]\w*", "C4 macro").capture("macro")
        + opt_spaces
        + literal("(")
        + opt_spaces
        + comma_list(arg).maybe().capture("args")
        + opt_spaces
        + literal(")").label("')'")
        + body.maybe()
        + line_end
    )
    statement.define(title_line | accessibility | macro)

    header = choice(*(keyword(kind) for kind in DIAGRAM_KINDS)).capture("c4_kind") + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("c4", root)
