"""Git graph grammar."""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.shared import accessibility, title_line
from mermaid_peg.syntax.common import (
    eof,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    single_quoted_string,
    spaces,
    ws,
)
from mermaid_peg.syntax.engine import Grammar, literal, pattern


class CommitTree(TypedDict):
    commit: str
    options: list[Any]


class BranchTree(TypedDict):
    branch: str
    options: list[Any]


class CheckoutTree(TypedDict):
    checkout: str


class MergeTree(TypedDict):
    merge: str
    options: list[Any]


class CherryPickTree(TypedDict):
    cherry_pick: str
    options: list[Any]


class GitGraphTree(TypedDict):
    orientation: str | None
    statements: list[Any]


OPTION_KEYS: list[str] = ["id", "type", "tag", "parent", "order"]
COMMIT_TYPES: list[str] = ["NORMAL", "REVERSE", "HIGHLIGHT"]


@cache
def grammar() -> Grammar:
    bare_value = pattern(r"[^\s,;\"']+", "option value")
    option = (
        pattern("|".join(OPTION_KEYS), "'id', 'type', 'tag', 'parent' or 'order'").capture("key")
        + opt_spaces
        + literal(":")
        + opt_spaces
        + (quoted_string | single_quoted_string | bare_value).capture("value")
    )
    options = (spaces + option).repeat().capture("options")
    branch_name = quoted_string | pattern(r"[A-Za-z0-9_][\w./-]*", "branch name")

    commit = keyword("commit").capture("commit") + options + line_end
    branch = keyword("branch") + spaces + branch_name.capture("branch") + options + line_end
    checkout = (keyword("checkout") | keyword("switch")) + spaces + branch_name.capture("checkout") + line_end
    merge = keyword("merge") + spaces + branch_name.capture("merge") + options + line_end
    cherry_pick = keyword("cherry-pick").capture("cherry_pick") + options + line_end

    statement = title_line | accessibility | commit | branch | checkout | merge | cherry_pick

    orientation = opt_spaces + (literal("LR") | literal("TB") | literal("BT")).capture("orientation") + opt_spaces + literal(":")
    header = keyword("gitGraph") + orientation.maybe() + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("git_graph", root)
