"""Grammar engine and shared lexical primitives."""

from mermaid_peg.syntax.engine import (
    Failure,
    Forward,
    Grammar,
    Match,
    Rule,
    Tree,
    any_char,
    capture,
    char_class,
    choice,
    literal,
    lookahead,
    lookahead_not,
    optional,
    pattern,
    repeat,
    sequence,
)

__all__ = [
    "Failure",
    "Forward",
    "Grammar",
    "Match",
    "Rule",
    "Tree",
    "any_char",
    "capture",
    "char_class",
    "choice",
    "literal",
    "lookahead",
    "lookahead_not",
    "optional",
    "pattern",
    "repeat",
    "sequence",
]
