"""Lexical primitives shared by every dialect grammar.

Whitespace, line endings and comments are defined once here so that every
dialect counts lines and columns the same way.
"""

from __future__ import annotations

import re

from mermaid_peg.syntax.engine import Rule, any_char, char_class, choice, literal, lookahead

# ─── Whitespace and lines ────────────────────────────────────────────────────

space = char_class(" \t").label("space")
spaces = space.repeat(1)
opt_spaces = space.repeat()
newline = (literal("\r\n") | literal("\n")).label("newline")
eof = (~any_char()).label("end of input")
comment = literal("%%") + char_class("^\r\n").repeat()

line_end = (opt_spaces + literal(";").maybe() + opt_spaces + comment.maybe() + (newline | eof)).label("end of line")

# Blank lines, comments and indentation between statements.
ws = (space | newline | comment).repeat()

# Blank or comment-only lines, leaving the indentation of the next
# significant line in place for indentation-sensitive dialects.
blank_lines = (opt_spaces + comment.maybe() + newline).repeat()

# ─── Tokens ──────────────────────────────────────────────────────────────────

identifier = (char_class("A-Za-z_") + char_class("A-Za-z0-9_.").repeat()).label("identifier")
integer = char_class("0-9").repeat(1).label("integer")
number = (literal("-").maybe() + integer + (literal(".") + integer).maybe()).label("number")

string_content = (literal("\\") + any_char() | char_class('^"\\\\\r\n')).repeat()
single_string_content = (literal("\\") + any_char() | char_class("^'\\\\\r\n")).repeat()
quoted_string = literal('"') + string_content + literal('"').label("closing quote")
single_quoted_string = literal("'") + single_string_content + literal("'").label("closing quote")

rest_of_line = char_class("^\r\n").label("text").repeat(1)

_WORD_CHAR = char_class("A-Za-z0-9_")


def keyword(word: str) -> Rule:
    """A case-insensitive keyword that does not run into a following word."""
    return (literal(word, ignore_case=True) + ~_WORD_CHAR).label(repr(word))


def quoted(field: str) -> Rule:
    """A double-quoted string whose body is captured as ``field``."""
    return literal('"') + string_content.capture(field) + literal('"').label("closing quote")


def text_until(*stops: str, name: str = "text") -> Rule:
    """One or more characters up to the end of line or any of ``stops``."""
    if all(len(stop) == 1 for stop in stops):
        excluded = "".join(re.escape(stop) for stop in stops)
        return char_class(f"^\r\n{excluded}").label(name).repeat(1)
    stop_rule = choice(*(literal(stop) for stop in stops), newline)
    return (~stop_rule + any_char()).label(name).repeat(1)


def strip_quotes(text: str | None) -> str:
    """Strip and unescape a value that may be a whole quoted string."""
    value = clean(text)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return unescape(value[1:-1])
    return value


_comma = opt_spaces + literal(",") + opt_spaces


def comma_list(item: Rule) -> Rule:
    """Comma separated ``item``s; capturing items yield a list of mappings.

    A comma is only consumed when another item follows it, so a trailing
    comma is left for the caller to reject.
    """
    return (item + (_comma + lookahead(item)).maybe()).repeat(1)


_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "'": "'", "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\(.)")


def unescape(text: str | None) -> str:
    """Resolve backslash escapes inside a quoted string body."""
    if not text:
        return ""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


def clean(text: str | None) -> str:
    """Strip a captured text value, mapping None to the empty string."""
    return (text or "").strip()


def dashed_id() -> Rule:
    """An id that may contain dashes, but never the start of a ``--`` link."""
    word = char_class("A-Za-z0-9_")
    return (word + (word | literal("-") + ~char_class("-.>=<")).repeat()).label("identifier")
