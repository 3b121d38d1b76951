"""Statement rules several dialects share, with their tree schemas."""

from __future__ import annotations

from typing import TypedDict

from mermaid_peg.syntax.common import (
    comma_list,
    identifier,
    keyword,
    line_end,
    opt_spaces,
    quoted_string,
    rest_of_line,
    spaces,
    text_until,
)
from mermaid_peg.syntax.engine import char_class, literal


class TitleTree(TypedDict):
    title: str


class AccTitleTree(TypedDict):
    acc_title: str


class AccDescrTree(TypedDict):
    acc_descr: str


class ClassDefTree(TypedDict):
    class_def: str
    props: str


class StyleTree(TypedDict):
    style: str
    props: str


class ClassAssignTree(TypedDict):
    class_targets: str
    class_name: str


class OptionTree(TypedDict):
    key: str
    value: str


title_line = keyword("title") + spaces + rest_of_line.capture("title") + line_end

acc_title = keyword("accTitle") + opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("acc_title") + line_end

acc_descr = (
    keyword("accDescr")
    + opt_spaces
    + (
        literal("{") + char_class("^}").repeat().capture("acc_descr") + literal("}").label("closing brace")
        | literal(":") + opt_spaces + rest_of_line.capture("acc_descr")
    )
    + line_end
)

accessibility = acc_title | acc_descr

class_def = keyword("classDef") + spaces + comma_list(identifier).capture("class_def") + spaces + rest_of_line.capture("props") + line_end


def style_statement(target):
    """``style <target> <props>`` with the dialect's own id rule."""
    return keyword("style") + spaces + target.capture("style") + spaces + rest_of_line.capture("props") + line_end


def class_assignment(target):
    """``class a,b name`` with the dialect's own id rule."""
    return (
        keyword("class")
        + spaces
        + comma_list(target).capture("class_targets")
        + spaces
        + identifier.capture("class_name")
        + line_end
    )


def option_value(*stops: str):
    """A quoted string or bare text up to ``stops``."""
    return quoted_string | text_until(*stops, name="value")
