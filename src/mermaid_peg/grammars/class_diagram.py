"""Class diagram grammar.

Members are parsed structurally: a method is ``name(params)`` with an
optional classifier and return type, anything else on a member line is an
attribute.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypedDict

from mermaid_peg.grammars.flowchart import direction_token
from mermaid_peg.grammars.shared import accessibility, class_def, style_statement, title_line
from mermaid_peg.syntax.common import (
    eof,
    identifier,
    keyword,
    line_end,
    newline,
    opt_spaces,
    quoted,
    quoted_string,
    rest_of_line,
    spaces,
    ws,
)
from mermaid_peg.syntax.engine import Forward, Grammar, char_class, choice, literal


class MethodTree(TypedDict):
    visibility: str | None
    method: str
    params: str
    classifier: str | None
    returns: str | None


class AttributeTree(TypedDict):
    visibility: str | None
    attribute: str


class ClassDeclTree(TypedDict):
    class_id: str
    label: str | None
    generic: str | None
    annotation: str | None
    css_class: str | None
    members: list[Any] | None


class AnnotationTree(TypedDict):
    annotation: str
    class_ref: str


class MemberLineTree(TypedDict):
    owner: str
    member: Any


class RelationTree(TypedDict):
    source: str
    source_card: str | None
    operator: str
    target_card: str | None
    target: str
    label: str | None


class NamespaceTree(TypedDict):
    namespace: str
    body: list[Any]


class LinkTree(TypedDict):
    link: str
    url: str
    tooltip: str | None


class CallbackTree(TypedDict):
    callback: str
    function: str
    tooltip: str | None


class ClickTree(TypedDict):
    click: str
    action: str


class NoteTree(TypedDict):
    note_for: str | None
    note: str


class CssClassTree(TypedDict):
    css_targets: str
    css_name: str


class DirectionTree(TypedDict):
    direction: str


class StandaloneClassTree(TypedDict):
    class_ref: str


class ClassDiagramTree(TypedDict):
    statements: list[Any]


# Four-character operators first, then three, then the bare ``--``/``..``.
RELATION_TOKENS: list[str] = [
    "<|--", "--|>", "<|..", "..|>",
    "*--", "--*", "o--", "--o", "-->", "<--", "..>", "<..",
    "--", "..",
]


@cache
def grammar() -> Grammar:
    class_name = identifier
    visibility = char_class("+\\-#~").capture("visibility").maybe()
    member_text = char_class("^\r\n}").label("member").repeat(1)

    method = (
        visibility
        + identifier.capture("method")
        + literal("(")
        + char_class("^)\r\n").repeat().capture("params")
        + literal(")").label("')'")
        + char_class("$*").maybe().capture("classifier")
        + ((opt_spaces + literal(":") | spaces) + opt_spaces + member_text.capture("returns")).maybe()
    )
    attribute = visibility + member_text.capture("attribute")
    member = method | attribute

    generic = literal("~") + char_class("^~\r\n").repeat(1).capture("generic") + literal("~")
    annotation = literal("<<") + char_class("^>\r\n").repeat(1).capture("annotation") + literal(">>")
    css_class = literal(":::") + identifier.capture("css_class")
    class_label = literal("[") + quoted_string.capture("label") + literal("]")
    body = (
        opt_spaces
        + literal("{")
        + opt_spaces
        + newline.maybe()
        + (ws + ~literal("}") + member + opt_spaces + newline).repeat().capture("members")
        + ws
        + literal("}").label("closing brace")
    )
    class_decl = (
        keyword("class")
        + spaces
        + class_name.capture("class_id")
        + class_label.maybe()
        + generic.maybe()
        + (opt_spaces + annotation).maybe()
        + css_class.maybe()
        + body.maybe()
        + line_end
    )
    standalone_annotation = annotation + spaces + class_name.capture("class_ref") + line_end
    member_line = (
        class_name.capture("owner") + opt_spaces + literal(":") + opt_spaces + member.capture("member") + line_end
    )

    operator = choice(*(literal(token) for token in RELATION_TOKENS)).label("relationship")
    relation = (
        class_name.capture("source")
        + (spaces + quoted_string.capture("source_card")).maybe()
        + opt_spaces
        + operator.capture("operator")
        + (opt_spaces + quoted_string.capture("target_card")).maybe()
        + opt_spaces
        + class_name.capture("target")
        + (opt_spaces + literal(":") + opt_spaces + rest_of_line.capture("label")).maybe()
        + line_end
    )

    tooltip = (spaces + quoted("tooltip")).maybe()
    link = keyword("link") + spaces + class_name.capture("link") + spaces + quoted("url") + tooltip + line_end
    callback = (
        keyword("callback") + spaces + class_name.capture("callback") + spaces + quoted("function") + tooltip + line_end
    )
    click = keyword("click") + spaces + class_name.capture("click") + spaces + rest_of_line.capture("action") + line_end
    note = (
        keyword("note")
        + (spaces + keyword("for") + spaces + class_name.capture("note_for")).maybe()
        + spaces
        + quoted("note")
        + line_end
    )
    css_assign = (
        keyword("cssClass")
        + spaces
        + quoted("css_targets")
        + spaces
        + identifier.capture("css_name")
        + line_end
    )
    direction = keyword("direction") + spaces + direction_token().capture("direction") + line_end
    standalone = class_name.capture("class_ref") + line_end

    statement = Forward("statement")
    namespace = (
        keyword("namespace")
        + spaces
        + identifier.capture("namespace")
        + opt_spaces
        + literal("{")
        + (ws + ~literal("}") + statement).repeat().capture("body")
        + ws
        + literal("}").label("closing brace")
        + line_end
    )
    statement.define(
        namespace
        | class_decl
        | standalone_annotation
        | direction
        | title_line
        | accessibility
        | class_def
        | style_statement(class_name)
        | css_assign
        | link
        | callback
        | click
        | note
        | member_line
        | relation
        | standalone
    )

    header = (keyword("classDiagram-v2") | keyword("classDiagram")) + line_end
    root = ws + header + (ws + statement).repeat().capture("statements") + ws + eof
    return Grammar("class_diagram", root)

