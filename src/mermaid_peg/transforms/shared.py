"""Actions for the statements several dialects share."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mermaid_peg.grammars.shared import (
    AccDescrTree,
    AccTitleTree,
    ClassAssignTree,
    ClassDefTree,
    OptionTree,
    StyleTree,
    TitleTree,
)
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import TreeTransform, pattern


@dataclass(frozen=True)
class Setting:
    """A ``keyword value`` statement such as a title."""

    key: str
    value: str


@dataclass(frozen=True)
class ClassDef:
    names: tuple[str, ...]
    props: str


@dataclass(frozen=True)
class StyleDef:
    target: str
    props: str


@dataclass(frozen=True)
class ClassAssign:
    targets: tuple[str, ...]
    class_name: str


@dataclass(frozen=True)
class Option:
    key: str
    value: str


_SETTING_ATTRS = {
    "title": "title",
    "acc_title": "acc_title",
    "acc_descr": "acc_description",
}


def split_list(text: str | None, sep: str = ",") -> list[str]:
    return [part.strip() for part in (text or "").split(sep) if part.strip()]


def indent_width(indent: str | None) -> int:
    """Width of a leading indentation, tabs counting as four spaces."""
    return len((indent or "").expandtabs(4))


def apply_setting(model: Any, setting: Setting) -> bool:
    """Copy a title or accessibility setting onto ``model`` if it has the field."""
    attr = _SETTING_ATTRS.get(setting.key)
    if attr is None or not hasattr(model, attr):
        return False
    setattr(model, attr, setting.value)
    return True


class SharedRules(TreeTransform):
    """Mixin with actions for titles, accessibility text, classes and options."""

    @pattern(TitleTree)
    def title(self, node: TitleTree) -> Setting:
        return Setting("title", strip_quotes(node["title"]))

    @pattern(AccTitleTree)
    def acc_title(self, node: AccTitleTree) -> Setting:
        return Setting("acc_title", clean(node["acc_title"]))

    @pattern(AccDescrTree)
    def acc_descr(self, node: AccDescrTree) -> Setting:
        lines = [line.strip() for line in (node["acc_descr"] or "").splitlines()]
        return Setting("acc_descr", "\n".join(line for line in lines if line))

    @pattern(ClassDefTree)
    def class_def(self, node: ClassDefTree) -> ClassDef:
        return ClassDef(tuple(split_list(node["class_def"])), clean(node["props"]).rstrip(";"))

    @pattern(StyleTree)
    def style(self, node: StyleTree) -> StyleDef:
        return StyleDef(clean(node["style"]), clean(node["props"]).rstrip(";"))

    @pattern(ClassAssignTree)
    def class_assign(self, node: ClassAssignTree) -> ClassAssign:
        return ClassAssign(tuple(split_list(node["class_targets"])), clean(node["class_name"]))

    @pattern(OptionTree)
    def option(self, node: OptionTree) -> Option:
        return Option(clean(node["key"]), strip_quotes(node["value"]))
