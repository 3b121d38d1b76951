"""Mindmap model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import unique
from mermaid_peg.types import DiagramKind


class MindmapShape(Enum):
    Default = auto()  # text
    Square = auto()  # [text]
    Rounded = auto()  # (text)
    Circle = auto()  # ((text))
    Bang = auto()  # ))text((
    Cloud = auto()  # )text(
    Hexagon = auto()  # {{text}}


SHAPE_BY_DELIMITERS: dict[tuple[str, str], MindmapShape] = {
    ("[", "]"): MindmapShape.Square,
    ("(", ")"): MindmapShape.Rounded,
    ("((", "))"): MindmapShape.Circle,
    ("))", "(("): MindmapShape.Bang,
    (")", "("): MindmapShape.Cloud,
    ("{{", "}}"): MindmapShape.Hexagon,
}


@dataclass
class MindmapNode:
    id: str
    label: str
    shape: MindmapShape = MindmapShape.Default
    level: int = 0
    icon: str | None = None
    classes: list[str] = field(default_factory=list)
    children: list[MindmapNode] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.id) and all(child.is_valid() for child in self.children)

    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[MindmapNode]:
        """This node and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Mindmap:
    root: MindmapNode | None = None
    title: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Mindmap

    def is_valid(self) -> bool:
        if self.root is None or not self.root.is_valid():
            return False
        return unique(node.id for node in self.all_nodes())

    def all_nodes(self) -> list[MindmapNode]:
        return list(self.root.walk()) if self.root else []

    def find_node(self, node_id: str) -> MindmapNode | None:
        return next((n for n in self.all_nodes() if n.id == node_id), None)

    def parent_of(self, node_id: str) -> MindmapNode | None:
        return next((n for n in self.all_nodes() if any(c.id == node_id for c in n.children)), None)

    def leaves(self) -> list[MindmapNode]:
        return [n for n in self.all_nodes() if n.is_leaf()]

    def depth(self) -> int:
        return max((n.level for n in self.all_nodes()), default=-1) + 1
