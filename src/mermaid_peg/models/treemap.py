"""Treemap model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from mermaid_peg.models.base import references_resolve
from mermaid_peg.types import DiagramKind


@dataclass
class TreemapNode:
    label: str
    value: float | None = None
    level: int = 0
    class_name: str | None = None
    children: list[TreemapNode] = field(default_factory=list)

    def is_valid(self) -> bool:
        if not self.label:
            return False
        if self.children:
            return self.value is None and all(child.is_valid() for child in self.children)
        return self.value is None or self.value >= 0

    def is_leaf(self) -> bool:
        return not self.children

    def total(self) -> float:
        """The node's own value, or the sum over its leaves."""
        if self.children:
            return sum(child.total() for child in self.children)
        return self.value or 0.0

    def walk(self) -> Iterator[TreemapNode]:
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Treemap:
    roots: list[TreemapNode] = field(default_factory=list)
    class_defs: dict[str, str] = field(default_factory=dict)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Treemap

    def is_valid(self) -> bool:
        if not self.roots or not all(root.is_valid() for root in self.roots):
            return False
        return references_resolve(self.class_defs, [n.class_name for n in self.all_nodes()])

    def all_nodes(self) -> list[TreemapNode]:
        return [node for root in self.roots for node in root.walk()]

    def find_node(self, label: str) -> TreemapNode | None:
        return next((n for n in self.all_nodes() if n.label == label), None)

    def leaves(self) -> list[TreemapNode]:
        return [n for n in self.all_nodes() if n.is_leaf()]

    def total(self) -> float:
        return sum(root.total() for root in self.roots)

    def depth(self) -> int:
        return max((n.level for n in self.all_nodes()), default=-1) + 1
