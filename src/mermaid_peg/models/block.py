"""Block diagram model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.models.flowchart import EdgeType, NodeShape
from mermaid_peg.types import DiagramKind


class BlockKind(Enum):
    Normal = auto()  # id["label"]
    Space = auto()  # space:2
    Arrow = auto()  # id<["label"]>(right)
    Compound = auto()  # block:id ... end


class ArrowDirection(Enum):
    Up = "up"
    Down = "down"
    Left = "left"
    Right = "right"
    X = "x"
    Y = "y"


@dataclass
class Block:
    id: str
    label: str
    kind: BlockKind = BlockKind.Normal
    shape: NodeShape = NodeShape.Rectangle
    width: int = 1
    arrow_direction: ArrowDirection | None = None
    columns: int | None = None
    children: list[Block] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    style: str | None = None

    def is_valid(self) -> bool:
        if not self.id or self.width < 1:
            return False
        if self.columns is not None and any(child.width > self.columns for child in self.children):
            return False
        return all(child.is_valid() for child in self.children)

    def walk(self) -> Iterator[Block]:
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class BlockLink:
    from_id: str
    to_id: str
    edge_type: EdgeType = EdgeType.Arrow
    label: str | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


def rows(blocks: list[Block], columns: int | None) -> int:
    """Rows needed to lay ``blocks`` out left to right in ``columns``."""
    if not blocks:
        return 0
    if columns is None:
        return 1
    count, used = 1, 0
    for block in blocks:
        if used + block.width > columns:
            count += 1
            used = 0
        used += block.width
    return count


@dataclass
class BlockDiagram:
    blocks: list[Block] = field(default_factory=list)
    links: list[BlockLink] = field(default_factory=list)
    columns: int | None = None
    class_defs: dict[str, str] = field(default_factory=dict)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Block

    def is_valid(self) -> bool:
        if not self.blocks:
            return False
        if self.columns is not None and any(b.width > self.columns for b in self.blocks):
            return False
        ids = [b.id for b in self.all_blocks()]
        if not unique(ids) or not all(b.is_valid() for b in self.blocks):
            return False
        if not all(link.is_valid() for link in self.links):
            return False
        classes = [c for b in self.all_blocks() for c in b.classes]
        refs = [link.from_id for link in self.links] + [link.to_id for link in self.links]
        return references_resolve(ids, refs) and references_resolve(self.class_defs, classes)

    def all_blocks(self) -> list[Block]:
        return [b for top in self.blocks for b in top.walk()]

    def find_block(self, block_id: str) -> Block | None:
        return next((b for b in self.all_blocks() if b.id == block_id), None)

    def links_from(self, block_id: str) -> list[BlockLink]:
        return [link for link in self.links if link.from_id == block_id]

    def links_to(self, block_id: str) -> list[BlockLink]:
        return [link for link in self.links if link.to_id == block_id]

    def row_count(self) -> int:
        return rows(self.blocks, self.columns)
