"""Block diagram transform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_peg.grammars.block import (
    ArrowBlockTree,
    BlockItemTree,
    BlockLinkTree,
    BlockTree,
    ColumnsTree,
    CompoundTree,
    ItemsTree,
    SpaceBlockTree,
)
from mermaid_peg.models.block import ArrowDirection, Block, BlockDiagram, BlockKind, BlockLink
from mermaid_peg.models.flowchart import EDGE_BY_TOKEN, SHAPE_BY_DELIMITERS
from mermaid_peg.syntax.common import strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassAssign, ClassDef, Setting, SharedRules, StyleDef, apply_setting
from mermaid_peg.types import DiagramKind


@dataclass
class Columns:
    count: int | None


@dataclass
class Items:
    blocks: list[Block]


@dataclass
class Compound:
    block: Block
    body: list[Any] = field(default_factory=list)


class BlockTransform(SharedRules):
    kind = DiagramKind.Block

    @pattern(BlockItemTree)
    def block(self, node: BlockItemTree) -> Block:
        label = strip_quotes(node["label"]) if node["label"] else node["block"]
        block = Block(id=node["block"], label=label, width=int(node["width"] or 1))
        if node["open"] is not None:
            block.shape = SHAPE_BY_DELIMITERS[(node["open"], node["close"])]
        return block

    @pattern(SpaceBlockTree)
    def spacer(self, node: SpaceBlockTree) -> Block:
        return Block(id="", label="", kind=BlockKind.Space, width=int(node["space_width"] or 1))

    @pattern(ArrowBlockTree)
    def arrow_block(self, node: ArrowBlockTree) -> Block:
        return Block(
            id=node["arrow_block"],
            label=strip_quotes(node["arrow_label"]),
            kind=BlockKind.Arrow,
            arrow_direction=ArrowDirection(node["arrow_dir"].lower()),
        )

    @pattern(ItemsTree)
    def items(self, node: ItemsTree) -> Items:
        return Items(node["items"])

    @pattern(ColumnsTree)
    def columns(self, node: ColumnsTree) -> Columns:
        value = node["columns"]
        return Columns(None if value.lower() == "auto" else int(value))

    @pattern(CompoundTree)
    def compound(self, node: CompoundTree) -> Compound:
        block = Block(
            id=node["compound"] or "",
            label=node["compound"] or "",
            kind=BlockKind.Compound,
            width=int(node["compound_width"] or 1),
        )
        return Compound(block, node["body"])

    @pattern(BlockLinkTree)
    def block_link(self, node: BlockLinkTree) -> BlockLink:
        label = strip_quotes(node["link_text"]) or None
        return BlockLink(node["link_from"], node["link_to"], EDGE_BY_TOKEN[node["link_arrow"]], label)

    @pattern(BlockTree)
    def diagram(self, node: BlockTree) -> BlockDiagram:
        diagram = BlockDiagram()
        self._counter = 0
        self._ids: set[str] = set()
        styles: list[StyleDef] = []
        assigns: list[ClassAssign] = []
        root = Block(id="", label="", kind=BlockKind.Compound)
        self._fill(diagram, root, node["statements"], styles, assigns)
        diagram.blocks = root.children
        diagram.columns = root.columns

        ids = [b.id for b in diagram.all_blocks()]
        for link in diagram.links:
            self.require(link.from_id, ids, "block")
            self.require(link.to_id, ids, "block")
        for style in styles:
            self.require(style.target, ids, "block")
            block = diagram.find_block(style.target)
            if block is not None:
                block.style = style.props
        for assign in assigns:
            for target in assign.targets:
                self.require(target, ids, "block")
                block = diagram.find_block(target)
                if block is not None and assign.class_name not in block.classes:
                    block.classes.append(assign.class_name)
        return diagram

    def _fill(
        self,
        diagram: BlockDiagram,
        parent: Block,
        statements: list[Any],
        styles: list[StyleDef],
        assigns: list[ClassAssign],
    ) -> None:
        for stmt in statements:
            if isinstance(stmt, Items):
                for block in stmt.blocks:
                    self._add(parent, block)
            elif isinstance(stmt, Compound):
                self._add(parent, stmt.block)
                self._fill(diagram, stmt.block, stmt.body, styles, assigns)
            elif isinstance(stmt, Columns):
                parent.columns = stmt.count
            elif isinstance(stmt, BlockLink):
                diagram.links.append(stmt)
            elif isinstance(stmt, StyleDef):
                styles.append(stmt)
            elif isinstance(stmt, ClassAssign):
                assigns.append(stmt)
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    diagram.class_defs[name] = stmt.props
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)
        if parent.columns is not None:
            for child in parent.children:
                if child.width > parent.columns:
                    raise self.fail(
                        f"block '{child.label or child.id}' is {child.width} columns wide "
                        f"but its container has {parent.columns}"
                    )

    def _add(self, parent: Block, block: Block) -> None:
        if not block.id:
            self._counter += 1
            prefix = "space" if block.kind is BlockKind.Space else "block"
            block.id = f"{prefix}-{self._counter}"
        elif block.id in self._ids:
            raise self.fail(f"duplicate block id '{block.id}'")
        self._ids.add(block.id)
        if block.width < 1:
            raise self.fail(f"block '{block.id}' has width {block.width}")
        parent.children.append(block)

