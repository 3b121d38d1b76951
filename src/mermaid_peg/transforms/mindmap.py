"""Mindmap transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.mindmap import IconTree, MindmapNodeTree, MindmapTree, NodeClassesTree
from mermaid_peg.models.mindmap import SHAPE_BY_DELIMITERS, Mindmap, MindmapNode, MindmapShape
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import TreeTransform, pattern
from mermaid_peg.transforms.shared import indent_width
from mermaid_peg.types import DiagramKind


@dataclass
class IndentedNode:
    indent: int
    node: MindmapNode


@dataclass
class Decoration:
    icon: str | None = None
    classes: tuple[str, ...] = ()


class MindmapTransform(TreeTransform):
    kind = DiagramKind.Mindmap

    @pattern(MindmapNodeTree)
    def node(self, node: MindmapNodeTree) -> IndentedNode:
        if "text" in node:
            label = clean(node["text"])
            item = MindmapNode(id="", label=label)
        else:
            label = strip_quotes(node["label"])
            shape = SHAPE_BY_DELIMITERS.get((node["open"], node["close"]), MindmapShape.Default)
            item = MindmapNode(id=node["node_id"], label=label, shape=shape)
        return IndentedNode(indent_width(node["indent"]), item)

    @pattern(IconTree)
    def icon(self, node: IconTree) -> Decoration:
        return Decoration(icon=clean(node["icon"]))

    @pattern(NodeClassesTree)
    def node_classes(self, node: NodeClassesTree) -> Decoration:
        return Decoration(classes=tuple(node["node_classes"].split()))

    @pattern(MindmapTree)
    def diagram(self, node: MindmapTree) -> Mindmap:
        mindmap = Mindmap()
        stack: list[IndentedNode] = []
        previous: MindmapNode | None = None
        counter = 0
        for line in node["lines"]:
            if isinstance(line, Decoration):
                if previous is None:
                    raise self.fail("icon or class line before any node")
                if line.icon is not None:
                    previous.icon = line.icon
                previous.classes.extend(c for c in line.classes if c not in previous.classes)
                continue
            if not line.node.id:
                line.node.id = f"node-{counter}"
            counter += 1
            while stack and stack[-1].indent >= line.indent:
                stack.pop()
            if not stack:
                if mindmap.root is not None:
                    raise self.fail(f"'{line.node.label}' would be a second root; a mindmap has exactly one")
                mindmap.root = line.node
            else:
                line.node.level = len(stack)
                stack[-1].node.children.append(line.node)
            stack.append(line)
            previous = line.node
        return mindmap
