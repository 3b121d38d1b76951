"""Treemap transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.treemap import TreemapNodeTree, TreemapTree
from mermaid_peg.models.treemap import Treemap, TreemapNode
from mermaid_peg.syntax.common import unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassDef, Setting, SharedRules, apply_setting, indent_width
from mermaid_peg.types import DiagramKind


@dataclass
class IndentedNode:
    indent: int
    node: TreemapNode


class TreemapTransform(SharedRules):
    kind = DiagramKind.Treemap

    @pattern(TreemapNodeTree)
    def node(self, node: TreemapNodeTree) -> IndentedNode:
        label = unescape(node["node_label"])
        value = float(node["node_value"]) if node["node_value"] is not None else None
        if value is not None and value < 0:
            raise self.fail(f"'{label}' has negative value {node['node_value']}")
        return IndentedNode(indent_width(node["indent"]), TreemapNode(label, value, class_name=node["node_class"]))

    @pattern(TreemapTree)
    def diagram(self, node: TreemapTree) -> Treemap:
        treemap = Treemap()
        stack: list[IndentedNode] = []
        for line in node["lines"]:
            if isinstance(line, IndentedNode):
                while stack and stack[-1].indent >= line.indent:
                    stack.pop()
                if stack:
                    parent = stack[-1].node
                    if parent.value is not None:
                        raise self.fail(f"'{parent.label}' has a value and children; only leaves carry values")
                    line.node.level = len(stack)
                    parent.children.append(line.node)
                else:
                    treemap.roots.append(line.node)
                stack.append(line)
            elif isinstance(line, ClassDef):
                for name in line.names:
                    treemap.class_defs[name] = line.props
            elif isinstance(line, Setting):
                apply_setting(treemap, line)
        for item in treemap.all_nodes():
            if item.class_name:
                self.require(item.class_name, treemap.class_defs, "class")
        return treemap
