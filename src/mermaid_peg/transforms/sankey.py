"""Sankey diagram transform."""

from __future__ import annotations

from mermaid_peg.grammars.sankey import FlowTree, SankeyNodeTree, SankeyTree
from mermaid_peg.models.sankey import SankeyDiagram, SankeyLink, SankeyNode
from mermaid_peg.syntax.common import clean
from mermaid_peg.transforms.base import TreeTransform, pattern
from mermaid_peg.types import DiagramKind


def csv_field(text: str) -> str:
    value = clean(text)
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('""', '"')
    return value


class SankeyTransform(TreeTransform):
    kind = DiagramKind.Sankey

    @pattern(FlowTree)
    def flow(self, node: FlowTree) -> SankeyLink:
        source, target = csv_field(node["source"]), csv_field(node["target"])
        raw = clean(node["value"])
        try:
            value = float(raw)
        except ValueError:
            raise self.fail(f"flow {source} -> {target} has a non-numeric value '{raw}'") from None
        if value <= 0:
            raise self.fail(f"flow {source} -> {target} must be positive, got {raw}")
        if source == target:
            raise self.fail(f"flow from '{source}' to itself")
        return SankeyLink(source, target, value)

    @pattern(SankeyNodeTree)
    def sankey_node(self, node: SankeyNodeTree) -> SankeyNode:
        return SankeyNode(node["sankey_node"], clean(node["node_label"]))

    @pattern(SankeyTree)
    def diagram(self, node: SankeyTree) -> SankeyDiagram:
        diagram = SankeyDiagram()
        for stmt in node["statements"]:
            if isinstance(stmt, SankeyNode):
                existing = diagram.find_node(stmt.id)
                if existing is None:
                    diagram.nodes.append(stmt)
                else:
                    existing.label = stmt.label
            elif isinstance(stmt, SankeyLink):
                for node_id in (stmt.source, stmt.target):
                    if diagram.find_node(node_id) is None:
                        diagram.nodes.append(SankeyNode(node_id, node_id))
                diagram.links.append(stmt)
        return diagram
