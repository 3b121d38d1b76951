"""Flowchart transform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_peg.grammars.flowchart import (
    ClickTree,
    DirectionTree,
    EdgeTree,
    FlowchartTree,
    LinkStyleTree,
    LinkTree,
    NodeStatementTree,
    NodeTree,
    SubgraphTree,
)
from mermaid_peg.models.flowchart import (
    EDGE_BY_TOKEN,
    SHAPE_BY_DELIMITERS,
    ClickAction,
    FlowchartDiagram,
    FlowchartEdge,
    FlowchartNode,
    Subgraph,
)
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassAssign, ClassDef, Setting, SharedRules, StyleDef, apply_setting, split_list
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class NodeRef:
    node: FlowchartNode
    explicit: bool


@dataclass
class Link:
    token: str
    label: str | None
    target: NodeRef


@dataclass
class EdgeChain:
    source: NodeRef
    links: list[Link]


@dataclass
class SubgraphBlock:
    id: str
    title: str
    body: list[Any] = field(default_factory=list)


@dataclass
class LinkStyle:
    indexes: list[int] | None
    props: str


class FlowchartTransform(SharedRules):
    kind = DiagramKind.Flowchart

    @pattern(NodeTree)
    def node(self, node: NodeTree) -> NodeRef:
        explicit = node["open"] is not None
        shape = SHAPE_BY_DELIMITERS[(node["open"], node["close"])] if explicit else None
        label = strip_quotes(node["label"]) if node["label"] else node["id"]
        result = FlowchartNode(id=node["id"], label=label, classes=split_list(node["classes"]))
        if shape is not None:
            result.shape = shape
        return NodeRef(result, explicit)

    @pattern(LinkTree)
    def link(self, node: LinkTree) -> Link:
        label = strip_quotes(node["text"]) if node["text"] else None
        return Link(node["arrow"], label or None, node["to"])

    @pattern(EdgeTree)
    def edge(self, node: EdgeTree) -> EdgeChain:
        return EdgeChain(node["source"], node["links"])

    @pattern(NodeStatementTree)
    def standalone(self, node: NodeStatementTree) -> NodeRef:
        return node["node"]

    @pattern(SubgraphTree)
    def subgraph(self, node: SubgraphTree) -> SubgraphBlock:
        subgraph_id = strip_quotes(node["subgraph"])
        title = strip_quotes(node.get("title")) or subgraph_id
        return SubgraphBlock(subgraph_id, title, node["body"])

    @pattern(DirectionTree)
    def direction(self, node: DirectionTree) -> Direction:
        return Direction.from_token(node["direction"])

    @pattern(LinkStyleTree)
    def link_style(self, node: LinkStyleTree) -> LinkStyle:
        target = clean(node["link_style"])
        indexes = None if target.lower() == "default" else [int(i) for i in split_list(target)]
        return LinkStyle(indexes, clean(node["props"]).rstrip(";"))

    @pattern(ClickTree)
    def click(self, node: ClickTree) -> ClickAction:
        return ClickAction(node["click"], clean(node["action"]))

    @pattern(FlowchartTree)
    def diagram(self, node: FlowchartTree) -> FlowchartDiagram:
        chart = FlowchartDiagram(direction=Direction.from_token(node["header_direction"]))
        link_styles: list[LinkStyle] = []
        styles: list[StyleDef] = []
        assigns: list[ClassAssign] = []
        self._collect(chart, node["statements"], None, link_styles, styles, assigns)

        ids = [n.id for n in chart.nodes]
        for style in styles:
            styled = chart.find_node(style.target)
            if styled is not None:
                styled.style = style.props
            elif chart.find_subgraph(style.target) is None:
                self.require(style.target, ids, "node")
        for assign in assigns:
            for target in assign.targets:
                found = chart.find_node(target)
                if found is None:
                    self.require(target, ids, "node")
                    continue
                if assign.class_name not in found.classes:
                    found.classes.append(assign.class_name)
        for click in chart.clicks:
            self.require(click.node_id, ids, "node")
        for link_style in link_styles:
            indexes = range(len(chart.edges)) if link_style.indexes is None else link_style.indexes
            for index in indexes:
                if index >= len(chart.edges):
                    raise self.fail(f"linkStyle index {index} is out of range ({len(chart.edges)} links)")
                chart.edges[index].style = link_style.props
        return chart

    def _collect(
        self,
        chart: FlowchartDiagram,
        statements: list[Any],
        parent: Subgraph | None,
        link_styles: list[LinkStyle],
        styles: list[StyleDef],
        assigns: list[ClassAssign],
    ) -> None:
        def member(node_id: str) -> None:
            if parent is not None and node_id not in parent.node_ids:
                parent.node_ids.append(node_id)

        for stmt in statements:
            if isinstance(stmt, NodeRef):
                member(chart.upsert_node(stmt.node, stmt.explicit).id)
            elif isinstance(stmt, EdgeChain):
                source = chart.upsert_node(stmt.source.node, stmt.source.explicit)
                member(source.id)
                for link in stmt.links:
                    target = chart.upsert_node(link.target.node, link.target.explicit)
                    member(target.id)
                    chart.edges.append(FlowchartEdge(source.id, target.id, EDGE_BY_TOKEN[link.token], link.label))
                    source = target
            elif isinstance(stmt, SubgraphBlock):
                if chart.find_subgraph(stmt.id) is not None:
                    raise self.fail(f"duplicate subgraph '{stmt.id}'")
                sub = Subgraph(id=stmt.id, title=stmt.title, parent=parent.id if parent else None)
                chart.subgraphs.append(sub)
                if parent is not None:
                    parent.children.append(sub.id)
                self._collect(chart, stmt.body, sub, link_styles, styles, assigns)
            elif isinstance(stmt, Direction):
                if parent is not None:
                    parent.direction = stmt
                else:
                    chart.direction = stmt
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    chart.class_defs[name] = stmt.props
            elif isinstance(stmt, StyleDef):
                styles.append(stmt)
            elif isinstance(stmt, ClassAssign):
                assigns.append(stmt)
            elif isinstance(stmt, LinkStyle):
                link_styles.append(stmt)
            elif isinstance(stmt, ClickAction):
                chart.clicks.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(chart, stmt)
