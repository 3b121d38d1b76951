"""Graph IR: converts a diagram model into a networkx DiGraph.

This is the generic graph description handed to a layout solver. Nodes carry
an estimated size and their label text, edges carry every label drawn between
the same two nodes, and ``layout_options()`` supplies the solver settings.
Only graph-shaped dialects convert; charts such as pie or gantt do not.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

import networkx as nx

from mermaid_peg.config import GraphConfig
from mermaid_peg.models.architecture import ArchitectureDiagram
from mermaid_peg.models.base import Diagram
from mermaid_peg.models.block import BlockDiagram, BlockKind
from mermaid_peg.models.c4 import C4Diagram
from mermaid_peg.models.class_diagram import ClassDiagram
from mermaid_peg.models.er_diagram import ErDiagram
from mermaid_peg.models.flowchart import FlowchartDiagram
from mermaid_peg.models.git_graph import GitGraph
from mermaid_peg.models.mindmap import Mindmap
from mermaid_peg.models.requirement import RequirementDiagram
from mermaid_peg.models.sankey import SankeyDiagram
from mermaid_peg.models.state_diagram import StateDiagram
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class NodeData:
    id: str
    label: str
    width: int
    height: int
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeData:
    source: str
    target: str
    labels: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


def estimate_text_width(text: str, char_width: int = 8) -> int:
    """Width of the longest line of ``text`` at a fixed character width."""
    return max((len(line) for line in text.split("\n")), default=0) * char_width


class GraphIR:
    """The graph intermediate representation built from a diagram model.

    Wraps a networkx DiGraph and exposes helpers for topology queries.
    """

    def __init__(
        self,
        digraph: nx.DiGraph,
        kind: DiagramKind,
        direction: Direction,
        config: GraphConfig,
        groups: dict[str, list[str]] | None = None,
    ) -> None:
        self.digraph = digraph
        self.kind = kind
        self.direction = direction
        self.config = config
        self.groups = groups or {}

    @classmethod
    def from_model(cls, model: Diagram, config: GraphConfig | None = None) -> GraphIR:
        """Build a GraphIR from a parsed diagram model.

        Raises ValueError for dialects that have no graph form.
        """
        config = config or GraphConfig()
        kind = model.diagram_type()
        build = _BUILDERS.get(kind)
        if build is None:
            raise ValueError(f"Diagram type '{kind.value}' has no graph description")
        g = _Builder(config)
        direction = build(model, g)
        if config.direction_override is not None:
            direction = Direction.from_token(config.direction_override)
        return cls(g.digraph, kind, direction, config, g.groups)

    def layout_options(self) -> dict[str, Any]:
        return {
            "algorithm": self.config.algorithm,
            "direction": self.direction.name,
            "node_spacing": self.config.node_spacing,
            "rank_spacing": self.config.rank_spacing,
        }

    def nodes(self) -> list[NodeData]:
        return [self.digraph.nodes[n]["data"] for n in self.digraph.nodes]

    def edges(self) -> list[EdgeData]:
        return [self.digraph.edges[u, v]["data"] for u, v in self.digraph.edges]

    def to_description(self) -> dict[str, Any]:
        """Plain node, edge and option mapping for an external layout solver."""
        return {
            "nodes": [asdict(node) for node in self.nodes()],
            "edges": [asdict(edge) for edge in self.edges()],
            "groups": {name: list(members) for name, members in self.groups.items()},
            "layout_options": self.layout_options(),
        }

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def topological_order(self) -> list[str] | None:
        try:
            order = list(nx.topological_sort(self.digraph))
            return [self.digraph.nodes[n]["data"].id for n in order]
        except nx.NetworkXUnfeasible:
            return None

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)

    def adjacency_list(self) -> list[tuple[str, list[str]]]:
        result: list[tuple[str, list[str]]] = []
        for node_id in self.digraph.nodes:
            neighbors = sorted(self.digraph.successors(node_id))
            result.append((node_id, neighbors))
        result.sort(key=lambda x: x[0])
        return result


class _Builder:
    """Accumulates nodes, edges and group membership for one model."""

    def __init__(self, config: GraphConfig) -> None:
        self.config = config
        self.digraph: nx.DiGraph = nx.DiGraph()
        self.groups: dict[str, list[str]] = {}

    def node(self, node_id: str, label: str, lines: list[str] | None = None, **metadata: Any) -> None:
        if node_id in self.digraph:
            self.digraph.nodes[node_id]["data"].metadata.update(metadata)
            return
        text = "\n".join([label, *(lines or [])])
        pad = self.config.padding
        data = NodeData(
            id=node_id,
            label=label,
            width=estimate_text_width(text, self.config.char_width) + 2 * pad,
            height=(text.count("\n") + 1) * self.config.line_height + 2 * pad,
            metadata=metadata,
        )
        self.digraph.add_node(node_id, data=data)

    def edge(self, source: str, target: str, label: str | None = None, **metadata: Any) -> None:
        self._ensure(source)
        self._ensure(target)
        if self.digraph.has_edge(source, target):
            data = self.digraph.edges[source, target]["data"]
        else:
            data = EdgeData(source=source, target=target, metadata=metadata)
            self.digraph.add_edge(source, target, data=data)
        if label:
            data.labels.append(label)

    def member(self, group: str | None, node_id: str) -> None:
        if group is not None:
            self.groups.setdefault(group, []).append(node_id)

    def _ensure(self, node_id: str) -> None:
        if node_id not in self.digraph:
            self.node(node_id, node_id)


# ─── Per-dialect builders ────────────────────────────────────────────────────


def _flowchart(model: FlowchartDiagram, g: _Builder) -> Direction:
    parents = {node_id: sg.id for sg in model.subgraphs for node_id in sg.node_ids}
    for node in model.nodes:
        g.node(node.id, node.label, shape=node.shape.name, classes=list(node.classes), subgraph=parents.get(node.id))
        g.member(parents.get(node.id), node.id)
    for edge in model.edges:
        g.edge(edge.from_id, edge.to_id, edge.label, edge_type=edge.edge_type.name)
    return model.direction


def _class_diagram(model: ClassDiagram, g: _Builder) -> Direction:
    for entity in model.entities:
        members = [a.name if a.type is None else f"{a.type} {a.name}" for a in entity.attributes]
        members += [m.signature() for m in entity.methods]
        g.node(entity.id, entity.label, members, annotations=list(entity.annotations), namespace=entity.namespace)
        g.member(entity.namespace, entity.id)
    for rel in model.relationships:
        g.edge(
            rel.from_id,
            rel.to_id,
            rel.label,
            relationship=rel.relationship_type.name,
            source_cardinality=rel.source_cardinality,
            target_cardinality=rel.target_cardinality,
        )
    return model.direction


def _state_diagram(model: StateDiagram, g: _Builder) -> Direction:
    for state in model.states:
        g.node(state.id, state.label, state.descriptions, kind=state.kind.name, parent=state.parent)
        g.member(state.parent, state.id)
    for transition in model.transitions:
        g.edge(transition.from_id, transition.to_id, transition.label)
    return model.direction


def _er_diagram(model: ErDiagram, g: _Builder) -> Direction:
    for entity in model.entities:
        g.node(entity.id, entity.label, [f"{a.type} {a.name}" for a in entity.attributes])
    for rel in model.relationships:
        g.edge(
            rel.from_id,
            rel.to_id,
            rel.label,
            cardinality_from=rel.cardinality_from.name,
            cardinality_to=rel.cardinality_to.name,
            identifying=rel.identifying,
        )
    return model.direction


def _requirement(model: RequirementDiagram, g: _Builder) -> Direction:
    for req in model.requirements:
        lines = [f"id: {req.req_id}"] if req.req_id else []
        if req.text:
            lines.append(f"text: {req.text}")
        g.node(req.name, req.name, lines, kind=req.kind.name)
    for element in model.elements:
        g.node(element.name, element.name, [f"type: {element.type}"] if element.type else [], kind="Element")
    for rel in model.relationships:
        g.edge(rel.source, rel.target, rel.kind.name.lower(), relation=rel.kind.name)
    return model.direction


def _architecture(model: ArchitectureDiagram, g: _Builder) -> Direction:
    for service in model.services:
        g.node(service.id, service.label, kind="service", icon=service.icon, parent=service.parent)
        g.member(service.parent, service.id)
    for junction in model.junctions:
        g.node(junction.id, "", kind="junction", parent=junction.parent)
        g.member(junction.parent, junction.id)
    for edge in model.edges:
        g.edge(
            edge.from_id,
            edge.to_id,
            from_side=edge.from_side.name,
            to_side=edge.to_side.name,
            arrow_from=edge.arrow_from,
            arrow_to=edge.arrow_to,
        )
    return Direction.LR


def _c4(model: C4Diagram, g: _Builder) -> Direction:
    for element in model.elements:
        lines = [f"[{element.technology}]"] if element.technology else []
        if element.description:
            lines.append(element.description)
        g.node(element.alias, element.label, lines, type=element.type.name, external=element.external)
        g.member(element.boundary, element.alias)
    for rel in model.relationships:
        g.edge(rel.from_id, rel.to_id, rel.label, technology=rel.technology, direction=rel.direction.name)
    return Direction.TD


def _sankey(model: SankeyDiagram, g: _Builder) -> Direction:
    for node in model.nodes:
        g.node(node.id, node.label)
    for link in model.links:
        g.edge(link.source, link.target, value=link.value)
    return Direction.LR


def _mindmap(model: Mindmap, g: _Builder) -> Direction:
    if model.root is None:
        return Direction.TD
    for node in model.root.walk():
        g.node(node.id, node.label, shape=node.shape.name, level=node.level, icon=node.icon)
        for child in node.children:
            g.edge(node.id, child.id)
    return Direction.TD


def _git_graph(model: GitGraph, g: _Builder) -> Direction:
    for commit in model.commits:
        g.node(commit.id, commit.tag or commit.id, branch=commit.branch, type=commit.type.name, merge=commit.is_merge)
        g.member(commit.branch, commit.id)
    for commit in model.commits:
        for parent in commit.parent_ids:
            g.edge(parent, commit.id)
    return model.orientation


def _block(model: BlockDiagram, g: _Builder) -> Direction:
    for root in model.blocks:
        for block in root.walk():
            if block.kind is BlockKind.Space:
                continue
            g.node(block.id, block.label, kind=block.kind.name, shape=block.shape.name, width=block.width)
            for child in block.children:
                if child.kind is not BlockKind.Space:
                    g.member(block.id, child.id)
    for link in model.links:
        g.edge(link.from_id, link.to_id, link.label, edge_type=link.edge_type.name)
    return Direction.TD


_BUILDERS: dict[DiagramKind, Callable[[Any, _Builder], Direction]] = {
    DiagramKind.Flowchart: _flowchart,
    DiagramKind.ClassDiagram: _class_diagram,
    DiagramKind.StateDiagram: _state_diagram,
    DiagramKind.ErDiagram: _er_diagram,
    DiagramKind.Requirement: _requirement,
    DiagramKind.Architecture: _architecture,
    DiagramKind.C4: _c4,
    DiagramKind.Sankey: _sankey,
    DiagramKind.Mindmap: _mindmap,
    DiagramKind.GitGraph: _git_graph,
    DiagramKind.Block: _block,
}
