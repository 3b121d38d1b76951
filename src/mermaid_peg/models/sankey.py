"""Sankey diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind


@dataclass
class SankeyNode:
    id: str
    label: str

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class SankeyLink:
    source: str
    target: str
    value: float

    def is_valid(self) -> bool:
        return bool(self.source) and bool(self.target) and self.value > 0 and not self.self_loop

    @property
    def self_loop(self) -> bool:
        return self.source == self.target


@dataclass
class SankeyDiagram:
    nodes: list[SankeyNode] = field(default_factory=list)
    links: list[SankeyLink] = field(default_factory=list)
    title: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Sankey

    def is_valid(self) -> bool:
        if not self.links:
            return False
        ids = [n.id for n in self.nodes]
        if not unique(ids) or not all(n.is_valid() for n in self.nodes) or not all(k.is_valid() for k in self.links):
            return False
        return references_resolve(ids, [link.source for link in self.links] + [link.target for link in self.links])

    def find_node(self, node_id: str) -> SankeyNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def links_from(self, node_id: str) -> list[SankeyLink]:
        return [link for link in self.links if link.source == node_id]

    def links_to(self, node_id: str) -> list[SankeyLink]:
        return [link for link in self.links if link.target == node_id]

    def outflow(self, node_id: str) -> float:
        return sum(link.value for link in self.links_from(node_id))

    def inflow(self, node_id: str) -> float:
        return sum(link.value for link in self.links_to(node_id))

    def sources(self) -> list[SankeyNode]:
        """Nodes with outgoing flow and nothing flowing in."""
        return [n for n in self.nodes if not self.links_to(n.id) and self.links_from(n.id)]

    def sinks(self) -> list[SankeyNode]:
        return [n for n in self.nodes if not self.links_from(n.id) and self.links_to(n.id)]

    def total_flow(self) -> float:
        """Flow leaving the source nodes."""
        return sum(self.outflow(n.id) for n in self.sources())
