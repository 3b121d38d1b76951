"""Architecture diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind


class Side(Enum):
    Left = "L"
    Right = "R"
    Top = "T"
    Bottom = "B"


@dataclass
class ArchitectureGroup:
    id: str
    label: str
    icon: str | None = None
    parent: str | None = None

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class ArchitectureService:
    id: str
    label: str
    icon: str | None = None
    parent: str | None = None

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class ArchitectureJunction:
    id: str
    parent: str | None = None

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class ArchitectureEdge:
    from_id: str
    from_side: Side
    to_id: str
    to_side: Side
    arrow_from: bool = False
    arrow_to: bool = False
    from_group: bool = False
    to_group: bool = False

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


@dataclass
class ArchitectureDiagram:
    groups: list[ArchitectureGroup] = field(default_factory=list)
    services: list[ArchitectureService] = field(default_factory=list)
    junctions: list[ArchitectureJunction] = field(default_factory=list)
    edges: list[ArchitectureEdge] = field(default_factory=list)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Architecture

    def is_valid(self) -> bool:
        if not self.services and not self.junctions:
            return False
        if not unique(self.all_ids()):
            return False
        parts = [*self.groups, *self.services, *self.junctions, *self.edges]
        if not all(part.is_valid() for part in parts):
            return False
        parents = [item.parent for item in [*self.groups, *self.services, *self.junctions]]
        endpoints = [e.from_id for e in self.edges] + [e.to_id for e in self.edges]
        return references_resolve(self.group_ids(), parents) and references_resolve(self.node_ids(), endpoints)

    def group_ids(self) -> list[str]:
        return [g.id for g in self.groups]

    def node_ids(self) -> list[str]:
        """Ids an edge may connect: services and junctions."""
        return [s.id for s in self.services] + [j.id for j in self.junctions]

    def all_ids(self) -> list[str]:
        return self.group_ids() + self.node_ids()

    def find_service(self, service_id: str) -> ArchitectureService | None:
        return next((s for s in self.services if s.id == service_id), None)

    def find_group(self, group_id: str) -> ArchitectureGroup | None:
        return next((g for g in self.groups if g.id == group_id), None)

    def find_junction(self, junction_id: str) -> ArchitectureJunction | None:
        return next((j for j in self.junctions if j.id == junction_id), None)

    def services_in(self, group_id: str) -> list[ArchitectureService]:
        return [s for s in self.services if s.parent == group_id]

    def edges_from(self, node_id: str) -> list[ArchitectureEdge]:
        return [e for e in self.edges if e.from_id == node_id]

    def edges_to(self, node_id: str) -> list[ArchitectureEdge]:
        return [e for e in self.edges if e.to_id == node_id]
