"""C4 model: people, systems, containers and components in boundaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind


class C4Level(Enum):
    Context = "C4Context"
    Container = "C4Container"
    Component = "C4Component"
    Dynamic = "C4Dynamic"
    Deployment = "C4Deployment"


class C4ElementType(Enum):
    Person = auto()  # Person(...)
    System = auto()  # System(...)
    SystemDb = auto()  # SystemDb(...)
    SystemQueue = auto()  # SystemQueue(...)
    Container = auto()  # Container(...)
    ContainerDb = auto()  # ContainerDb(...)
    ContainerQueue = auto()  # ContainerQueue(...)
    Component = auto()  # Component(...)
    ComponentDb = auto()  # ComponentDb(...)
    ComponentQueue = auto()  # ComponentQueue(...)


class RelDirection(Enum):
    Default = auto()  # Rel
    Up = auto()  # Rel_U, Rel_Up
    Down = auto()  # Rel_D, Rel_Down
    Left = auto()  # Rel_L, Rel_Left
    Right = auto()  # Rel_R, Rel_Right
    Back = auto()  # Rel_Back


@dataclass
class C4Element:
    alias: str
    label: str
    type: C4ElementType
    external: bool = False
    description: str | None = None
    technology: str | None = None
    sprite: str | None = None
    tags: str | None = None
    link: str | None = None
    boundary: str | None = None

    def is_valid(self) -> bool:
        return bool(self.alias)


@dataclass
class C4Boundary:
    alias: str
    label: str
    type: str = "boundary"
    description: str | None = None
    tags: str | None = None
    link: str | None = None
    parent: str | None = None

    def is_valid(self) -> bool:
        return bool(self.alias)


@dataclass
class C4Relationship:
    from_id: str
    to_id: str
    label: str | None = None
    technology: str | None = None
    description: str | None = None
    direction: RelDirection = RelDirection.Default
    bidirectional: bool = False
    index: str | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


@dataclass
class C4Diagram:
    level: C4Level = C4Level.Context
    elements: list[C4Element] = field(default_factory=list)
    boundaries: list[C4Boundary] = field(default_factory=list)
    relationships: list[C4Relationship] = field(default_factory=list)
    layout: dict[str, str] = field(default_factory=dict)
    element_styles: dict[str, dict[str, str]] = field(default_factory=dict)
    rel_styles: dict[tuple[str, str], dict[str, str]] = field(default_factory=dict)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.C4

    def is_valid(self) -> bool:
        if not self.elements:
            return False
        ids = self.all_ids()
        if not unique(ids):
            return False
        parts = [*self.elements, *self.boundaries, *self.relationships]
        if not all(part.is_valid() for part in parts):
            return False
        boundary_ids = [b.alias for b in self.boundaries]
        parents = [e.boundary for e in self.elements] + [b.parent for b in self.boundaries]
        refs = [r.from_id for r in self.relationships] + [r.to_id for r in self.relationships]
        return references_resolve(boundary_ids, parents) and references_resolve(ids, refs)

    def all_ids(self) -> list[str]:
        return [e.alias for e in self.elements] + [b.alias for b in self.boundaries]

    def find_element(self, alias: str) -> C4Element | None:
        return next((e for e in self.elements if e.alias == alias), None)

    def find_boundary(self, alias: str) -> C4Boundary | None:
        return next((b for b in self.boundaries if b.alias == alias), None)

    def elements_in(self, boundary: str) -> list[C4Element]:
        return [e for e in self.elements if e.boundary == boundary]

    def relationships_from(self, alias: str) -> list[C4Relationship]:
        return [r for r in self.relationships if r.from_id == alias]

    def relationships_to(self, alias: str) -> list[C4Relationship]:
        return [r for r in self.relationships if r.to_id == alias]

    def people(self) -> list[C4Element]:
        return [e for e in self.elements if e.type is C4ElementType.Person]

    def external_elements(self) -> list[C4Element]:
        return [e for e in self.elements if e.external]
