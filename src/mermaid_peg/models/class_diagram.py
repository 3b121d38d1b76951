"""Class diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind, Direction


class Visibility(Enum):
    Public = "+"
    Private = "-"
    Protected = "#"
    Package = "~"


class RelationshipType(Enum):
    Inheritance = auto()  # <|--
    Composition = auto()  # *--
    Aggregation = auto()  # o--
    Association = auto()  # -->
    Link = auto()  # --
    Dependency = auto()  # ..>
    Realization = auto()  # ..|>
    DashedLink = auto()  # ..


RELATIONSHIP_BY_TOKEN: dict[str, RelationshipType] = {
    "<|--": RelationshipType.Inheritance,
    "--|>": RelationshipType.Inheritance,
    "*--": RelationshipType.Composition,
    "--*": RelationshipType.Composition,
    "o--": RelationshipType.Aggregation,
    "--o": RelationshipType.Aggregation,
    "-->": RelationshipType.Association,
    "<--": RelationshipType.Association,
    "--": RelationshipType.Link,
    "..>": RelationshipType.Dependency,
    "<..": RelationshipType.Dependency,
    "..|>": RelationshipType.Realization,
    "<|..": RelationshipType.Realization,
    "..": RelationshipType.DashedLink,
}

# Operators whose head is on the left; the relationship runs right to left.
LEFT_POINTING: frozenset[str] = frozenset({"<|--", "<--", "<|..", "<.."})


@dataclass
class ClassAttribute:
    name: str
    type: str | None = None
    visibility: Visibility | None = None
    static: bool = False

    def is_valid(self) -> bool:
        return bool(self.name)


@dataclass
class ClassMethod:
    name: str
    parameters: str = ""
    return_type: str | None = None
    visibility: Visibility | None = None
    abstract: bool = False
    static: bool = False

    def is_valid(self) -> bool:
        return bool(self.name)

    def signature(self) -> str:
        prefix = self.visibility.value if self.visibility else ""
        text = f"{prefix}{self.name}({self.parameters})"
        if self.return_type:
            text += f" {self.return_type}"
        return text


@dataclass
class ClassEntity:
    id: str
    label: str
    generic: str | None = None
    annotations: list[str] = field(default_factory=list)
    attributes: list[ClassAttribute] = field(default_factory=list)
    methods: list[ClassMethod] = field(default_factory=list)
    namespace: str | None = None
    css_classes: list[str] = field(default_factory=list)
    link: str | None = None
    callback: str | None = None
    tooltip: str | None = None
    style: str | None = None

    def is_valid(self) -> bool:
        members = [*self.attributes, *self.methods]
        return bool(self.id) and all(m.is_valid() for m in members)

    def is_interface(self) -> bool:
        return any(a.lower() == "interface" for a in self.annotations)

    def is_abstract(self) -> bool:
        return any(a.lower() == "abstract" for a in self.annotations) or any(m.abstract for m in self.methods)

    def is_enum(self) -> bool:
        return any(a.lower() in ("enum", "enumeration") for a in self.annotations)


@dataclass
class ClassRelationship:
    from_id: str
    to_id: str
    relationship_type: RelationshipType = RelationshipType.Association
    label: str | None = None
    source_cardinality: str | None = None
    target_cardinality: str | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


@dataclass
class ClassNote:
    text: str
    class_id: str | None = None


@dataclass
class ClassDiagram:
    entities: list[ClassEntity] = field(default_factory=list)
    relationships: list[ClassRelationship] = field(default_factory=list)
    notes: list[ClassNote] = field(default_factory=list)
    namespaces: dict[str, list[str]] = field(default_factory=dict)
    class_defs: dict[str, str] = field(default_factory=dict)
    direction: Direction = field(default_factory=Direction.default)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.ClassDiagram

    def is_valid(self) -> bool:
        if not self.entities:
            return False
        ids = [e.id for e in self.entities]
        if not unique(ids):
            return False
        if not all(e.is_valid() for e in self.entities) or not all(r.is_valid() for r in self.relationships):
            return False
        refs = [r.from_id for r in self.relationships] + [r.to_id for r in self.relationships]
        refs += [n.class_id for n in self.notes]
        return references_resolve(ids, refs)

    def find_entity(self, entity_id: str) -> ClassEntity | None:
        return next((e for e in self.entities if e.id == entity_id), None)

    def relationships_from(self, entity_id: str) -> list[ClassRelationship]:
        return [r for r in self.relationships if r.from_id == entity_id]

    def relationships_to(self, entity_id: str) -> list[ClassRelationship]:
        return [r for r in self.relationships if r.to_id == entity_id]

    def relationships_of_type(self, relationship_type: RelationshipType) -> list[ClassRelationship]:
        return [r for r in self.relationships if r.relationship_type is relationship_type]

    def parent_entities(self, entity_id: str) -> list[ClassEntity]:
        parents = {
            r.to_id
            for r in self.relationships_from(entity_id)
            if r.relationship_type is RelationshipType.Inheritance
        }
        return [e for e in self.entities if e.id in parents]

    def child_entities(self, entity_id: str) -> list[ClassEntity]:
        children = {
            r.from_id
            for r in self.relationships_to(entity_id)
            if r.relationship_type is RelationshipType.Inheritance
        }
        return [e for e in self.entities if e.id in children]
