"""Entity relationship diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind, Direction


class Cardinality(Enum):
    ZeroOrOne = auto()  # |o  o|
    ExactlyOne = auto()  # ||
    ZeroOrMore = auto()  # }o  o{
    OneOrMore = auto()  # }|  |{


LEFT_CARDINALITY: dict[str, Cardinality] = {
    "|o": Cardinality.ZeroOrOne,
    "||": Cardinality.ExactlyOne,
    "}o": Cardinality.ZeroOrMore,
    "}|": Cardinality.OneOrMore,
}

RIGHT_CARDINALITY: dict[str, Cardinality] = {
    "o|": Cardinality.ZeroOrOne,
    "||": Cardinality.ExactlyOne,
    "o{": Cardinality.ZeroOrMore,
    "|{": Cardinality.OneOrMore,
}


class KeyType(Enum):
    Primary = "PK"
    Foreign = "FK"
    Unique = "UK"


class RelationshipKind(Enum):
    Identifying = auto()  # ==
    NonIdentifying = auto()  # --
    NonIdentifyingDotted = auto()  # ..


RELATIONSHIP_BY_OPERATOR: dict[str, RelationshipKind] = {
    "==": RelationshipKind.Identifying,
    "--": RelationshipKind.NonIdentifying,
    "..": RelationshipKind.NonIdentifyingDotted,
}


@dataclass
class ErAttribute:
    name: str
    type: str
    keys: list[KeyType] = field(default_factory=list)
    comment: str | None = None

    def is_valid(self) -> bool:
        return bool(self.name) and bool(self.type)

    def is_primary_key(self) -> bool:
        return KeyType.Primary in self.keys

    def is_foreign_key(self) -> bool:
        return KeyType.Foreign in self.keys


@dataclass
class ErEntity:
    id: str
    label: str
    attributes: list[ErAttribute] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.id) and all(a.is_valid() for a in self.attributes)

    def primary_keys(self) -> list[ErAttribute]:
        return [a for a in self.attributes if a.is_primary_key()]

    def find_attribute(self, name: str) -> ErAttribute | None:
        return next((a for a in self.attributes if a.name == name), None)


@dataclass
class ErRelationship:
    from_id: str
    to_id: str
    cardinality_from: Cardinality
    cardinality_to: Cardinality
    kind: RelationshipKind = RelationshipKind.NonIdentifying
    label: str | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)

    @property
    def identifying(self) -> bool:
        return self.kind is RelationshipKind.Identifying


@dataclass
class ErDiagram:
    entities: list[ErEntity] = field(default_factory=list)
    relationships: list[ErRelationship] = field(default_factory=list)
    direction: Direction = field(default_factory=Direction.default)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.ErDiagram

    def is_valid(self) -> bool:
        if not self.entities:
            return False
        ids = [e.id for e in self.entities]
        if not unique(ids):
            return False
        if not all(e.is_valid() for e in self.entities) or not all(r.is_valid() for r in self.relationships):
            return False
        return references_resolve(ids, [r.from_id for r in self.relationships] + [r.to_id for r in self.relationships])

    def find_entity(self, entity_id: str) -> ErEntity | None:
        return next((e for e in self.entities if e.id == entity_id), None)

    def relationships_from(self, entity_id: str) -> list[ErRelationship]:
        return [r for r in self.relationships if r.from_id == entity_id]

    def relationships_to(self, entity_id: str) -> list[ErRelationship]:
        return [r for r in self.relationships if r.to_id == entity_id]

    def identifying_relationships(self) -> list[ErRelationship]:
        return [r for r in self.relationships if r.identifying]

    def non_identifying_relationships(self) -> list[ErRelationship]:
        return [r for r in self.relationships if not r.identifying]
