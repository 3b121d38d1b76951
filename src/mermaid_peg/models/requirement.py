"""Requirement diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind, Direction


class RequirementKind(Enum):
    Requirement = "requirement"
    Functional = "functionalRequirement"
    Interface = "interfaceRequirement"
    Performance = "performanceRequirement"
    Physical = "physicalRequirement"
    DesignConstraint = "designConstraint"

    @classmethod
    def from_keyword(cls, word: str) -> RequirementKind:
        key = word.lower()
        return next(member for member in cls if member.value.lower() == key)


class RiskLevel(Enum):
    Low = "low"
    Medium = "medium"
    High = "high"


class VerifyMethod(Enum):
    Analysis = "analysis"
    Inspection = "inspection"
    Test = "test"
    Demonstration = "demonstration"


class RelationKind(Enum):
    Contains = "contains"
    Copies = "copies"
    Derives = "derives"
    Satisfies = "satisfies"
    Verifies = "verifies"
    Refines = "refines"
    Traces = "traces"


@dataclass
class Requirement:
    name: str
    kind: RequirementKind = RequirementKind.Requirement
    req_id: str | None = None
    text: str | None = None
    risk: RiskLevel | None = None
    verify_method: VerifyMethod | None = None
    classes: list[str] = field(default_factory=list)
    style: str | None = None

    def is_valid(self) -> bool:
        return bool(self.name)


@dataclass
class Element:
    name: str
    type: str | None = None
    docref: str | None = None
    classes: list[str] = field(default_factory=list)
    style: str | None = None

    def is_valid(self) -> bool:
        return bool(self.name)


@dataclass
class RequirementRelation:
    source: str
    target: str
    kind: RelationKind

    def is_valid(self) -> bool:
        return bool(self.source) and bool(self.target)


@dataclass
class RequirementDiagram:
    requirements: list[Requirement] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)
    relationships: list[RequirementRelation] = field(default_factory=list)
    class_defs: dict[str, str] = field(default_factory=dict)
    direction: Direction = field(default_factory=Direction.default)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Requirement

    def is_valid(self) -> bool:
        if not self.requirements and not self.elements:
            return False
        names = self.names()
        if not unique(names):
            return False
        parts = [*self.requirements, *self.elements, *self.relationships]
        if not all(part.is_valid() for part in parts):
            return False
        refs = [r.source for r in self.relationships] + [r.target for r in self.relationships]
        return references_resolve(names, refs)

    def names(self) -> list[str]:
        return [r.name for r in self.requirements] + [e.name for e in self.elements]

    def find_requirement(self, name: str) -> Requirement | None:
        return next((r for r in self.requirements if r.name == name), None)

    def find_element(self, name: str) -> Element | None:
        return next((e for e in self.elements if e.name == name), None)

    def relationships_from(self, name: str) -> list[RequirementRelation]:
        return [r for r in self.relationships if r.source == name]

    def relationships_to(self, name: str) -> list[RequirementRelation]:
        return [r for r in self.relationships if r.target == name]

    def requirements_by_risk(self, risk: RiskLevel) -> list[Requirement]:
        return [r for r in self.requirements if r.risk is risk]

    def satisfied_by(self, requirement: str) -> list[str]:
        """Names of everything with a ``satisfies`` relation to ``requirement``."""
        return [
            r.source for r in self.relationships if r.target == requirement and r.kind is RelationKind.Satisfies
        ]
