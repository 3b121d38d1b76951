"""Requirement diagram transform."""

from __future__ import annotations

from mermaid_peg.grammars.requirement import (
    DirectionTree,
    ElementTree,
    RelationTree,
    RequirementDiagramTree,
    RequirementTree,
)
from mermaid_peg.models.requirement import (
    Element,
    RelationKind,
    Requirement,
    RequirementDiagram,
    RequirementKind,
    RequirementRelation,
    RiskLevel,
    VerifyMethod,
)
from mermaid_peg.syntax.common import strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import (
    ClassAssign,
    ClassDef,
    Option,
    Setting,
    SharedRules,
    StyleDef,
    apply_setting,
    split_list,
)
from mermaid_peg.types import DiagramKind, Direction

_REQUIREMENT_KEYS = {"id", "text", "risk", "verifymethod"}
_ELEMENT_KEYS = {"type", "docref"}


class RequirementTransform(SharedRules):
    kind = DiagramKind.Requirement

    def _properties(self, owner: str, options: list[Option], allowed: set[str]) -> dict[str, str]:
        props: dict[str, str] = {}
        for option in options:
            key = option.key.lower()
            if key not in allowed:
                raise self.fail(f"'{owner}' cannot have a '{option.key}' property")
            props[key] = option.value
        return props

    @pattern(RequirementTree)
    def requirement(self, node: RequirementTree) -> Requirement:
        name = strip_quotes(node["req_name"])
        props = self._properties(name, node["properties"], _REQUIREMENT_KEYS)
        requirement = Requirement(
            name=name,
            kind=RequirementKind.from_keyword(node["req_kind"]),
            req_id=props.get("id"),
            text=props.get("text"),
            classes=split_list(node["req_classes"]),
        )
        if "risk" in props:
            try:
                requirement.risk = RiskLevel(props["risk"].lower())
            except ValueError:
                raise self.fail(f"requirement '{name}' has unknown risk '{props['risk']}'") from None
        if "verifymethod" in props:
            try:
                requirement.verify_method = VerifyMethod(props["verifymethod"].lower())
            except ValueError:
                raise self.fail(f"requirement '{name}' has unknown verify method '{props['verifymethod']}'") from None
        return requirement

    @pattern(ElementTree)
    def element(self, node: ElementTree) -> Element:
        name = strip_quotes(node["element"])
        props = self._properties(name, node["properties"], _ELEMENT_KEYS)
        return Element(
            name=name,
            type=props.get("type"),
            docref=props.get("docref"),
            classes=split_list(node["element_classes"]),
        )

    @pattern(RelationTree)
    def relation(self, node: RelationTree) -> RequirementRelation:
        left, right = strip_quotes(node["rel_left"]), strip_quotes(node["rel_right"])
        kind = RelationKind(node["rel_type"].lower())
        head, tail = node["rel_head"], node["rel_tail"]
        if head == "-" and tail == "->":
            return RequirementRelation(left, right, kind)
        if head == "<-" and tail == "-":
            return RequirementRelation(right, left, kind)
        raise self.fail(
            f"relationship between '{left}' and '{right}' must read '- {kind.value} ->' or '<- {kind.value} -'"
        )

    @pattern(DirectionTree)
    def direction(self, node: DirectionTree) -> Direction:
        return Direction.from_token(node["direction"])

    @pattern(RequirementDiagramTree)
    def diagram(self, node: RequirementDiagramTree) -> RequirementDiagram:
        diagram = RequirementDiagram()
        styles: list[StyleDef] = []
        assigns: list[ClassAssign] = []
        for stmt in node["statements"]:
            if isinstance(stmt, (Requirement, Element)):
                if stmt.name in diagram.names():
                    raise self.fail(f"'{stmt.name}' is declared twice")
                if isinstance(stmt, Requirement):
                    diagram.requirements.append(stmt)
                else:
                    diagram.elements.append(stmt)
            elif isinstance(stmt, RequirementRelation):
                diagram.relationships.append(stmt)
            elif isinstance(stmt, Direction):
                diagram.direction = stmt
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    diagram.class_defs[name] = stmt.props
            elif isinstance(stmt, StyleDef):
                styles.append(stmt)
            elif isinstance(stmt, ClassAssign):
                assigns.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)

        names = diagram.names()
        for relation in diagram.relationships:
            self.require(relation.source, names, "requirement or element")
            self.require(relation.target, names, "requirement or element")
        for style in styles:
            target = strip_quotes(style.target)
            self.require(target, names, "requirement or element")
            item = diagram.find_requirement(target) or diagram.find_element(target)
            if item is not None:
                item.style = style.props
        for assign in assigns:
            for target in map(strip_quotes, assign.targets):
                self.require(target, names, "requirement or element")
                item = diagram.find_requirement(target) or diagram.find_element(target)
                if item is not None and assign.class_name not in item.classes:
                    item.classes.append(assign.class_name)
        return diagram
