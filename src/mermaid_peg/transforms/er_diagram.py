"""Entity relationship diagram transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.er_diagram import (
    DirectionTree,
    EntityRefTree,
    EntityTree,
    ErAttributeTree,
    ErDiagramTree,
    ErRelationshipTree,
)
from mermaid_peg.models.er_diagram import (
    LEFT_CARDINALITY,
    RELATIONSHIP_BY_OPERATOR,
    RIGHT_CARDINALITY,
    ErAttribute,
    ErDiagram,
    ErEntity,
    ErRelationship,
    KeyType,
)
from mermaid_peg.syntax.common import clean, strip_quotes, unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class EntityRef:
    entity_id: str
    label: str | None


class ErDiagramTransform(SharedRules):
    kind = DiagramKind.ErDiagram

    @pattern(ErAttributeTree)
    def attribute(self, node: ErAttributeTree) -> ErAttribute:
        keys = [KeyType(key.upper()) for key in split_list(node["keys"])]
        comment = unescape(node["comment"]) if node["comment"] is not None else None
        return ErAttribute(name=node["attr_name"], type=node["attr_type"], keys=keys, comment=comment)

    @pattern(EntityTree)
    def entity(self, node: EntityTree) -> ErEntity:
        names = [a.name for a in node["attributes"]]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise self.fail(f"entity '{node['entity']}' repeats attribute '{duplicates[0]}'")
        label = strip_quotes(node["alias"]) or node["entity"]
        return ErEntity(id=node["entity"], label=label, attributes=node["attributes"])

    @pattern(EntityRefTree)
    def entity_ref(self, node: EntityRefTree) -> EntityRef:
        return EntityRef(node["entity_ref"], strip_quotes(node["alias"]) or None)

    @pattern(ErRelationshipTree)
    def relationship(self, node: ErRelationshipTree) -> ErRelationship:
        return ErRelationship(
            from_id=node["source"],
            to_id=node["target"],
            cardinality_from=LEFT_CARDINALITY[node["left_card"]],
            cardinality_to=RIGHT_CARDINALITY[node["right_card"]],
            kind=RELATIONSHIP_BY_OPERATOR[node["operator"]],
            label=strip_quotes(node["label"]) or None,
        )

    @pattern(DirectionTree)
    def direction(self, node: DirectionTree) -> Direction:
        return Direction.from_token(node["direction"])

    @pattern(ErDiagramTree)
    def diagram(self, node: ErDiagramTree) -> ErDiagram:
        diagram = ErDiagram()
        for stmt in node["statements"]:
            if isinstance(stmt, ErEntity):
                existing = diagram.find_entity(stmt.id)
                if existing is None:
                    diagram.entities.append(stmt)
                    continue
                if stmt.label != stmt.id:
                    existing.label = stmt.label
                for attribute in stmt.attributes:
                    if existing.find_attribute(attribute.name) is None:
                        existing.attributes.append(attribute)
            elif isinstance(stmt, EntityRef):
                entity = self._ensure(diagram, stmt.entity_id)
                if stmt.label:
                    entity.label = stmt.label
            elif isinstance(stmt, ErRelationship):
                self._ensure(diagram, stmt.from_id)
                self._ensure(diagram, stmt.to_id)
                diagram.relationships.append(stmt)
            elif isinstance(stmt, Direction):
                diagram.direction = stmt
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)
        return diagram

    def _ensure(self, diagram: ErDiagram, entity_id: str) -> ErEntity:
        entity = diagram.find_entity(entity_id)
        if entity is None:
            entity = ErEntity(id=entity_id, label=clean(entity_id))
            diagram.entities.append(entity)
        return entity
