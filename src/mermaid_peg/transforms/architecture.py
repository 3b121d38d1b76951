"""Architecture diagram transform."""

from __future__ import annotations

from mermaid_peg.grammars.architecture import ArchEdgeTree, ArchitectureTree, GroupTree, JunctionTree, ServiceTree
from mermaid_peg.models.architecture import (
    ArchitectureDiagram,
    ArchitectureEdge,
    ArchitectureGroup,
    ArchitectureJunction,
    ArchitectureService,
    Side,
)
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind


class ArchitectureTransform(SharedRules):
    kind = DiagramKind.Architecture

    @pattern(GroupTree)
    def group(self, node: GroupTree) -> ArchitectureGroup:
        label = strip_quotes(node["label"]) or node["group"]
        return ArchitectureGroup(node["group"], label, clean(node["icon"]) or None, node["parent"])

    @pattern(ServiceTree)
    def service(self, node: ServiceTree) -> ArchitectureService:
        label = strip_quotes(node["label"]) or node["service"]
        return ArchitectureService(node["service"], label, clean(node["icon"]) or None, node["parent"])

    @pattern(JunctionTree)
    def junction(self, node: JunctionTree) -> ArchitectureJunction:
        return ArchitectureJunction(node["junction"], node["parent"])

    @pattern(ArchEdgeTree)
    def edge(self, node: ArchEdgeTree) -> ArchitectureEdge:
        arrow = node["edge_arrow"]
        return ArchitectureEdge(
            from_id=node["edge_from"],
            from_side=Side(node["from_side"]),
            to_id=node["edge_to"],
            to_side=Side(node["to_side"]),
            arrow_from=arrow.startswith("<"),
            arrow_to=arrow.endswith(">"),
            from_group=node["from_group"] is not None,
            to_group=node["to_group"] is not None,
        )

    @pattern(ArchitectureTree)
    def diagram(self, node: ArchitectureTree) -> ArchitectureDiagram:
        diagram = ArchitectureDiagram()
        for stmt in node["statements"]:
            if isinstance(stmt, (ArchitectureGroup, ArchitectureService, ArchitectureJunction)):
                if stmt.id in diagram.all_ids():
                    raise self.fail(f"'{stmt.id}' is declared twice")
                if isinstance(stmt, ArchitectureGroup):
                    diagram.groups.append(stmt)
                elif isinstance(stmt, ArchitectureService):
                    diagram.services.append(stmt)
                else:
                    diagram.junctions.append(stmt)
            elif isinstance(stmt, ArchitectureEdge):
                diagram.edges.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)

        groups = diagram.group_ids()
        for item in [*diagram.groups, *diagram.services, *diagram.junctions]:
            if item.parent is not None:
                self.require(item.parent, groups, "group")
                if item.parent == item.id:
                    raise self.fail(f"group '{item.id}' cannot contain itself")
        nodes = diagram.node_ids()
        for edge in diagram.edges:
            self.require(edge.from_id, nodes, "service or junction")
            self.require(edge.to_id, nodes, "service or junction")
            for endpoint, grouped in ((edge.from_id, edge.from_group), (edge.to_id, edge.to_group)):
                service = diagram.find_service(endpoint)
                if grouped and service is not None and service.parent is None:
                    raise self.fail(f"'{endpoint}{{group}}' used but '{endpoint}' is not in a group")
        return diagram
