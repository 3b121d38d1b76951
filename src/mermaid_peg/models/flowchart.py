"""Flowchart model: nodes, edges and subgraphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve
from mermaid_peg.types import DiagramKind, Direction


class NodeShape(Enum):
    Rectangle = auto()  # id[Label]
    Rounded = auto()  # id(Label)
    Stadium = auto()  # id([Label])
    Subroutine = auto()  # id[[Label]]
    Cylinder = auto()  # id[(Label)]
    Circle = auto()  # id((Label))
    DoubleCircle = auto()  # id(((Label)))
    Diamond = auto()  # id{Label}
    Hexagon = auto()  # id{{Label}}
    Parallelogram = auto()  # id[/Label/]
    ParallelogramAlt = auto()  # id[\Label\]
    Trapezoid = auto()  # id[/Label\]
    TrapezoidAlt = auto()  # id[\Label/]
    Asymmetric = auto()  # id>Label]

    @classmethod
    def default(cls) -> NodeShape:
        return cls.Rectangle


SHAPE_BY_DELIMITERS: dict[tuple[str, str], NodeShape] = {
    ("[", "]"): NodeShape.Rectangle,
    ("(", ")"): NodeShape.Rounded,
    ("([", "])"): NodeShape.Stadium,
    ("[[", "]]"): NodeShape.Subroutine,
    ("[(", ")]"): NodeShape.Cylinder,
    ("((", "))"): NodeShape.Circle,
    ("(((", ")))"): NodeShape.DoubleCircle,
    ("{", "}"): NodeShape.Diamond,
    ("{{", "}}"): NodeShape.Hexagon,
    ("[/", "/]"): NodeShape.Parallelogram,
    ("[\\", "\\]"): NodeShape.ParallelogramAlt,
    ("[/", "\\]"): NodeShape.Trapezoid,
    ("[\\", "/]"): NodeShape.TrapezoidAlt,
    (">", "]"): NodeShape.Asymmetric,
}


class EdgeType(Enum):
    Arrow = auto()  # -->
    Line = auto()  # ---
    DottedArrow = auto()  # -.->
    DottedLine = auto()  # -.-
    ThickArrow = auto()  # ==>
    ThickLine = auto()  # ===
    CrossArrow = auto()  # --x
    CircleArrow = auto()  # --o
    BidirArrow = auto()  # <-->
    BidirDotted = auto()  # <-.->
    BidirThick = auto()  # <==>

    @property
    def directed(self) -> bool:
        return self not in (EdgeType.Line, EdgeType.DottedLine, EdgeType.ThickLine)

    @property
    def bidirectional(self) -> bool:
        return self in (EdgeType.BidirArrow, EdgeType.BidirDotted, EdgeType.BidirThick)


EDGE_BY_TOKEN: dict[str, EdgeType] = {
    "-->": EdgeType.Arrow,
    "---": EdgeType.Line,
    "-.->": EdgeType.DottedArrow,
    ".->": EdgeType.DottedArrow,
    "-.-": EdgeType.DottedLine,
    ".-": EdgeType.DottedLine,
    "==>": EdgeType.ThickArrow,
    "===": EdgeType.ThickLine,
    "--x": EdgeType.CrossArrow,
    "--o": EdgeType.CircleArrow,
    "<-->": EdgeType.BidirArrow,
    "<-.->": EdgeType.BidirDotted,
    "<==>": EdgeType.BidirThick,
}


@dataclass
class FlowchartNode:
    id: str
    label: str
    shape: NodeShape = field(default_factory=NodeShape.default)
    classes: list[str] = field(default_factory=list)
    style: str | None = None

    @classmethod
    def bare(cls, id: str) -> FlowchartNode:
        """Create a bare node (id = label, default Rectangle shape)."""
        return cls(id=id, label=id)


@dataclass
class FlowchartEdge:
    from_id: str
    to_id: str
    edge_type: EdgeType = EdgeType.Arrow
    label: str | None = None
    style: str | None = None


@dataclass
class Subgraph:
    id: str
    title: str
    node_ids: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    parent: str | None = None
    direction: Direction | None = None


@dataclass
class ClickAction:
    node_id: str
    action: str


@dataclass
class FlowchartDiagram:
    direction: Direction = field(default_factory=Direction.default)
    nodes: list[FlowchartNode] = field(default_factory=list)
    edges: list[FlowchartEdge] = field(default_factory=list)
    subgraphs: list[Subgraph] = field(default_factory=list)
    class_defs: dict[str, str] = field(default_factory=dict)
    clicks: list[ClickAction] = field(default_factory=list)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Flowchart

    def is_valid(self) -> bool:
        ids = [n.id for n in self.nodes]
        if not ids:
            return False
        return references_resolve(ids, [e.from_id for e in self.edges] + [e.to_id for e in self.edges])

    def find_node(self, node_id: str) -> FlowchartNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def find_subgraph(self, subgraph_id: str) -> Subgraph | None:
        return next((s for s in self.subgraphs if s.id == subgraph_id), None)

    def edges_from(self, node_id: str) -> list[FlowchartEdge]:
        return [e for e in self.edges if e.from_id == node_id]

    def edges_to(self, node_id: str) -> list[FlowchartEdge]:
        return [e for e in self.edges if e.to_id == node_id]

    def upsert_node(self, node: FlowchartNode, explicit: bool) -> FlowchartNode:
        """Add ``node`` or merge it into an existing node with the same id.

        A later explicit shape or label replaces the earlier one; a bare
        reference never does.
        """
        existing = self.find_node(node.id)
        if existing is None:
            self.nodes.append(node)
            return node
        if explicit:
            existing.label = node.label
            existing.shape = node.shape
        for name in node.classes:
            if name not in existing.classes:
                existing.classes.append(name)
        return existing
