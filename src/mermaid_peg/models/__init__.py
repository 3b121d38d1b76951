"""Typed diagram models, one root dataclass per dialect."""

from mermaid_peg.models.architecture import ArchitectureDiagram
from mermaid_peg.models.base import Diagram
from mermaid_peg.models.block import BlockDiagram
from mermaid_peg.models.c4 import C4Diagram
from mermaid_peg.models.class_diagram import ClassDiagram
from mermaid_peg.models.er_diagram import ErDiagram
from mermaid_peg.models.flowchart import FlowchartDiagram
from mermaid_peg.models.gantt import GanttChart
from mermaid_peg.models.git_graph import GitGraph
from mermaid_peg.models.info import ErrorDiagram, InfoDiagram
from mermaid_peg.models.kanban import Kanban
from mermaid_peg.models.mindmap import Mindmap
from mermaid_peg.models.packet import PacketDiagram
from mermaid_peg.models.pie import PieChart
from mermaid_peg.models.quadrant import QuadrantChart
from mermaid_peg.models.radar import RadarChart
from mermaid_peg.models.requirement import RequirementDiagram
from mermaid_peg.models.sankey import SankeyDiagram
from mermaid_peg.models.sequence import SequenceDiagram
from mermaid_peg.models.state_diagram import StateDiagram
from mermaid_peg.models.timeline import Timeline
from mermaid_peg.models.treemap import Treemap
from mermaid_peg.models.user_journey import UserJourney
from mermaid_peg.models.xychart import XYChart

DiagramModel = (
    FlowchartDiagram
    | SequenceDiagram
    | ClassDiagram
    | StateDiagram
    | ErDiagram
    | UserJourney
    | GanttChart
    | PieChart
    | Timeline
    | QuadrantChart
    | GitGraph
    | Mindmap
    | Kanban
    | RadarChart
    | BlockDiagram
    | RequirementDiagram
    | XYChart
    | ArchitectureDiagram
    | SankeyDiagram
    | PacketDiagram
    | Treemap
    | C4Diagram
    | InfoDiagram
    | ErrorDiagram
)

__all__ = [
    "ArchitectureDiagram",
    "BlockDiagram",
    "C4Diagram",
    "ClassDiagram",
    "Diagram",
    "DiagramModel",
    "ErDiagram",
    "ErrorDiagram",
    "FlowchartDiagram",
    "GanttChart",
    "GitGraph",
    "InfoDiagram",
    "Kanban",
    "Mindmap",
    "PacketDiagram",
    "PieChart",
    "QuadrantChart",
    "RadarChart",
    "RequirementDiagram",
    "SankeyDiagram",
    "SequenceDiagram",
    "StateDiagram",
    "Timeline",
    "Treemap",
    "UserJourney",
    "XYChart",
]
