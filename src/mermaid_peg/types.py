"""Shared type definitions for mermaid-peg.

Enums used across grammars, transforms and models.
"""

from __future__ import annotations

from enum import Enum, auto


class DiagramKind(Enum):
    """Closed set of dialect identifiers, in detection order."""

    Flowchart = "flowchart"
    Sequence = "sequence"
    ClassDiagram = "class_diagram"
    StateDiagram = "state_diagram"
    ErDiagram = "er_diagram"
    UserJourney = "user_journey"
    Gantt = "gantt"
    Pie = "pie"
    Timeline = "timeline"
    Quadrant = "quadrant"
    GitGraph = "git_graph"
    Mindmap = "mindmap"
    Kanban = "kanban"
    Radar = "radar"
    Block = "block"
    Requirement = "requirement"
    XYChart = "xychart"
    Architecture = "architecture"
    Sankey = "sankey"
    Packet = "packet"
    Treemap = "treemap"
    C4 = "c4"
    Info = "info"
    Error = "error"

    @classmethod
    def from_name(cls, name: str) -> DiagramKind:
        """Look up a kind by its id, accepting dashes and any case."""
        key = name.strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown diagram type '{name}'") from None


class Direction(Enum):
    LR = auto()
    RL = auto()
    TD = auto()
    BT = auto()

    @classmethod
    def default(cls) -> Direction:
        return cls.TD

    @classmethod
    def from_token(cls, token: str | None) -> Direction:
        """Map a direction keyword (TB is an alias of TD) to a Direction."""
        if not token:
            return cls.default()
        key = token.strip().upper()
        if key == "TB":
            return cls.TD
        return cls[key]
