"""Process-wide table mapping diagram kinds to their handlers.

The built-in dialects are installed lazily the first time the table is
read. Tests may ``clear()`` the table, register their own handlers and
``reset()`` it back to the built-ins afterwards.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from mermaid_peg.parsers.base import Handlers, TransformFactory
from mermaid_peg.syntax.engine import Grammar
from mermaid_peg.types import DiagramKind

logger = logging.getLogger(__name__)


class DiagramRegistry:
    def __init__(self, builtins: bool = True) -> None:
        self._lock = threading.RLock()
        self._handlers: dict[DiagramKind, Handlers] = {}
        self._builtins = builtins
        self._loaded = not builtins

    def register(
        self,
        kind: DiagramKind,
        grammar: Callable[[], Grammar],
        transform: TransformFactory,
    ) -> Handlers:
        """Bind ``kind`` to a grammar factory and a transform factory."""
        handlers = Handlers(kind, grammar, transform)
        with self._lock:
            self._ensure_loaded()
            if kind in self._handlers:
                logger.debug("replacing handlers for %s", kind.value)
            self._handlers[kind] = handlers
        return handlers

    def lookup(self, kind: DiagramKind) -> Handlers | None:
        with self._lock:
            self._ensure_loaded()
            return self._handlers.get(kind)

    def registered(self, kind: DiagramKind) -> bool:
        return self.lookup(kind) is not None

    def known_types(self) -> list[DiagramKind]:
        """Registered kinds in registration order."""
        with self._lock:
            self._ensure_loaded()
            return list(self._handlers)

    def unregister(self, kind: DiagramKind) -> Handlers | None:
        with self._lock:
            self._ensure_loaded()
            return self._handlers.pop(kind, None)

    def clear(self) -> None:
        """Empty the table without reinstalling the built-ins."""
        with self._lock:
            self._handlers.clear()
            self._loaded = True

    def reset(self) -> None:
        """Restore the built-in table."""
        with self._lock:
            self._handlers.clear()
            self._loaded = not self._builtins
            self._ensure_loaded()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        register_builtins(self)
        logger.debug("registered %d built-in diagram types", len(self._handlers))


def register_builtins(registry: DiagramRegistry) -> None:
    """Register every dialect that ships with mermaid-peg."""
    from mermaid_peg.grammars import (
        architecture,
        block,
        c4,
        class_diagram,
        er_diagram,
        error,
        flowchart,
        gantt,
        git_graph,
        info,
        kanban,
        mindmap,
        packet,
        pie,
        quadrant,
        radar,
        requirement,
        sankey,
        sequence,
        state_diagram,
        timeline,
        treemap,
        user_journey,
        xychart,
    )
    from mermaid_peg.transforms.architecture import ArchitectureTransform
    from mermaid_peg.transforms.block import BlockTransform
    from mermaid_peg.transforms.c4 import C4Transform
    from mermaid_peg.transforms.class_diagram import ClassDiagramTransform
    from mermaid_peg.transforms.er_diagram import ErDiagramTransform
    from mermaid_peg.transforms.flowchart import FlowchartTransform
    from mermaid_peg.transforms.gantt import GanttTransform
    from mermaid_peg.transforms.git_graph import GitGraphTransform
    from mermaid_peg.transforms.info import ErrorTransform, InfoTransform
    from mermaid_peg.transforms.kanban import KanbanTransform
    from mermaid_peg.transforms.mindmap import MindmapTransform
    from mermaid_peg.transforms.packet import PacketTransform
    from mermaid_peg.transforms.pie import PieTransform
    from mermaid_peg.transforms.quadrant import QuadrantTransform
    from mermaid_peg.transforms.radar import RadarTransform
    from mermaid_peg.transforms.requirement import RequirementTransform
    from mermaid_peg.transforms.sankey import SankeyTransform
    from mermaid_peg.transforms.sequence import SequenceTransform
    from mermaid_peg.transforms.state_diagram import StateDiagramTransform
    from mermaid_peg.transforms.timeline import TimelineTransform
    from mermaid_peg.transforms.treemap import TreemapTransform
    from mermaid_peg.transforms.user_journey import UserJourneyTransform
    from mermaid_peg.transforms.xychart import XYChartTransform

    registry.register(DiagramKind.Flowchart, flowchart.grammar, FlowchartTransform)
    registry.register(DiagramKind.Sequence, sequence.grammar, SequenceTransform)
    registry.register(DiagramKind.ClassDiagram, class_diagram.grammar, ClassDiagramTransform)
    registry.register(DiagramKind.StateDiagram, state_diagram.grammar, StateDiagramTransform)
    registry.register(DiagramKind.ErDiagram, er_diagram.grammar, ErDiagramTransform)
    registry.register(DiagramKind.UserJourney, user_journey.grammar, UserJourneyTransform)
    registry.register(DiagramKind.Gantt, gantt.grammar, GanttTransform)
    registry.register(DiagramKind.Pie, pie.grammar, PieTransform)
    registry.register(DiagramKind.Timeline, timeline.grammar, TimelineTransform)
    registry.register(DiagramKind.Quadrant, quadrant.grammar, QuadrantTransform)
    registry.register(DiagramKind.GitGraph, git_graph.grammar, GitGraphTransform)
    registry.register(DiagramKind.Mindmap, mindmap.grammar, MindmapTransform)
    registry.register(DiagramKind.Kanban, kanban.grammar, KanbanTransform)
    registry.register(DiagramKind.Radar, radar.grammar, RadarTransform)
    registry.register(DiagramKind.Block, block.grammar, BlockTransform)
    registry.register(DiagramKind.Requirement, requirement.grammar, RequirementTransform)
    registry.register(DiagramKind.XYChart, xychart.grammar, XYChartTransform)
    registry.register(DiagramKind.Architecture, architecture.grammar, ArchitectureTransform)
    registry.register(DiagramKind.Sankey, sankey.grammar, SankeyTransform)
    registry.register(DiagramKind.Packet, packet.grammar, PacketTransform)
    registry.register(DiagramKind.Treemap, treemap.grammar, TreemapTransform)
    registry.register(DiagramKind.C4, c4.grammar, C4Transform)
    registry.register(DiagramKind.Info, info.grammar, InfoTransform)
    registry.register(DiagramKind.Error, error.grammar, ErrorTransform)


default_registry = DiagramRegistry()
