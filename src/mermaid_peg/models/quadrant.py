"""Quadrant chart model."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.types import DiagramKind


@dataclass
class QuadrantPoint:
    label: str
    x: float
    y: float
    class_name: str | None = None
    radius: float | None = None
    color: str | None = None
    stroke_color: str | None = None
    stroke_width: str | None = None

    def is_valid(self) -> bool:
        return bool(self.label) and 0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0

    def quadrant(self) -> int:
        """1 top right, 2 top left, 3 bottom left, 4 bottom right."""
        if self.y >= 0.5:
            return 1 if self.x >= 0.5 else 2
        return 3 if self.x < 0.5 else 4


@dataclass
class QuadrantChart:
    title: str | None = None
    x_axis_left: str | None = None
    x_axis_right: str | None = None
    y_axis_bottom: str | None = None
    y_axis_top: str | None = None
    quadrant_labels: dict[int, str] = field(default_factory=dict)
    points: list[QuadrantPoint] = field(default_factory=list)
    class_defs: dict[str, str] = field(default_factory=dict)
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Quadrant

    def is_valid(self) -> bool:
        if not self.points or not all(p.is_valid() for p in self.points):
            return False
        return all(p.class_name in self.class_defs for p in self.points if p.class_name)

    def find_point(self, label: str) -> QuadrantPoint | None:
        return next((p for p in self.points if p.label == label), None)

    def points_in_quadrant(self, quadrant: int) -> list[QuadrantPoint]:
        return [p for p in self.points if p.quadrant() == quadrant]

    def quadrant_label(self, quadrant: int) -> str | None:
        return self.quadrant_labels.get(quadrant)
