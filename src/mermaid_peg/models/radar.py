"""Radar chart model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind


class Graticule(Enum):
    Circle = "circle"
    Polygon = "polygon"


@dataclass
class RadarAxis:
    id: str
    label: str

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class RadarCurve:
    id: str
    label: str
    values: dict[str, float] = field(default_factory=dict)

    def is_valid(self) -> bool:
        return bool(self.id) and bool(self.values)

    def value_for(self, axis_id: str) -> float | None:
        return self.values.get(axis_id)


@dataclass
class RadarChart:
    axes: list[RadarAxis] = field(default_factory=list)
    curves: list[RadarCurve] = field(default_factory=list)
    ticks: int = 5
    show_legend: bool = True
    graticule: Graticule = Graticule.Circle
    min: float = 0.0
    max: float | None = None
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Radar

    def is_valid(self) -> bool:
        if not self.axes or not self.curves:
            return False
        ids = [a.id for a in self.axes]
        if not unique(ids) or not unique(c.id for c in self.curves):
            return False
        if not all(a.is_valid() for a in self.axes) or not all(c.is_valid() for c in self.curves):
            return False
        return references_resolve(ids, [axis for c in self.curves for axis in c.values])

    def find_axis(self, axis_id: str) -> RadarAxis | None:
        return next((a for a in self.axes if a.id == axis_id), None)

    def find_curve(self, curve_id: str) -> RadarCurve | None:
        return next((c for c in self.curves if c.id == curve_id), None)

    def max_value(self) -> float:
        """The explicit ``max`` or the largest value on any curve."""
        if self.max is not None:
            return self.max
        return max((v for c in self.curves for v in c.values.values()), default=0.0)
