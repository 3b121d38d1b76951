"""Pie chart model."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.types import DiagramKind


@dataclass
class PieSlice:
    label: str
    value: float

    def is_valid(self) -> bool:
        return bool(self.label) and self.value >= 0


@dataclass
class PieChart:
    title: str | None = None
    show_data: bool = False
    slices: list[PieSlice] = field(default_factory=list)
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Pie

    def is_valid(self) -> bool:
        return bool(self.slices) and all(s.is_valid() for s in self.slices) and self.total() > 0

    def total(self) -> float:
        return sum(s.value for s in self.slices)

    def percentage(self, pie_slice: PieSlice) -> float:
        total = self.total()
        if total == 0:
            return 0.0
        return pie_slice.value / total * 100

    def angle(self, pie_slice: PieSlice) -> float:
        """Sweep of the slice in degrees."""
        return self.percentage(pie_slice) * 3.6

    def find_slice(self, label: str) -> PieSlice | None:
        return next((s for s in self.slices if s.label == label), None)
