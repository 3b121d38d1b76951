"""XY chart model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.types import DiagramKind


class ChartOrientation(Enum):
    Vertical = "vertical"
    Horizontal = "horizontal"


class SeriesKind(Enum):
    Line = auto()  # line [..]
    Bar = auto()  # bar [..]


@dataclass
class ChartAxis:
    title: str | None = None
    categories: list[str] = field(default_factory=list)
    min: float | None = None
    max: float | None = None

    def is_valid(self) -> bool:
        if self.min is not None and self.max is not None and self.min > self.max:
            return False
        return not (self.categories and self.min is not None)

    @property
    def categorical(self) -> bool:
        return bool(self.categories)


@dataclass
class XYSeries:
    kind: SeriesKind
    values: list[float] = field(default_factory=list)
    title: str | None = None

    def is_valid(self) -> bool:
        return bool(self.values)


@dataclass
class XYChart:
    x_axis: ChartAxis = field(default_factory=ChartAxis)
    y_axis: ChartAxis = field(default_factory=ChartAxis)
    series: list[XYSeries] = field(default_factory=list)
    orientation: ChartOrientation = ChartOrientation.Vertical
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.XYChart

    def is_valid(self) -> bool:
        if not self.series or not all(s.is_valid() for s in self.series):
            return False
        if not self.x_axis.is_valid() or not self.y_axis.is_valid() or self.y_axis.categorical:
            return False
        if self.x_axis.categorical:
            return all(len(s.values) == len(self.x_axis.categories) for s in self.series)
        return True

    def bars(self) -> list[XYSeries]:
        return [s for s in self.series if s.kind is SeriesKind.Bar]

    def lines(self) -> list[XYSeries]:
        return [s for s in self.series if s.kind is SeriesKind.Line]

    def value_range(self) -> tuple[float, float]:
        """The y-axis range, from the axis when given and the data otherwise."""
        values = [v for s in self.series for v in s.values]
        low = self.y_axis.min if self.y_axis.min is not None else min(values, default=0.0)
        high = self.y_axis.max if self.y_axis.max is not None else max(values, default=0.0)
        return low, high

    def point_count(self) -> int:
        return max((len(s.values) for s in self.series), default=0)
