"""Quadrant chart transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.quadrant import AxisTree, PointTree, QuadrantLabelTree, QuadrantTree
from mermaid_peg.models.quadrant import QuadrantChart, QuadrantPoint
from mermaid_peg.syntax.common import clean
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassDef, Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind


@dataclass
class Axis:
    name: str
    low: str
    high: str | None


@dataclass
class QuadrantLabel:
    number: int
    text: str


def parse_style(text: str | None) -> dict[str, str]:
    """``color: #f00, radius: 4`` to a mapping of property names to values."""
    props: dict[str, str] = {}
    for item in split_list(text):
        key, sep, value = item.partition(":")
        if sep:
            props[key.strip().lower()] = value.strip()
    return props


class QuadrantTransform(SharedRules):
    kind = DiagramKind.Quadrant

    @pattern(AxisTree)
    def axis(self, node: AxisTree) -> Axis:
        return Axis(node["axis"].lower(), clean(node["axis_low"]), clean(node["axis_high"]) or None)

    @pattern(QuadrantLabelTree)
    def quadrant(self, node: QuadrantLabelTree) -> QuadrantLabel:
        return QuadrantLabel(int(node["quadrant"][-1]), clean(node["quadrant_label"]))

    @pattern(PointTree)
    def point(self, node: PointTree) -> QuadrantPoint:
        label = clean(node["point"])
        x, y = float(node["x"]), float(node["y"])
        for axis, value in (("x", x), ("y", y)):
            if not 0.0 <= value <= 1.0:
                raise self.fail(f"point '{label}' has {axis} = {value}, expected a value between 0 and 1")
        point = QuadrantPoint(label=label, x=x, y=y, class_name=node["point_class"])
        self._style(point, parse_style(node["point_style"]))
        return point

    def _style(self, point: QuadrantPoint, props: dict[str, str]) -> None:
        if "radius" in props:
            try:
                point.radius = float(props["radius"])
            except ValueError:
                raise self.fail(f"point '{point.label}' has a non-numeric radius '{props['radius']}'") from None
        point.color = props.get("color", point.color)
        point.stroke_color = props.get("stroke-color", point.stroke_color)
        point.stroke_width = props.get("stroke-width", point.stroke_width)

    @pattern(QuadrantTree)
    def diagram(self, node: QuadrantTree) -> QuadrantChart:
        chart = QuadrantChart()
        for stmt in node["statements"]:
            if isinstance(stmt, QuadrantPoint):
                chart.points.append(stmt)
            elif isinstance(stmt, Axis):
                if stmt.name == "x-axis":
                    chart.x_axis_left, chart.x_axis_right = stmt.low, stmt.high
                else:
                    chart.y_axis_bottom, chart.y_axis_top = stmt.low, stmt.high
            elif isinstance(stmt, QuadrantLabel):
                chart.quadrant_labels[stmt.number] = stmt.text
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    chart.class_defs[name] = stmt.props
            elif isinstance(stmt, Setting):
                apply_setting(chart, stmt)
        for point in chart.points:
            if point.class_name:
                self.require(point.class_name, chart.class_defs, "class")
        return chart
