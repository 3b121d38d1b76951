"""Radar chart transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.radar import AxesTree, AxisItemTree, CurveTree, RadarTree, RadarValueTree
from mermaid_peg.models.radar import Graticule, RadarAxis, RadarChart, RadarCurve
from mermaid_peg.syntax.common import unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Option, Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind


@dataclass
class Axes:
    items: list[RadarAxis]


@dataclass
class CurveValue:
    axis: str | None
    value: float


@dataclass
class Curve:
    id: str
    label: str
    values: list[CurveValue]


class RadarTransform(SharedRules):
    kind = DiagramKind.Radar

    @pattern(AxisItemTree)
    def axis(self, node: AxisItemTree) -> RadarAxis:
        label = unescape(node["axis_label"]) if node["axis_label"] is not None else node["axis_id"]
        return RadarAxis(node["axis_id"], label)

    @pattern(AxesTree)
    def axes(self, node: AxesTree) -> Axes:
        return Axes(node["axes"])

    @pattern(RadarValueTree)
    def value(self, node: RadarValueTree) -> CurveValue:
        return CurveValue(node["value_axis"], float(node["value"]))

    @pattern(CurveTree)
    def curve(self, node: CurveTree) -> Curve:
        label = unescape(node["curve_label"]) if node["curve_label"] is not None else node["curve"]
        named = {v.axis is not None for v in node["values"]}
        if len(named) > 1:
            raise self.fail(f"curve '{node['curve']}' mixes named and positional values")
        return Curve(node["curve"], label, node["values"])

    @pattern(RadarTree)
    def diagram(self, node: RadarTree) -> RadarChart:
        chart = RadarChart()
        curves: list[Curve] = []
        for stmt in node["statements"]:
            if isinstance(stmt, Axes):
                for axis in stmt.items:
                    if chart.find_axis(axis.id) is not None:
                        raise self.fail(f"duplicate axis '{axis.id}'")
                    chart.axes.append(axis)
            elif isinstance(stmt, Curve):
                curves.append(stmt)
            elif isinstance(stmt, Option):
                self._option(chart, stmt)
            elif isinstance(stmt, Setting):
                apply_setting(chart, stmt)
        axis_ids = [a.id for a in chart.axes]
        for curve in curves:
            chart.curves.append(self._resolve(curve, axis_ids))
        return chart

    def _resolve(self, curve: Curve, axis_ids: list[str]) -> RadarCurve:
        if len(curve.values) > len(axis_ids):
            raise self.fail(f"curve '{curve.id}' has {len(curve.values)} values but there are {len(axis_ids)} axes")
        resolved = RadarCurve(curve.id, curve.label)
        for axis_id, item in zip(axis_ids, curve.values):
            if item.axis is not None:
                self.require(item.axis, axis_ids, "axis")
                axis_id = item.axis
            resolved.values[axis_id] = item.value
        return resolved

    def _option(self, chart: RadarChart, option: Option) -> None:
        key, value = option.key.lower(), option.value
        try:
            if key == "ticks":
                chart.ticks = int(value)
            elif key == "showlegend":
                if value.lower() not in ("true", "false"):
                    raise ValueError(value)
                chart.show_legend = value.lower() == "true"
            elif key == "graticule":
                chart.graticule = Graticule("circle" if value.lower() == "circular" else value.lower())
            elif key == "min":
                chart.min = float(value)
            elif key == "max":
                chart.max = float(value)
        except ValueError:
            raise self.fail(f"bad value '{value}' for '{option.key}'") from None
