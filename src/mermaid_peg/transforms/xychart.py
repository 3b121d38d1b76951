"""XY chart transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.xychart import CategoryTree, ChartAxisTree, SeriesTree, XYChartTree
from mermaid_peg.models.xychart import ChartAxis, ChartOrientation, SeriesKind, XYChart, XYSeries
from mermaid_peg.syntax.common import clean, strip_quotes, unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind


@dataclass
class AxisDecl:
    name: str
    axis: ChartAxis


class XYChartTransform(SharedRules):
    kind = DiagramKind.XYChart

    @pattern(CategoryTree)
    def category(self, node: CategoryTree) -> str:
        return strip_quotes(node["category"])

    @pattern(ChartAxisTree)
    def chart_axis(self, node: ChartAxisTree) -> AxisDecl:
        name = node["chart_axis"].lower()
        axis = ChartAxis(title=strip_quotes(node["axis_title"]) or None, categories=node["categories"] or [])
        if node["range_min"] is not None:
            axis.min, axis.max = float(node["range_min"]), float(node["range_max"])
            if axis.min > axis.max:
                raise self.fail(f"{name} range {node['range_min']} --> {node['range_max']} runs backwards")
        if name == "y-axis" and axis.categorical:
            raise self.fail("y-axis takes a numeric range, not categories")
        return AxisDecl(name, axis)

    @pattern(SeriesTree)
    def series(self, node: SeriesTree) -> XYSeries:
        kind = SeriesKind.Line if node["series"].lower() == "line" else SeriesKind.Bar
        title = unescape(node["series_title"]) if node["series_title"] is not None else None
        return XYSeries(kind=kind, values=[float(v) for v in split_list(node["points"])], title=title)

    @pattern(XYChartTree)
    def diagram(self, node: XYChartTree) -> XYChart:
        chart = XYChart()
        if node["orientation"]:
            chart.orientation = ChartOrientation(clean(node["orientation"]).lower())
        for stmt in node["statements"]:
            if isinstance(stmt, XYSeries):
                chart.series.append(stmt)
            elif isinstance(stmt, AxisDecl):
                if stmt.name == "x-axis":
                    chart.x_axis = stmt.axis
                else:
                    chart.y_axis = stmt.axis
            elif isinstance(stmt, Setting):
                apply_setting(chart, stmt)
        if chart.x_axis.categorical:
            expected = len(chart.x_axis.categories)
            for index, series in enumerate(chart.series, 1):
                if len(series.values) != expected:
                    raise self.fail(
                        f"{series.kind.name.lower()} series {index} has {len(series.values)} values "
                        f"for {expected} x-axis categories"
                    )
        return chart
