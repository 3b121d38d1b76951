"""Pie chart transform."""

from __future__ import annotations

from mermaid_peg.grammars.pie import PieTree, SliceTree
from mermaid_peg.models.pie import PieChart, PieSlice
from mermaid_peg.syntax.common import clean, unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind


class PieTransform(SharedRules):
    kind = DiagramKind.Pie

    @pattern(SliceTree)
    def pie_slice(self, node: SliceTree) -> PieSlice:
        label = unescape(node["label"])
        value = float(node["value"])
        if value < 0:
            raise self.fail(f"slice '{label}' has negative value {node['value']}")
        return PieSlice(label=label, value=value)

    @pattern(PieTree)
    def diagram(self, node: PieTree) -> PieChart:
        chart = PieChart(show_data=node["show_data"] is not None)
        if node["header_title"]:
            chart.title = clean(node["header_title"])
        for stmt in node["statements"]:
            if isinstance(stmt, PieSlice):
                chart.slices.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(chart, stmt)
        return chart
