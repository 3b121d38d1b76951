"""Gantt chart transform."""

from __future__ import annotations

import re
from dataclasses import dataclass

from mermaid_peg.grammars.gantt import SETTINGS, GanttClickTree, GanttSectionTree, GanttSettingTree, GanttTaskTree, GanttTree
from mermaid_peg.models.gantt import GanttChart, GanttSection, GanttTask, TaskTag
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind

DEFAULT_SECTION = "Default"

_DURATION_RE = re.compile(r"^\d+(\.\d+)?(ms|s|m|h|d|w|M|y)$")
_DATE_RE = re.compile(r"^\d+[-/:.]")
_TAGS = {tag.value: tag for tag in TaskTag}
_CANONICAL = {name.lower(): name for name in SETTINGS}
_FLAGS = {"inclusiveEndDates": "inclusive_end_dates", "topAxis": "top_axis"}
_VALUES = {
    "dateFormat": "date_format",
    "axisFormat": "axis_format",
    "tickInterval": "tick_interval",
    "todayMarker": "today_marker",
    "weekday": "weekday",
    "displayMode": "display_mode",
}


@dataclass
class Section:
    name: str


@dataclass
class Click:
    task_id: str
    href: str | None = None
    callback: str | None = None


class GanttTransform(SharedRules):
    kind = DiagramKind.Gantt

    @pattern(GanttSettingTree)
    def setting(self, node: GanttSettingTree) -> Setting:
        return Setting(_CANONICAL[node["setting"].lower()], clean(node["setting_value"]))

    @pattern(GanttSectionTree)
    def section(self, node: GanttSectionTree) -> Section:
        return Section(clean(node["section"]))

    @pattern(GanttClickTree)
    def click(self, node: GanttClickTree) -> Click:
        target = clean(node["click_target"])
        if node["click_kind"].lower() == "href":
            return Click(node["click"], href=strip_quotes(target))
        return Click(node["click"], callback=target)

    @pattern(GanttTaskTree)
    def task(self, node: GanttTaskTree) -> GanttTask:
        task = GanttTask(description=clean(node["task"]))
        items = split_list(node["details"])
        while items and items[0] in _TAGS:
            task.tags.append(_TAGS[items.pop(0)])
        if len(items) > 3:
            raise self.fail(f"task '{task.description}' has too many details: {clean(node['details'])}")
        if len(items) == 3 or (len(items) == 2 and _is_task_id(items[0])):
            task.id = items.pop(0)
        if len(items) == 2:
            self._start(task, items.pop(0))
        if items:
            self._end(task, items.pop(0))
        return task

    def _start(self, task: GanttTask, item: str) -> None:
        if item.startswith("after "):
            task.after = item[len("after "):].split()
        else:
            task.start = item

    def _end(self, task: GanttTask, item: str) -> None:
        if item.startswith("after ") and task.start is None and not task.after:
            task.after = item[len("after "):].split()
        elif item.startswith("until "):
            task.until = item[len("until "):].strip()
        elif _DURATION_RE.match(item):
            task.duration = item
        else:
            task.end = item

    @pattern(GanttTree)
    def diagram(self, node: GanttTree) -> GanttChart:
        chart = GanttChart()
        current: GanttSection | None = None
        clicks: list[Click] = []
        for stmt in node["statements"]:
            if isinstance(stmt, Section):
                current = GanttSection(stmt.name)
                chart.sections.append(current)
            elif isinstance(stmt, GanttTask):
                if current is None:
                    current = GanttSection(DEFAULT_SECTION)
                    chart.sections.append(current)
                if stmt.id and chart.find_task(stmt.id) is not None:
                    raise self.fail(f"duplicate task id '{stmt.id}'")
                current.tasks.append(stmt)
            elif isinstance(stmt, Click):
                clicks.append(stmt)
            elif isinstance(stmt, Setting):
                self._apply(chart, stmt)

        ids = [t.id for t in chart.all_tasks() if t.id]
        for task in chart.all_tasks():
            for ref in task.after:
                self.require(ref, ids, "task")
            if task.until:
                self.require(task.until, ids, "task")
        for click in clicks:
            self.require(click.task_id, ids, "task")
            target = chart.find_task(click.task_id)
            if target is not None:
                target.click_href = click.href or target.click_href
                target.click_callback = click.callback or target.click_callback
        return chart

    def _apply(self, chart: GanttChart, setting: Setting) -> None:
        if setting.key in _VALUES:
            if setting.value:
                setattr(chart, _VALUES[setting.key], setting.value)
        elif setting.key in _FLAGS:
            setattr(chart, _FLAGS[setting.key], True)
        elif setting.key == "excludes":
            chart.excludes.extend(split_list(setting.value))
        elif setting.key == "includes":
            chart.includes.extend(split_list(setting.value))
        else:
            apply_setting(chart, setting)


def _is_task_id(item: str) -> bool:
    if item.startswith(("after ", "until ")):
        return False
    return not (_DATE_RE.match(item) or _DURATION_RE.match(item))
