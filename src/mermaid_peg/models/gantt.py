"""Gantt chart model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"


class TaskTag(Enum):
    Done = "done"
    Active = "active"
    Crit = "crit"
    Milestone = "milestone"


@dataclass
class GanttTask:
    description: str
    id: str | None = None
    start: str | None = None
    end: str | None = None
    duration: str | None = None
    after: list[str] = field(default_factory=list)
    until: str | None = None
    tags: list[TaskTag] = field(default_factory=list)
    click_href: str | None = None
    click_callback: str | None = None

    def is_valid(self) -> bool:
        return bool(self.description)

    def is_done(self) -> bool:
        return TaskTag.Done in self.tags

    def is_active(self) -> bool:
        return TaskTag.Active in self.tags

    def is_critical(self) -> bool:
        return TaskTag.Crit in self.tags

    def is_milestone(self) -> bool:
        return TaskTag.Milestone in self.tags


@dataclass
class GanttSection:
    name: str
    tasks: list[GanttTask] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.name) and all(t.is_valid() for t in self.tasks)


@dataclass
class GanttChart:
    title: str | None = None
    date_format: str = DEFAULT_DATE_FORMAT
    axis_format: str | None = None
    tick_interval: str | None = None
    excludes: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)
    today_marker: str | None = None
    weekday: str | None = None
    display_mode: str | None = None
    inclusive_end_dates: bool = False
    top_axis: bool = False
    sections: list[GanttSection] = field(default_factory=list)
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Gantt

    def is_valid(self) -> bool:
        tasks = self.all_tasks()
        if not tasks or not all(s.is_valid() for s in self.sections):
            return False
        ids = [t.id for t in tasks if t.id]
        if not unique(ids):
            return False
        refs = [ref for t in tasks for ref in t.after] + [t.until for t in tasks]
        return references_resolve(ids, refs)

    def all_tasks(self) -> list[GanttTask]:
        return [task for section in self.sections for task in section.tasks]

    def find_task(self, task_id: str) -> GanttTask | None:
        return next((t for t in self.all_tasks() if t.id == task_id), None)

    def find_section(self, name: str) -> GanttSection | None:
        return next((s for s in self.sections if s.name == name), None)

    def critical_tasks(self) -> list[GanttTask]:
        return [t for t in self.all_tasks() if t.is_critical()]

    def milestones(self) -> list[GanttTask]:
        return [t for t in self.all_tasks() if t.is_milestone()]

    def dependents_of(self, task_id: str) -> list[GanttTask]:
        return [t for t in self.all_tasks() if task_id in t.after]
