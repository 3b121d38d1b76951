"""Timeline transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.timeline import ContinuationTree, EventTree, PeriodTree, TimelineSectionTree, TimelineTree
from mermaid_peg.models.timeline import Timeline, TimelineEvent, TimelineSection
from mermaid_peg.syntax.common import clean
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class Section:
    name: str


@dataclass
class Continuation:
    descriptions: list[str]


class TimelineTransform(SharedRules):
    kind = DiagramKind.Timeline

    @pattern(TimelineSectionTree)
    def section(self, node: TimelineSectionTree) -> Section:
        return Section(clean(node["section"]))

    @pattern(EventTree)
    def event(self, node: EventTree) -> str:
        return clean(node["event"])

    @pattern(PeriodTree)
    def period(self, node: PeriodTree) -> TimelineEvent:
        return TimelineEvent(time=clean(node["period"]), descriptions=node["events"])

    @pattern(ContinuationTree)
    def continuation(self, node: ContinuationTree) -> Continuation:
        return Continuation(node["continuation"])

    @pattern(TimelineTree)
    def diagram(self, node: TimelineTree) -> Timeline:
        timeline = Timeline()
        if node["header_direction"]:
            timeline.direction = Direction.from_token(node["header_direction"])
        section: TimelineSection | None = None
        last: TimelineEvent | None = None
        for stmt in node["statements"]:
            if isinstance(stmt, Section):
                section = TimelineSection(stmt.name)
                timeline.sections.append(section)
            elif isinstance(stmt, TimelineEvent):
                (section.events if section is not None else timeline.events).append(stmt)
                last = stmt
            elif isinstance(stmt, Continuation):
                if last is None:
                    raise self.fail("event continuation ':' appears before any time period")
                last.descriptions.extend(stmt.descriptions)
            elif isinstance(stmt, Setting):
                apply_setting(timeline, stmt)
        return timeline
