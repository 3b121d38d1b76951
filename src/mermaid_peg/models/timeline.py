"""Timeline model."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.types import DiagramKind, Direction


@dataclass
class TimelineEvent:
    time: str
    descriptions: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.time)

    def primary_description(self) -> str | None:
        return self.descriptions[0] if self.descriptions else None


@dataclass
class TimelineSection:
    name: str
    events: list[TimelineEvent] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.name) and all(e.is_valid() for e in self.events)


@dataclass
class Timeline:
    title: str | None = None
    direction: Direction = Direction.LR
    events: list[TimelineEvent] = field(default_factory=list)
    sections: list[TimelineSection] = field(default_factory=list)
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Timeline

    def is_valid(self) -> bool:
        return (
            bool(self.all_events())
            and all(e.is_valid() for e in self.events)
            and all(s.is_valid() for s in self.sections)
        )

    def all_events(self) -> list[TimelineEvent]:
        """Events outside any section, then each section's events in order."""
        return [*self.events, *(e for s in self.sections for e in s.events)]

    def all_times(self) -> list[str]:
        return [e.time for e in self.all_events()]

    def find_event(self, time: str) -> TimelineEvent | None:
        return next((e for e in self.all_events() if e.time == time), None)

    def find_section(self, name: str) -> TimelineSection | None:
        return next((s for s in self.sections if s.name == name), None)
