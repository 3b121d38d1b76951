"""User journey model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.types import DiagramKind

MIN_SCORE = 1
MAX_SCORE = 5


class ScoreColor(Enum):
    Red = "red"
    Yellow = "yellow"
    Green = "green"


@dataclass
class JourneyTask:
    name: str
    score: int
    actors: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.name) and MIN_SCORE <= self.score <= MAX_SCORE

    def score_color(self) -> ScoreColor:
        if self.score <= 2:
            return ScoreColor.Red
        if self.score >= 4:
            return ScoreColor.Green
        return ScoreColor.Yellow


@dataclass
class JourneySection:
    name: str
    tasks: list[JourneyTask] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.name) and all(t.is_valid() for t in self.tasks)


@dataclass
class UserJourney:
    title: str | None = None
    sections: list[JourneySection] = field(default_factory=list)
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.UserJourney

    def is_valid(self) -> bool:
        return bool(self.all_tasks()) and all(s.is_valid() for s in self.sections)

    def all_tasks(self) -> list[JourneyTask]:
        return [task for section in self.sections for task in section.tasks]

    def all_actors(self) -> list[str]:
        actors: list[str] = []
        for task in self.all_tasks():
            actors.extend(a for a in task.actors if a not in actors)
        return actors

    def tasks_by_score(self, score: int) -> list[JourneyTask]:
        return [t for t in self.all_tasks() if t.score == score]

    def tasks_by_actor(self, actor: str) -> list[JourneyTask]:
        return [t for t in self.all_tasks() if actor in t.actors]

    def average_score(self) -> float:
        tasks = self.all_tasks()
        if not tasks:
            return 0.0
        return sum(t.score for t in tasks) / len(tasks)

    def find_section(self, name: str) -> JourneySection | None:
        return next((s for s in self.sections if s.name == name), None)
