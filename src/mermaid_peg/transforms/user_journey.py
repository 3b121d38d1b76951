"""User journey transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.user_journey import JourneyTree, SectionTree, TaskTree
from mermaid_peg.models.user_journey import MAX_SCORE, MIN_SCORE, JourneySection, JourneyTask, UserJourney
from mermaid_peg.syntax.common import clean
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind

DEFAULT_SECTION = "Default"


@dataclass
class Section:
    name: str


class UserJourneyTransform(SharedRules):
    kind = DiagramKind.UserJourney

    @pattern(SectionTree)
    def section(self, node: SectionTree) -> Section:
        return Section(clean(node["section"]))

    @pattern(TaskTree)
    def task(self, node: TaskTree) -> JourneyTask:
        name = clean(node["task"])
        raw = node["score"]
        try:
            score = int(raw)
        except ValueError:
            raise self.fail(f"task '{name}' has a non-integer score {raw}") from None
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise self.fail(f"task '{name}' has score {score}, expected {MIN_SCORE} to {MAX_SCORE}")
        return JourneyTask(name=name, score=score, actors=split_list(node["actors"]))

    @pattern(JourneyTree)
    def diagram(self, node: JourneyTree) -> UserJourney:
        journey = UserJourney()
        current: JourneySection | None = None
        for stmt in node["statements"]:
            if isinstance(stmt, Section):
                current = JourneySection(stmt.name)
                journey.sections.append(current)
            elif isinstance(stmt, JourneyTask):
                if current is None:
                    current = JourneySection(DEFAULT_SECTION)
                    journey.sections.append(current)
                current.tasks.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(journey, stmt)
        return journey
