"""State diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind, Direction


class StateKind(Enum):
    Normal = auto()  # A
    Start = auto()  # [*] --> A
    End = auto()  # A --> [*]
    Choice = auto()  # state A <<choice>>
    Fork = auto()  # state A <<fork>>
    Join = auto()  # state A <<join>>
    Composite = auto()  # state A { ... }


class NoteSide(Enum):
    Left = "left"
    Right = "right"


@dataclass
class State:
    id: str
    label: str
    kind: StateKind = StateKind.Normal
    descriptions: list[str] = field(default_factory=list)
    parent: str | None = None
    region: int = 0
    classes: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.id)

    @property
    def pseudo(self) -> bool:
        return self.kind in (StateKind.Start, StateKind.End, StateKind.Choice, StateKind.Fork, StateKind.Join)


@dataclass
class StateTransition:
    from_id: str
    to_id: str
    label: str | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


@dataclass
class StateNote:
    state_id: str
    side: NoteSide
    text: str


@dataclass
class StateDiagram:
    states: list[State] = field(default_factory=list)
    transitions: list[StateTransition] = field(default_factory=list)
    notes: list[StateNote] = field(default_factory=list)
    class_defs: dict[str, str] = field(default_factory=dict)
    direction: Direction = field(default_factory=Direction.default)
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.StateDiagram

    def is_valid(self) -> bool:
        if not self.states:
            return False
        ids = [s.id for s in self.states]
        if not unique(ids):
            return False
        if not all(s.is_valid() for s in self.states) or not all(t.is_valid() for t in self.transitions):
            return False
        refs = [t.from_id for t in self.transitions] + [t.to_id for t in self.transitions]
        refs += [n.state_id for n in self.notes] + [s.parent for s in self.states]
        return references_resolve(ids, refs)

    def find_state(self, state_id: str) -> State | None:
        return next((s for s in self.states if s.id == state_id), None)

    def transitions_from(self, state_id: str) -> list[StateTransition]:
        return [t for t in self.transitions if t.from_id == state_id]

    def transitions_to(self, state_id: str) -> list[StateTransition]:
        return [t for t in self.transitions if t.to_id == state_id]

    def start_states(self) -> list[State]:
        return [s for s in self.states if s.kind is StateKind.Start]

    def end_states(self) -> list[State]:
        return [s for s in self.states if s.kind is StateKind.End]

    def children(self, composite_id: str) -> list[State]:
        return [s for s in self.states if s.parent == composite_id]

    def composite_states(self) -> list[State]:
        return [s for s in self.states if s.kind is StateKind.Composite]
