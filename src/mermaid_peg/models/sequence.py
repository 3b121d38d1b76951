"""Sequence diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind


class ParticipantKind(Enum):
    Participant = auto()  # participant A
    Actor = auto()  # actor A


class ArrowType(Enum):
    Solid = auto()  # ->
    Dotted = auto()  # -->
    SolidArrow = auto()  # ->>
    DottedArrow = auto()  # -->>
    SolidCross = auto()  # -x
    DottedCross = auto()  # --x
    SolidOpen = auto()  # -)
    DottedOpen = auto()  # --)
    BidirSolid = auto()  # <<->>
    BidirDotted = auto()  # <<-->>

    @property
    def dotted(self) -> bool:
        return self.name.startswith("Dotted") or self is ArrowType.BidirDotted


ARROW_BY_TOKEN: dict[str, ArrowType] = {
    "->": ArrowType.Solid,
    "-->": ArrowType.Dotted,
    "->>": ArrowType.SolidArrow,
    "-->>": ArrowType.DottedArrow,
    "-x": ArrowType.SolidCross,
    "--x": ArrowType.DottedCross,
    "-)": ArrowType.SolidOpen,
    "--)": ArrowType.DottedOpen,
    "<<->>": ArrowType.BidirSolid,
    "<<-->>": ArrowType.BidirDotted,
}


class NotePosition(Enum):
    LeftOf = auto()  # note left of A
    RightOf = auto()  # note right of A
    Over = auto()  # note over A,B


class FragmentKind(Enum):
    Loop = "loop"
    Alt = "alt"
    Opt = "opt"
    Par = "par"
    Critical = "critical"
    Break = "break"
    Rect = "rect"


@dataclass
class SequenceParticipant:
    id: str
    label: str
    kind: ParticipantKind = ParticipantKind.Participant
    box: str | None = None

    def is_valid(self) -> bool:
        return bool(self.id) and bool(self.label)


@dataclass
class SequenceMessage:
    from_id: str
    to_id: str
    text: str = ""
    arrow: ArrowType = ArrowType.SolidArrow
    number: int | None = None

    def is_valid(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


@dataclass
class SequenceActivation:
    participant_id: str
    start_index: int
    end_index: int

    def is_valid(self) -> bool:
        return bool(self.participant_id) and 0 <= self.start_index <= self.end_index


@dataclass
class SequenceNote:
    text: str
    position: NotePosition
    participant_ids: list[str] = field(default_factory=list)
    message_index: int = 0

    def is_valid(self) -> bool:
        return bool(self.participant_ids)


@dataclass
class FragmentBranch:
    """An ``else``/``and``/``option`` section starting at a message index."""

    keyword: str
    label: str
    start_index: int


@dataclass
class Fragment:
    kind: FragmentKind
    label: str
    start_index: int
    end_index: int
    depth: int = 0
    branches: list[FragmentBranch] = field(default_factory=list)

    def message_count(self) -> int:
        return max(0, self.end_index - self.start_index)


@dataclass
class ParticipantBox:
    title: str
    color: str | None = None
    participant_ids: list[str] = field(default_factory=list)


@dataclass
class SequenceDiagram:
    participants: list[SequenceParticipant] = field(default_factory=list)
    messages: list[SequenceMessage] = field(default_factory=list)
    activations: list[SequenceActivation] = field(default_factory=list)
    notes: list[SequenceNote] = field(default_factory=list)
    fragments: list[Fragment] = field(default_factory=list)
    boxes: list[ParticipantBox] = field(default_factory=list)
    autonumber: bool = False
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Sequence

    def is_valid(self) -> bool:
        if not self.participants:
            return False
        ids = [p.id for p in self.participants]
        if not unique(ids):
            return False
        entities = [*self.participants, *self.messages, *self.activations, *self.notes]
        if not all(e.is_valid() for e in entities):
            return False
        refs = [m.from_id for m in self.messages] + [m.to_id for m in self.messages]
        refs += [a.participant_id for a in self.activations]
        refs += [pid for note in self.notes for pid in note.participant_ids]
        return references_resolve(ids, refs)

    def find_participant(self, participant_id: str) -> SequenceParticipant | None:
        return next((p for p in self.participants if p.id == participant_id), None)

    def messages_from(self, participant_id: str) -> list[SequenceMessage]:
        return [m for m in self.messages if m.from_id == participant_id]

    def messages_to(self, participant_id: str) -> list[SequenceMessage]:
        return [m for m in self.messages if m.to_id == participant_id]

    def activations_for(self, participant_id: str) -> list[SequenceActivation]:
        return [a for a in self.activations if a.participant_id == participant_id]
