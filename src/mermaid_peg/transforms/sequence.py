"""Sequence diagram transform.

Participants are declared explicitly or on first use. Activations are
tracked per participant as a stack of message indexes, so ``activate`` and
``+``/``-`` arrow markers may nest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_peg.grammars.sequence import (
    ActivationTree,
    AutonumberTree,
    BoxTree,
    BranchTree,
    FragmentTree,
    MessageTree,
    NoteTree,
    ParticipantTree,
    SequenceTree,
)
from mermaid_peg.models.sequence import (
    ARROW_BY_TOKEN,
    Fragment,
    FragmentBranch,
    FragmentKind,
    NotePosition,
    ParticipantBox,
    ParticipantKind,
    SequenceActivation,
    SequenceDiagram,
    SequenceMessage,
    SequenceNote,
    SequenceParticipant,
)
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting, split_list
from mermaid_peg.types import DiagramKind


@dataclass
class MessageStatement:
    source: str
    target: str
    token: str
    marker: str | None
    text: str


@dataclass
class ActivationStatement:
    activate: bool
    participant_id: str


@dataclass
class Autonumber:
    start: int = 1
    step: int = 1


@dataclass
class BoxStatement:
    title: str
    color: str | None
    members: list[SequenceParticipant]


@dataclass
class Branch:
    keyword: str
    label: str
    body: list[Any]


@dataclass
class FragmentStatement:
    kind: FragmentKind
    label: str
    body: list[Any]
    branches: list[Branch] = field(default_factory=list)


_POSITIONS = {"left of": NotePosition.LeftOf, "right of": NotePosition.RightOf, "over": NotePosition.Over}
_BOX_COLOR_PREFIXES = ("rgb(", "rgba(", "hsl(", "#")


def _split_box_title(text: str) -> tuple[str, str | None]:
    """Separate a leading color from a box title."""
    if text.lower() == "transparent" or text.lower().startswith(_BOX_COLOR_PREFIXES):
        if text.startswith(("rgb", "rgba", "hsl")) and ")" in text:
            color, _, title = text.partition(")")
            return title.strip(), color + ")"
        color, _, title = text.partition(" ")
        return title.strip(), color
    return text, None


class _State:
    """Mutable bookkeeping for one transform run."""

    def __init__(self, diagram: SequenceDiagram) -> None:
        self.diagram = diagram
        self.active: dict[str, list[int]] = {}
        self.numbering: Autonumber | None = None
        self.depth = 0


class SequenceTransform(SharedRules):
    kind = DiagramKind.Sequence

    @pattern(ParticipantTree)
    def participant(self, node: ParticipantTree) -> SequenceParticipant:
        kind = ParticipantKind.Actor if node["participant_type"].lower() == "actor" else ParticipantKind.Participant
        label = strip_quotes(node["alias"]) if node["alias"] else node["participant"]
        return SequenceParticipant(id=node["participant"], label=label, kind=kind)

    @pattern(MessageTree)
    def message(self, node: MessageTree) -> MessageStatement:
        return MessageStatement(node["source"], node["target"], node["arrow"], node["marker"], clean(node["text"]))

    @pattern(ActivationTree)
    def activation(self, node: ActivationTree) -> ActivationStatement:
        return ActivationStatement(node["activation"].lower() == "activate", node["participant"])

    @pattern(NoteTree)
    def note(self, node: NoteTree) -> SequenceNote:
        position = _POSITIONS[" ".join(node["position"].lower().split())]
        targets = split_list(node["note_targets"])
        if position is not NotePosition.Over and len(targets) > 1:
            raise self.fail(f"a note {node['position']} takes one participant, got {len(targets)}")
        return SequenceNote(text=clean(node["note"]), position=position, participant_ids=targets)

    @pattern(AutonumberTree)
    def autonumber(self, node: AutonumberTree) -> Autonumber:
        args = clean(node["autonumber"]).split()
        if args and args[0].lower() == "off":
            return Autonumber(start=0, step=0)
        try:
            numbers = [int(arg) for arg in args[:2]]
        except ValueError:
            raise self.fail(f"autonumber expects integers, got '{clean(node['autonumber'])}'") from None
        return Autonumber(*numbers)

    @pattern(BoxTree)
    def box(self, node: BoxTree) -> BoxStatement:
        title, color = _split_box_title(clean(node["box"]))
        return BoxStatement(title, color, node["members"])

    @pattern(BranchTree)
    def branch(self, node: BranchTree) -> Branch:
        return Branch(node["branch"].lower(), clean(node["label"]), node["body"])

    @pattern(FragmentTree)
    def fragment(self, node: FragmentTree) -> FragmentStatement:
        kind = FragmentKind(node["fragment"].lower())
        allowed = {FragmentKind.Alt: "else", FragmentKind.Par: "and", FragmentKind.Critical: "option"}
        for branch in node["branches"]:
            if allowed.get(kind) != branch.keyword:
                raise self.fail(f"'{branch.keyword}' is not allowed inside '{kind.value}'")
        return FragmentStatement(kind, clean(node["label"]), node["body"], node["branches"])

    @pattern(SequenceTree)
    def diagram(self, node: SequenceTree) -> SequenceDiagram:
        diagram = SequenceDiagram()
        state = _State(diagram)
        self._walk(state, node["statements"])
        last = len(diagram.messages) - 1
        for participant_id, starts in state.active.items():
            for start in starts:
                diagram.activations.append(SequenceActivation(participant_id, start, max(start, last)))
        return diagram

    # ─── Statement folding ───────────────────────────────────────────────

    def _declare(self, state: _State, participant: SequenceParticipant) -> None:
        existing = state.diagram.find_participant(participant.id)
        if existing is None:
            state.diagram.participants.append(participant)
            return
        if existing.label == existing.id:
            existing.label = participant.label
        existing.kind = participant.kind

    def _ensure(self, state: _State, participant_id: str) -> None:
        if state.diagram.find_participant(participant_id) is None:
            state.diagram.participants.append(SequenceParticipant(id=participant_id, label=participant_id))

    def _activate(self, state: _State, participant_id: str, index: int) -> None:
        self._ensure(state, participant_id)
        state.active.setdefault(participant_id, []).append(index)

    def _deactivate(self, state: _State, participant_id: str, index: int) -> None:
        starts = state.active.get(participant_id)
        if not starts:
            raise self.fail(f"cannot deactivate '{participant_id}': it is not active")
        start = starts.pop()
        state.diagram.activations.append(SequenceActivation(participant_id, start, max(start, index)))

    def _walk(self, state: _State, statements: list[Any]) -> None:
        diagram = state.diagram
        for stmt in statements:
            if isinstance(stmt, SequenceParticipant):
                self._declare(state, stmt)
            elif isinstance(stmt, MessageStatement):
                self._ensure(state, stmt.source)
                self._ensure(state, stmt.target)
                index = len(diagram.messages)
                number = None
                if state.numbering is not None:
                    number = state.numbering.start + state.numbering.step * index
                diagram.messages.append(
                    SequenceMessage(stmt.source, stmt.target, stmt.text, ARROW_BY_TOKEN[stmt.token], number)
                )
                if stmt.marker == "+":
                    self._activate(state, stmt.target, index)
                elif stmt.marker == "-":
                    self._deactivate(state, stmt.source, index)
            elif isinstance(stmt, ActivationStatement):
                index = len(diagram.messages)
                if stmt.activate:
                    self._activate(state, stmt.participant_id, index)
                else:
                    self._deactivate(state, stmt.participant_id, index - 1)
            elif isinstance(stmt, SequenceNote):
                for participant_id in stmt.participant_ids:
                    self._ensure(state, participant_id)
                stmt.message_index = len(diagram.messages)
                diagram.notes.append(stmt)
            elif isinstance(stmt, Autonumber):
                if stmt.step == 0:
                    state.numbering = None
                    diagram.autonumber = False
                else:
                    state.numbering = stmt
                    diagram.autonumber = True
            elif isinstance(stmt, BoxStatement):
                box = ParticipantBox(stmt.title, stmt.color)
                for member in stmt.members:
                    self._declare(state, member)
                    diagram.find_participant(member.id).box = stmt.title  # type: ignore[union-attr]
                    box.participant_ids.append(member.id)
                diagram.boxes.append(box)
            elif isinstance(stmt, FragmentStatement):
                self._fragment(state, stmt)
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)

    def _fragment(self, state: _State, stmt: FragmentStatement) -> None:
        diagram = state.diagram
        fragment = Fragment(stmt.kind, stmt.label, len(diagram.messages), len(diagram.messages), depth=state.depth)
        diagram.fragments.append(fragment)
        state.depth += 1
        self._walk(state, stmt.body)
        for branch in stmt.branches:
            fragment.branches.append(FragmentBranch(branch.keyword, branch.label, len(diagram.messages)))
            self._walk(state, branch.body)
        state.depth -= 1
        fragment.end_index = len(diagram.messages)
