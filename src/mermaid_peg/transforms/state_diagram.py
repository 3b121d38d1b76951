"""State diagram transform.

``[*]`` resolves to a start or end pseudo-state depending on which side of
the transition it appears on. At the top level these are ``start`` and
``end``; inside a composite state ``X`` they are ``X_start`` and ``X_end``
(``X_2_start`` and so on for later concurrent regions).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mermaid_peg.grammars.state_diagram import (
    START_END,
    DirectionTree,
    NoteTree,
    SeparatorTree,
    StandaloneStateTree,
    StateDeclTree,
    StateDescriptionTree,
    StateDiagramTree,
    TransitionTree,
)
from mermaid_peg.models.state_diagram import (
    NoteSide,
    State,
    StateDiagram,
    StateKind,
    StateNote,
    StateTransition,
)
from mermaid_peg.syntax.common import clean, unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassAssign, ClassDef, Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind, Direction

_MARKER_KINDS = {"choice": StateKind.Choice, "fork": StateKind.Fork, "join": StateKind.Join}


@dataclass
class StateDecl:
    id: str
    label: str | None
    kind: StateKind
    description: str | None
    body: list[Any] | None


@dataclass
class Description:
    state_id: str
    text: str


@dataclass
class Transition:
    source: str
    target: str
    label: str | None


@dataclass
class StateRef:
    state_id: str


class Separator:
    """Boundary between concurrent regions of a composite state."""


class StateDiagramTransform(SharedRules):
    kind = DiagramKind.StateDiagram

    @pattern(StateDeclTree)
    def state_decl(self, node: StateDeclTree) -> StateDecl:
        marker = node.get("marker")
        body = node.get("body")
        if marker:
            kind = _MARKER_KINDS[marker.lower()]
        elif body is not None:
            kind = StateKind.Composite
        else:
            kind = StateKind.Normal
        label = unescape(node["quoted_desc"]) if node.get("quoted_desc") else None
        return StateDecl(node["state"], label, kind, clean(node.get("description")) or None, body)

    @pattern(StateDescriptionTree)
    def description(self, node: StateDescriptionTree) -> Description:
        return Description(node["described"], clean(node["description"]))

    @pattern(TransitionTree)
    def transition(self, node: TransitionTree) -> Transition:
        return Transition(node["source"], node["target"], clean(node["label"]) or None)

    @pattern(NoteTree)
    def note(self, node: NoteTree) -> StateNote:
        lines = [line.strip() for line in node["note"].splitlines()]
        return StateNote(node["note_target"], NoteSide(node["note_position"].lower()), "\n".join(line for line in lines if line))

    @pattern(SeparatorTree)
    def separator(self, node: SeparatorTree) -> Separator:
        return Separator()

    @pattern(DirectionTree)
    def direction(self, node: DirectionTree) -> Direction:
        return Direction.from_token(node["direction"])

    @pattern(StandaloneStateTree)
    def standalone(self, node: StandaloneStateTree) -> StateRef:
        return StateRef(node["state_ref"])

    @pattern(StateDiagramTree)
    def diagram(self, node: StateDiagramTree) -> StateDiagram:
        diagram = StateDiagram()
        assigns: list[ClassAssign] = []
        self._walk(diagram, node["statements"], None, 0, assigns)
        ids = [s.id for s in diagram.states]
        for assign in assigns:
            for target in assign.targets:
                self.require(target, ids, "state")
                state = diagram.find_state(target)
                if state is not None and assign.class_name not in state.classes:
                    state.classes.append(assign.class_name)
        return diagram

    # ─── Statement folding ───────────────────────────────────────────────

    def _ensure(self, diagram: StateDiagram, state_id: str, parent: str | None, region: int) -> State:
        state = diagram.find_state(state_id)
        if state is None:
            state = State(id=state_id, label=state_id, parent=parent, region=region)
            diagram.states.append(state)
        return state

    def _pseudo(self, diagram: StateDiagram, kind: StateKind, parent: str | None, region: int) -> str:
        suffix = "start" if kind is StateKind.Start else "end"
        if parent is None:
            state_id = suffix
        elif region == 0:
            state_id = f"{parent}_{suffix}"
        else:
            state_id = f"{parent}_{region + 1}_{suffix}"
        state = self._ensure(diagram, state_id, parent, region)
        state.kind = kind
        return state_id

    def _walk(
        self,
        diagram: StateDiagram,
        statements: list[Any],
        parent: str | None,
        region: int,
        assigns: list[ClassAssign],
    ) -> None:
        for stmt in statements:
            if isinstance(stmt, StateDecl):
                state = self._ensure(diagram, stmt.id, parent, region)
                if stmt.label:
                    state.label = stmt.label
                if stmt.description:
                    state.descriptions.append(stmt.description)
                if stmt.kind is not StateKind.Normal:
                    state.kind = stmt.kind
                if stmt.body is not None:
                    self._walk(diagram, stmt.body, state.id, 0, assigns)
            elif isinstance(stmt, Transition):
                if stmt.source == START_END:
                    source = self._pseudo(diagram, StateKind.Start, parent, region)
                else:
                    source = self._ensure(diagram, stmt.source, parent, region).id
                if stmt.target == START_END:
                    target = self._pseudo(diagram, StateKind.End, parent, region)
                else:
                    target = self._ensure(diagram, stmt.target, parent, region).id
                diagram.transitions.append(StateTransition(source, target, stmt.label))
            elif isinstance(stmt, Description):
                self._ensure(diagram, stmt.state_id, parent, region).descriptions.append(stmt.text)
            elif isinstance(stmt, StateRef):
                self._ensure(diagram, stmt.state_id, parent, region)
            elif isinstance(stmt, StateNote):
                self._ensure(diagram, stmt.state_id, parent, region)
                diagram.notes.append(stmt)
            elif isinstance(stmt, Separator):
                if parent is None:
                    raise self.fail("'--' region separator outside a composite state")
                region += 1
            elif isinstance(stmt, Direction):
                if parent is None:
                    diagram.direction = stmt
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    diagram.class_defs[name] = stmt.props
            elif isinstance(stmt, ClassAssign):
                assigns.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)
