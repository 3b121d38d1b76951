"""Tests for the state diagram dialect."""

import pytest

from mermaid_peg import ParseConfig, TransformError, parse, try_parse
from mermaid_peg.models.state_diagram import NoteSide, StateDiagram, StateKind
from mermaid_peg.types import Direction


def test_start_and_end_pseudo_states():
    diagram = parse("stateDiagram-v2\n    [*] --> Still\n    Still --> Moving : push\n    Moving --> [*]\n")
    assert isinstance(diagram, StateDiagram)
    assert [s.id for s in diagram.states] == ["start", "Still", "Moving", "end"]
    assert [s.id for s in diagram.start_states()] == ["start"]
    assert [s.id for s in diagram.end_states()] == ["end"]
    assert diagram.transitions_from("Still")[0].label == "push"
    assert diagram.is_valid()


def test_v1_header():
    diagram = parse("stateDiagram\nA --> B\n")
    assert [t.to_id for t in diagram.transitions_from("A")] == ["B"]


def test_composite_state_scopes_pseudo_states():
    source = "stateDiagram-v2\nstate Active {\n  [*] --> Idle\n  Idle --> [*]\n}\n[*] --> Active\n"
    diagram = parse(source)
    active = diagram.find_state("Active")
    assert active.kind == StateKind.Composite
    assert [s.id for s in diagram.children("Active")] == ["Active_start", "Idle", "Active_end"]
    assert diagram.find_state("start").parent is None
    assert [s.id for s in diagram.composite_states()] == ["Active"]


def test_concurrent_regions():
    source = "stateDiagram-v2\nstate Both {\n  [*] --> Left\n  --\n  [*] --> Right\n}\n"
    diagram = parse(source)
    assert diagram.find_state("Both_start").region == 0
    assert diagram.find_state("Both_2_start").region == 1
    assert diagram.find_state("Right").region == 1


def test_separator_outside_composite():
    result = try_parse("stateDiagram-v2\nA --> B\n--\n")
    assert not result.ok


@pytest.mark.parametrize(
    "marker,kind",
    [("choice", StateKind.Choice), ("fork", StateKind.Fork), ("join", StateKind.Join)],
)
def test_pseudo_state_markers(marker, kind):
    diagram = parse(f"stateDiagram-v2\nstate Pick <<{marker}>>\nA --> Pick\n")
    assert diagram.find_state("Pick").kind == kind
    assert diagram.find_state("Pick").pseudo


def test_quoted_label_and_descriptions():
    source = 'stateDiagram-v2\nstate "A long name" as L\nL : first line\nL : second line\n'
    diagram = parse(source)
    state = diagram.find_state("L")
    assert state.label == "A long name"
    assert state.descriptions == ["first line", "second line"]


def test_inline_note():
    diagram = parse("stateDiagram-v2\nA --> B\nnote right of A : watch out\n")
    note = diagram.notes[0]
    assert (note.state_id, note.side, note.text) == ("A", NoteSide.Right, "watch out")


def test_multiline_note():
    source = "stateDiagram-v2\nA --> B\nnote left of B\n  first\n  second\nend note\n"
    diagram = parse(source)
    assert diagram.notes[0].side == NoteSide.Left
    assert diagram.notes[0].text == "first\nsecond"


def test_direction_and_classes():
    source = "stateDiagram-v2\ndirection LR\nclassDef bad fill:#f00\nA --> B\nclass A,B bad\n"
    diagram = parse(source)
    assert diagram.direction == Direction.LR
    assert diagram.class_defs == {"bad": "fill:#f00"}
    assert diagram.find_state("B").classes == ["bad"]


def test_unknown_class_target():
    with pytest.raises(TransformError, match="unknown state 'Ghost'"):
        parse("stateDiagram-v2\nA --> B\nclass Ghost bad\n")


def test_unknown_class_target_lenient():
    diagram = parse("stateDiagram-v2\nA --> B\nclass Ghost bad\n", config=ParseConfig(strict_references=False))
    assert diagram.find_state("Ghost") is None


def test_transitions_to():
    diagram = parse("stateDiagram-v2\nA --> C\nB --> C\n")
    assert [t.from_id for t in diagram.transitions_to("C")] == ["A", "B"]


def test_missing_arrow_reports_expectation():
    result = try_parse("stateDiagram-v2\nA -> B\n")
    assert not result.ok
    assert result.error.line == 2
