"""Tests for the tree contract between every grammar and its transform."""

import pytest

from mermaid_peg import DiagramKind, GrammarContractError, default_registry, parse
from mermaid_peg.models.base import Diagram
from mermaid_peg.syntax.engine import Grammar, literal
from mermaid_peg.transforms.base import TreeTransform, pattern, schema_keys

SAMPLES = {
    DiagramKind.Flowchart: "graph TD\n    A --> B\n",
    DiagramKind.Sequence: "sequenceDiagram\nAlice->>Bob: ping\n",
    DiagramKind.ClassDiagram: "classDiagram\nAnimal <|-- Dog\n",
    DiagramKind.StateDiagram: "stateDiagram-v2\n[*] --> Still\nStill --> [*]\n",
    DiagramKind.ErDiagram: "erDiagram\nCUSTOMER ||--o{ ORDER : places\n",
    DiagramKind.UserJourney: "journey\nsection Morning\nWake up: 3: Me\n",
    DiagramKind.Gantt: "gantt\nA :1d\n",
    DiagramKind.Pie: 'pie\n"A" : 1\n',
    DiagramKind.Timeline: "timeline\n2020 : Launch\n",
    DiagramKind.Quadrant: "quadrantChart\nA: [0.1, 0.1]\n",
    DiagramKind.GitGraph: "gitGraph\ncommit\n",
    DiagramKind.Mindmap: "mindmap\nroot\n  child\n",
    DiagramKind.Kanban: "kanban\n  todo\n    task\n",
    DiagramKind.Radar: "radar-beta\naxis a, b\ncurve c{1, 7}\n",
    DiagramKind.Block: "block-beta\ncolumns auto\na\n",
    DiagramKind.Requirement: (
        "requirementDiagram\nrequirement r {\nid: 1\ntext: t\nrisk: high\nverifymethod: test\n}\n"
    ),
    DiagramKind.XYChart: "xychart-beta\nx-axis Month 1 --> 12\nline [3, 9, 1]\n",
    DiagramKind.Architecture: "architecture-beta\nservice a\n",
    DiagramKind.Sankey: "sankey-beta\nA,B,1\n",
    DiagramKind.Packet: 'packet-beta\n0-7: "a"\n',
    DiagramKind.Treemap: 'treemap-beta\n"A": 1\n',
    DiagramKind.C4: "C4Context\nPerson(a)\n",
    DiagramKind.Info: "info",
    DiagramKind.Error: "error",
}


def test_every_kind_has_a_sample():
    assert set(SAMPLES) == set(DiagramKind)


@pytest.mark.parametrize("kind", list(DiagramKind), ids=lambda kind: kind.value)
def test_grammar_builds_and_is_cached(kind):
    handlers = default_registry.lookup(kind)
    grammar = handlers.grammar()
    assert isinstance(grammar, Grammar)
    assert grammar.name == kind.value
    assert handlers.grammar() is grammar


@pytest.mark.parametrize("kind", list(DiagramKind), ids=lambda kind: kind.value)
def test_transform_schemas(kind):
    transform = default_registry.lookup(kind).transform
    assert transform.kind is kind
    schemas = transform.schemas()
    assert schemas
    signatures = [schema_keys(schema) for schema in schemas]
    assert len(set(signatures)) == len(signatures)
    for schema in schemas:
        assert schema.__module__.startswith("mermaid_peg.grammars.")


@pytest.mark.parametrize("kind", list(DiagramKind), ids=lambda kind: kind.value)
def test_sample_parses_to_its_kind(kind):
    model = parse(SAMPLES[kind])
    assert isinstance(model, Diagram)
    assert model.diagram_type() is kind
    assert parse(SAMPLES[kind], dialect=kind) == model


class TestTreeTransform:
    def test_repeated_pattern_rejected(self):
        from mermaid_peg.grammars.info import InfoTree

        with pytest.raises(TypeError, match="repeats the tree pattern"):

            class Twice(TreeTransform):
                kind = DiagramKind.Info

                @pattern(InfoTree)
                def first(self, node):
                    return node

                @pattern(InfoTree)
                def second(self, node):
                    return node

    def test_root_must_reduce_to_a_model(self):
        class Nothing(TreeTransform):
            kind = DiagramKind.Info

        tree = Grammar("sample", literal("a").capture("a")).match("a").tree
        with pytest.raises(GrammarContractError, match="not a diagram model"):
            Nothing().apply(tree)

    def test_most_specific_pattern_wins(self):
        from typing import TypedDict

        class Short(TypedDict):
            a: str

        class Long(TypedDict):
            a: str
            b: str

        class Sized(TreeTransform):
            kind = DiagramKind.Info

            @pattern(Short)
            def short(self, node):
                return "short"

            @pattern(Long)
            def long(self, node):
                return "long"

        sized = Sized()
        assert sized.reduce({"a": "x"}) == "short"
        assert sized.reduce({"a": "x", "b": "y"}) == "long"
        assert sized.reduce({"c": "z"}) == {"c": "z"}
        assert sized.reduce([{"a": "x"}, "plain"]) == ["short", "plain"]
