"""Tests for the parse pipeline: detection, error mapping and result handling."""

import pytest

from mermaid_peg import (
    DiagramError,
    DiagramKind,
    ParseConfig,
    ParseError,
    TransformError,
    UnknownDiagramTypeError,
    parse,
    try_parse,
)
from mermaid_peg.models.class_diagram import ClassDiagram, ClassRelationship, RelationshipType
from mermaid_peg.models.flowchart import EdgeType


class TestScenarios:
    def test_inheritance(self):
        diagram = parse("classDiagram\nAnimal <|-- Dog\n")
        assert isinstance(diagram, ClassDiagram)
        assert sorted(e.id for e in diagram.entities) == ["Animal", "Dog"]
        rel = diagram.relationships[0]
        assert (rel.from_id, rel.to_id, rel.relationship_type) == ("Dog", "Animal", RelationshipType.Inheritance)
        assert diagram.is_valid()

    def test_undeclared_entity_invalidates(self):
        diagram = parse("classDiagram\nDog <|-- Animal\nDog : +bark()\n")
        assert diagram.is_valid()
        diagram.relationships.append(ClassRelationship("Cat", "Dog"))
        assert not diagram.is_valid()

    def test_score_out_of_range(self):
        with pytest.raises(TransformError, match="score 6") as exc:
            parse("journey\ntitle T\nsection S\nTask:6:Actor\n")
        assert exc.value.dialect == "user_journey"

    def test_unterminated_bracket(self):
        with pytest.raises(ParseError) as exc:
            parse("flowchart TD\nA[Start\n")
        err = exc.value
        assert (err.line, err.column) == (2, 8)
        assert err.line_text == "A[Start"
        assert err.dialect == "flowchart"
        assert err.expected


class TestErrorLocation:
    def test_offset_maps_past_leading_whitespace(self):
        with pytest.raises(ParseError) as exc:
            parse("\n\n  flowchart TD\nA[Start\n")
        assert (exc.value.line, exc.value.column) == (4, 8)

    def test_offset_maps_past_front_matter(self):
        with pytest.raises(ParseError) as exc:
            parse("---\ntitle: x\n---\nflowchart TD\nA[Start\n")
        assert (exc.value.line, exc.value.column) == (5, 8)

    def test_render_has_caret(self):
        err = try_parse("flowchart TD\nA[Start\n").error
        assert err.caret == "       ^"
        rendered = err.render()
        assert rendered.startswith("Parse error in flowchart at line 2, column 8:")
        assert "A[Start\n       ^\nExpected: " in rendered
        assert str(err) == rendered


class TestResults:
    def test_try_parse_success(self):
        result = try_parse('pie\n"A" : 1\n')
        assert result.ok
        assert result.kind is DiagramKind.Pie
        assert result.unwrap() is result.model

    def test_try_parse_failure(self):
        result = try_parse("journey\nsection S\nTask: 9: Me\n")
        assert not result.ok
        assert result.kind is DiagramKind.UserJourney
        assert result.model is None
        with pytest.raises(TransformError):
            result.unwrap()

    def test_transform_error_names_dialect(self):
        err = try_parse("journey\nsection S\nTask: 9: Me\n").error
        assert str(err).startswith("user_journey: ")

    @pytest.mark.parametrize("source", ["", "   ", "\n\t\n", "%% nothing here\n"])
    def test_empty_input(self, source):
        with pytest.raises(UnknownDiagramTypeError):
            parse(source)
        result = try_parse(source)
        assert result.kind is None
        assert isinstance(result.error, UnknownDiagramTypeError)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse("notADiagram")
        assert issubclass(DiagramError, ValueError)


class TestDialectOverride:
    def test_explicit_dialect_by_name(self):
        assert parse('pie\n"A" : 1\n', dialect="pie").slices[0].label == "A"

    def test_name_lookup_accepts_dashes_and_case(self):
        assert DiagramKind.from_name("User-Journey") is DiagramKind.UserJourney

    def test_unknown_dialect_name(self):
        result = try_parse('pie\n"A" : 1\n', dialect="venn")
        assert isinstance(result.error, UnknownDiagramTypeError)
        assert "venn" in str(result.error)

    def test_wrong_dialect_is_a_parse_error(self):
        result = try_parse('pie\n"A" : 1\n', dialect=DiagramKind.Gantt)
        assert isinstance(result.error, ParseError)
        assert result.error.dialect == "gantt"
        assert result.error.line == 1


class TestFrontMatter:
    def test_title_applied(self):
        result = try_parse('---\ntitle: Pets\n---\npie\n"Dogs" : 1\n')
        assert result.front_matter == {"title": "Pets"}
        assert result.model.title == "Pets"

    def test_explicit_title_wins(self):
        chart = parse('---\ntitle: Pets\n---\npie title Real\n"Dogs" : 1\n')
        assert chart.title == "Real"


class TestProperties:
    @pytest.mark.parametrize(
        "source",
        [
            "graph LR\nA[Start] --> B{Check}\nB -->|yes| C\n",
            "sequenceDiagram\nAlice->>+Bob: hi\nBob-->>-Alice: hello\n",
            "stateDiagram-v2\n[*] --> Still\nStill --> Moving\nMoving --> [*]\n",
            "erDiagram\nCUSTOMER ||--o{ ORDER : places\n",
            "gitGraph\ncommit\nbranch dev\ncommit\ncheckout main\nmerge dev\n",
        ],
    )
    def test_idempotent_and_valid(self, source):
        first = parse(source)
        assert first == parse(source)
        assert first.is_valid()

    def test_dangling_reference_strict_and_lenient(self):
        source = "stateDiagram-v2\nA --> B\nclass Ghost hot\n"
        with pytest.raises(TransformError, match="unknown state 'Ghost'"):
            parse(source)
        assert parse(source, config=ParseConfig(strict_references=False)).is_valid()

    def test_longer_operator_wins(self):
        chart = parse("graph TD\nA <--> B\nB -.-> C\nC --- D\n")
        assert [e.edge_type for e in chart.edges] == [EdgeType.BidirArrow, EdgeType.DottedArrow, EdgeType.Line]
