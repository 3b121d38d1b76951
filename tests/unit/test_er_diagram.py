"""Tests for the entity relationship dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.er_diagram import Cardinality, ErDiagram, KeyType, RelationshipKind


def test_relationship():
    diagram = parse("erDiagram\n    CUSTOMER ||--o{ ORDER : places\n")
    assert isinstance(diagram, ErDiagram)
    relationship = diagram.relationships[0]
    assert (relationship.from_id, relationship.to_id) == ("CUSTOMER", "ORDER")
    assert relationship.cardinality_from == Cardinality.ExactlyOne
    assert relationship.cardinality_to == Cardinality.ZeroOrMore
    assert relationship.kind == RelationshipKind.NonIdentifying
    assert relationship.label == "places"
    assert [e.id for e in diagram.entities] == ["CUSTOMER", "ORDER"]
    assert diagram.is_valid()


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("|o", "o|", (Cardinality.ZeroOrOne, Cardinality.ZeroOrOne)),
        ("}o", "o{", (Cardinality.ZeroOrMore, Cardinality.ZeroOrMore)),
        ("}|", "|{", (Cardinality.OneOrMore, Cardinality.OneOrMore)),
        ("||", "||", (Cardinality.ExactlyOne, Cardinality.ExactlyOne)),
    ],
)
def test_cardinality_markers(left, right, expected):
    relationship = parse(f"erDiagram\nA {left}--{right} B : has\n").relationships[0]
    assert (relationship.cardinality_from, relationship.cardinality_to) == expected


def test_relationship_operators():
    diagram = parse("erDiagram\nA ||==|{ B : owns\nB ||..o{ C : refers\n")
    assert [r.kind for r in diagram.relationships] == [
        RelationshipKind.Identifying,
        RelationshipKind.NonIdentifyingDotted,
    ]
    assert [r.from_id for r in diagram.identifying_relationships()] == ["A"]
    assert [r.from_id for r in diagram.non_identifying_relationships()] == ["B"]


def test_quoted_relationship_label():
    relationship = parse('erDiagram\nA ||--|{ B : "is made of"\n').relationships[0]
    assert relationship.label == "is made of"


def test_entity_attributes():
    source = (
        "erDiagram\n"
        "CUSTOMER {\n"
        "    string name PK\n"
        '    string email UK "login address"\n'
        "    int region_id FK\n"
        "    date created\n"
        "}\n"
    )
    customer = parse(source).find_entity("CUSTOMER")
    assert [a.name for a in customer.attributes] == ["name", "email", "region_id", "created"]
    assert customer.attributes[1].keys == [KeyType.Unique]
    assert customer.attributes[1].comment == "login address"
    assert customer.attributes[2].is_foreign_key()
    assert [a.name for a in customer.primary_keys()] == ["name"]


def test_multiple_keys():
    entity = parse("erDiagram\nLINE {\n  int order_id PK, FK\n}\n").find_entity("LINE")
    assert entity.attributes[0].keys == [KeyType.Primary, KeyType.Foreign]


def test_repeated_attribute():
    with pytest.raises(TransformError, match="repeats attribute 'name'"):
        parse("erDiagram\nA {\n  string name\n  int name\n}\n")


def test_entity_alias():
    diagram = parse('erDiagram\np["Person"]\np ||--o{ car : drives\n')
    assert diagram.find_entity("p").label == "Person"
    assert diagram.find_entity("car").label == "car"


def test_later_block_merges_attributes():
    source = "erDiagram\nA ||--|| B : x\nA {\n  string id PK\n}\n"
    diagram = parse(source)
    assert [e.id for e in diagram.entities] == ["A", "B"]
    assert diagram.find_entity("A").attributes[0].name == "id"


def test_dashed_entity_name():
    diagram = parse("erDiagram\nline-item }|--|| order : in\n")
    assert diagram.relationships[0].from_id == "line-item"


def test_relationship_lookups():
    diagram = parse("erDiagram\nA ||--o{ B : x\nA ||--o{ C : y\nC ||--|| B : z\n")
    assert [r.to_id for r in diagram.relationships_from("A")] == ["B", "C"]
    assert [r.from_id for r in diagram.relationships_to("B")] == ["A", "C"]
