"""Tests for the requirement diagram dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.requirement import (
    RelationKind,
    RequirementDiagram,
    RequirementKind,
    RiskLevel,
    VerifyMethod,
)

SOURCE = """requirementDiagram

    requirement test_req {
    id: 1
    text: the test text.
    risk: high
    verifymethod: test
    }

    functionalRequirement "Fast login" {
    id: 1.1
    risk: low
    }

    element test_entity {
    type: simulation
    docref: reqs/test_entity
    }

    test_entity - satisfies -> test_req
    test_req <- contains - "Fast login"
"""


def test_requirements():
    diagram = parse(SOURCE)
    assert isinstance(diagram, RequirementDiagram)
    req = diagram.find_requirement("test_req")
    assert (req.req_id, req.text) == ("1", "the test text.")
    assert (req.risk, req.verify_method) == (RiskLevel.High, VerifyMethod.Test)
    login = diagram.find_requirement("Fast login")
    assert login.kind == RequirementKind.Functional
    assert diagram.is_valid()


def test_elements():
    element = parse(SOURCE).find_element("test_entity")
    assert (element.type, element.docref) == ("simulation", "reqs/test_entity")


def test_relationship_directions():
    diagram = parse(SOURCE)
    assert [(r.source, r.target, r.kind) for r in diagram.relationships] == [
        ("test_entity", "test_req", RelationKind.Satisfies),
        ("Fast login", "test_req", RelationKind.Contains),
    ]
    assert diagram.satisfied_by("test_req") == ["test_entity"]
    assert diagram.relationships_from("test_req") == []
    assert [r.source for r in diagram.relationships_to("test_req")] == ["test_entity", "Fast login"]


def test_requirements_by_risk():
    diagram = parse(SOURCE)
    assert [r.name for r in diagram.requirements_by_risk(RiskLevel.Low)] == ["Fast login"]


def test_classes_and_style():
    source = (
        "requirementDiagram\n"
        "requirement r {\n}\n"
        "element e:::important {\n}\n"
        "classDef important fill:#f96\n"
        "class r important\n"
        "style e stroke:#333\n"
    )
    diagram = parse(source)
    assert diagram.find_element("e").classes == ["important"]
    assert diagram.find_requirement("r").classes == ["important"]
    assert diagram.find_element("e").style == "stroke:#333"


@pytest.mark.parametrize(
    "body,message",
    [
        ("element e {\nrisk: high\n}\n", "'e' cannot have a 'risk' property"),
        ("requirement r {\nrisk: extreme\n}\n", "unknown risk 'extreme'"),
        ("requirement r {\nverifymethod: prayer\n}\n", "unknown verify method"),
        ("requirement r {\n}\nelement r {\n}\n", "'r' is declared twice"),
        ("requirement r {\n}\nr - traces -> ghost\n", "unknown requirement or element 'ghost'"),
        ("requirement a {\n}\nrequirement b {\n}\na - traces - b\n", "must read"),
    ],
)
def test_errors(body, message):
    with pytest.raises(TransformError, match=message):
        parse("requirementDiagram\n" + body)
