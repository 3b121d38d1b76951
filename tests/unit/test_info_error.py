"""Tests for the info and error dialects."""

from mermaid_peg import parse
from mermaid_peg.models.info import DEFAULT_ERROR_MESSAGE, ErrorDiagram, InfoDiagram
from mermaid_peg.types import DiagramKind


def test_info():
    diagram = parse("info")
    assert isinstance(diagram, InfoDiagram)
    assert not diagram.show_info
    assert diagram.diagram_type() is DiagramKind.Info


def test_info_show_info_inline():
    assert parse("info showInfo").show_info


def test_info_show_info_line():
    assert parse("info\n  showInfo\n").show_info


def test_error_default_message():
    diagram = parse("error")
    assert isinstance(diagram, ErrorDiagram)
    assert diagram.message == DEFAULT_ERROR_MESSAGE
    assert diagram.is_valid()


def test_error_message():
    assert parse("error Something went wrong").message == "Something went wrong"
