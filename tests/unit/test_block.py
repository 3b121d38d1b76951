"""Tests for the block diagram dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.block import ArrowDirection, BlockDiagram, BlockKind
from mermaid_peg.models.flowchart import EdgeType, NodeShape

SOURCE = """block-beta
  columns 3
  a["Start"] b(Round) c:2
  space
  block:group:2
    d e
  end
  a --> b
  b -- "next" --> d
"""


def test_blocks_and_columns():
    diagram = parse(SOURCE)
    assert isinstance(diagram, BlockDiagram)
    assert diagram.columns == 3
    assert [b.id for b in diagram.blocks] == ["a", "b", "c", "space-1", "group"]
    a = diagram.find_block("a")
    assert (a.label, a.shape) == ("Start", NodeShape.Rectangle)
    assert diagram.find_block("b").shape == NodeShape.Rounded
    assert diagram.find_block("c").width == 2
    assert diagram.find_block("space-1").kind == BlockKind.Space
    assert diagram.is_valid()


def test_compound_children():
    group = parse(SOURCE).find_block("group")
    assert group.kind == BlockKind.Compound
    assert group.width == 2
    assert [child.id for child in group.children] == ["d", "e"]


def test_links():
    diagram = parse(SOURCE)
    assert [(link.from_id, link.to_id, link.edge_type) for link in diagram.links] == [
        ("a", "b", EdgeType.Arrow),
        ("b", "d", EdgeType.Arrow),
    ]
    assert diagram.links[1].label == "next"
    assert [link.to_id for link in diagram.links_from("b")] == ["d"]
    assert [link.from_id for link in diagram.links_to("b")] == ["a"]


def test_row_count():
    assert parse(SOURCE).row_count() == 3


def test_arrow_block():
    diagram = parse('block-beta\nnext<["go"]>(right)\n')
    arrow = diagram.find_block("next")
    assert arrow.kind == BlockKind.Arrow
    assert arrow.label == "go"
    assert arrow.arrow_direction == ArrowDirection.Right


def test_space_width_and_anonymous_compound():
    diagram = parse("block-beta\nspace:2\nblock\n  x\nend\n")
    assert diagram.blocks[0].width == 2
    assert diagram.blocks[1].id == "block-2"
    assert diagram.blocks[1].children[0].id == "x"


def test_auto_columns():
    assert parse("block-beta\ncolumns auto\na\n").columns is None


def test_styles_and_classes():
    source = "block-beta\na b\nclassDef blue fill:#00f\nclass a blue\nstyle b fill:#f00\n"
    diagram = parse(source)
    assert diagram.find_block("a").classes == ["blue"]
    assert diagram.find_block("b").style == "fill:#f00"


@pytest.mark.parametrize(
    "body,message",
    [
        ("columns 2\na:3\n", "is 3 columns wide but its container has 2"),
        ("a\na\n", "duplicate block id 'a'"),
        ("a\na --> ghost\n", "unknown block 'ghost'"),
        ("a\nclass ghost blue\n", "unknown block 'ghost'"),
    ],
)
def test_errors(body, message):
    with pytest.raises(TransformError, match=message):
        parse("block-beta\n" + body)
