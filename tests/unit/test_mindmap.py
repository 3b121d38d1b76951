"""Tests for the mindmap dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.mindmap import Mindmap, MindmapShape

SOURCE = """mindmap
  root((Main topic))
    origins[Origins]
      ::icon(fa fa-book)
      Long history
    tools(Tools)
      :::urgent large
      Pen and paper

    research{{Research}}
"""


def test_tree_structure():
    mindmap = parse(SOURCE)
    assert isinstance(mindmap, Mindmap)
    assert mindmap.root.id == "root"
    assert mindmap.root.label == "Main topic"
    assert mindmap.root.shape == MindmapShape.Circle
    assert [c.id for c in mindmap.root.children] == ["origins", "tools", "research"]
    assert mindmap.is_valid()


def test_shapes_and_levels():
    mindmap = parse(SOURCE)
    assert mindmap.find_node("origins").shape == MindmapShape.Square
    assert mindmap.find_node("tools").shape == MindmapShape.Rounded
    assert mindmap.find_node("research").shape == MindmapShape.Hexagon
    assert mindmap.find_node("origins").level == 1
    assert mindmap.depth() == 3


def test_plain_nodes_get_generated_ids():
    mindmap = parse(SOURCE)
    history = mindmap.find_node("origins").children[0]
    assert history.label == "Long history"
    assert history.id.startswith("node-")
    assert history.shape == MindmapShape.Default
    assert mindmap.parent_of(history.id).id == "origins"


def test_decorations():
    mindmap = parse(SOURCE)
    assert mindmap.find_node("origins").icon == "fa fa-book"
    assert mindmap.find_node("tools").classes == ["urgent", "large"]


def test_bang_and_cloud():
    mindmap = parse("mindmap\nroot\n  a))Boom((\n  b)Fluffy(\n")
    assert mindmap.find_node("a").shape == MindmapShape.Bang
    assert mindmap.find_node("b").shape == MindmapShape.Cloud


def test_leaves():
    mindmap = parse(SOURCE)
    assert [n.label for n in mindmap.leaves()] == ["Long history", "Pen and paper", "Research"]


def test_second_root():
    with pytest.raises(TransformError, match="second root"):
        parse("mindmap\n  first\n  second\n")


def test_decoration_before_node():
    with pytest.raises(TransformError, match="before any node"):
        parse("mindmap\n  ::icon(fa fa-book)\n  root\n")
