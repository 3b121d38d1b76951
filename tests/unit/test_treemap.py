"""Tests for the treemap dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.treemap import Treemap

SOURCE = """treemap-beta
title Revenue
"Products"
    "Electronics"
        "Phones": 50
        "Computers": 30
    "Clothing"
        "Men's": 40
"Services": 25
"""


def test_hierarchy():
    treemap = parse(SOURCE)
    assert isinstance(treemap, Treemap)
    assert treemap.title == "Revenue"
    assert [root.label for root in treemap.roots] == ["Products", "Services"]
    products = treemap.roots[0]
    assert [child.label for child in products.children] == ["Electronics", "Clothing"]
    assert treemap.is_valid()


def test_levels_and_depth():
    treemap = parse(SOURCE)
    assert [(n.label, n.level) for n in treemap.all_nodes()] == [
        ("Products", 0),
        ("Electronics", 1),
        ("Phones", 2),
        ("Computers", 2),
        ("Clothing", 1),
        ("Men's", 2),
        ("Services", 0),
    ]
    assert treemap.depth() == 3


def test_totals():
    treemap = parse(SOURCE)
    assert treemap.find_node("Products").total() == 120
    assert treemap.find_node("Services").total() == 25
    assert treemap.total() == 145


def test_leaves():
    treemap = parse(SOURCE)
    assert [n.label for n in treemap.leaves()] == ["Phones", "Computers", "Men's", "Services"]


def test_class_assignment():
    treemap = parse('treemap-beta\nclassDef hot fill:#f96\n"A"\n    "B":::hot : 3\n')
    node = treemap.find_node("B")
    assert (node.class_name, node.value) == ("hot", 3.0)
    assert treemap.class_defs == {"hot": "fill:#f96"}


def test_short_header():
    treemap = parse('treemap\n"Only": 1\n')
    assert treemap.roots[0].value == 1.0


def test_value_and_children():
    with pytest.raises(TransformError, match="'A' has a value and children"):
        parse('treemap-beta\n"A": 5\n    "B": 1\n')


def test_negative_value():
    with pytest.raises(TransformError, match="'A' has negative value -1"):
        parse('treemap-beta\n"A": -1\n')


def test_unknown_class():
    with pytest.raises(TransformError, match="unknown class 'hot'"):
        parse('treemap-beta\n"A":::hot\n')
