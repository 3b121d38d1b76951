"""Tests for the quadrant chart dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.quadrant import QuadrantChart

SOURCE = """quadrantChart
    title Reach and engagement of campaigns
    x-axis Low Reach --> High Reach
    y-axis Low Engagement --> High Engagement
    quadrant-1 We should expand
    quadrant-2 Need to promote
    quadrant-3 Re-evaluate
    quadrant-4 May be improved
    Campaign A: [0.3, 0.6]
    Campaign B: [0.45, 0.23]
    Campaign C: [0.78, 0.34]
"""


def test_axes_and_labels():
    chart = parse(SOURCE)
    assert isinstance(chart, QuadrantChart)
    assert chart.title == "Reach and engagement of campaigns"
    assert (chart.x_axis_left, chart.x_axis_right) == ("Low Reach", "High Reach")
    assert (chart.y_axis_bottom, chart.y_axis_top) == ("Low Engagement", "High Engagement")
    assert chart.quadrant_label(1) == "We should expand"
    assert chart.quadrant_label(3) == "Re-evaluate"
    assert chart.is_valid()


def test_points_and_quadrants():
    chart = parse(SOURCE)
    point = chart.find_point("Campaign A")
    assert (point.x, point.y) == (0.3, 0.6)
    assert point.quadrant() == 2
    assert [p.label for p in chart.points_in_quadrant(3)] == ["Campaign B"]
    assert [p.label for p in chart.points_in_quadrant(4)] == ["Campaign C"]


def test_axis_without_high_label():
    chart = parse("quadrantChart\nx-axis Cheap\nA: [0.1, 0.1]\n")
    assert chart.x_axis_left == "Cheap"
    assert chart.x_axis_right is None


def test_point_class_and_style():
    source = (
        "quadrantChart\n"
        "classDef hot color: #ff3300, radius: 8\n"
        "Point A:::hot: [0.9, 0.9]\n"
        "Point B: [0.1, 0.2] radius: 12, color: #00ff00, stroke-width: 2px\n"
    )
    chart = parse(source)
    a = chart.find_point("Point A")
    assert a.class_name == "hot"
    assert chart.class_defs == {"hot": "color: #ff3300, radius: 8"}
    b = chart.find_point("Point B")
    assert (b.radius, b.color, b.stroke_width) == (12.0, "#00ff00", "2px")


def test_unknown_point_class():
    with pytest.raises(TransformError, match="unknown class 'cold'"):
        parse("quadrantChart\nA:::cold: [0.5, 0.5]\n")


def test_point_out_of_range():
    with pytest.raises(TransformError, match="between 0 and 1"):
        parse("quadrantChart\nA: [1.5, 0.5]\n")


def test_non_numeric_radius():
    with pytest.raises(TransformError, match="non-numeric radius"):
        parse("quadrantChart\nA: [0.5, 0.5] radius: big\n")
