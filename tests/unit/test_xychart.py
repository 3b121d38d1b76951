"""Tests for the XY chart dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.xychart import ChartOrientation, SeriesKind, XYChart

SOURCE = """xychart-beta
    title "Sales Revenue"
    x-axis [jan, feb, "mar"]
    y-axis "Revenue (in $)" 4000 --> 11000
    bar [5000, 6000, 7500]
    line "Trend" [5000, 6500.5, 7500]
"""


def test_axes_and_series():
    chart = parse(SOURCE)
    assert isinstance(chart, XYChart)
    assert chart.title == "Sales Revenue"
    assert chart.x_axis.categories == ["jan", "feb", "mar"]
    assert chart.y_axis.title == "Revenue (in $)"
    assert (chart.y_axis.min, chart.y_axis.max) == (4000.0, 11000.0)
    assert [s.kind for s in chart.series] == [SeriesKind.Bar, SeriesKind.Line]
    assert chart.lines()[0].title == "Trend"
    assert chart.lines()[0].values == [5000.0, 6500.5, 7500.0]
    assert chart.orientation == ChartOrientation.Vertical
    assert chart.is_valid()


def test_helpers():
    chart = parse(SOURCE)
    assert len(chart.bars()) == 1
    assert chart.value_range() == (4000.0, 11000.0)
    assert chart.point_count() == 3


def test_range_from_data():
    chart = parse("xychart-beta horizontal\nx-axis Month 1 --> 12\nline [3, 9, 1]\n")
    assert chart.orientation == ChartOrientation.Horizontal
    assert chart.x_axis.title == "Month"
    assert not chart.x_axis.categorical
    assert chart.value_range() == (1.0, 9.0)


@pytest.mark.parametrize(
    "body,message",
    [
        ("x-axis [a, b]\nbar [1]\n", "bar series 1 has 1 values for 2 x-axis categories"),
        ("y-axis 10 --> 1\nbar [1]\n", "runs backwards"),
        ("y-axis [a, b]\nbar [1, 2]\n", "y-axis takes a numeric range"),
    ],
)
def test_errors(body, message):
    with pytest.raises(TransformError, match=message):
        parse("xychart-beta\n" + body)
