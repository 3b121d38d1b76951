"""Tests for the radar chart dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.radar import Graticule, RadarChart

SOURCE = """radar-beta
  title Skills
  axis speed["Speed"], power["Power"], range
  curve alice["Alice"]{4, 3, 5}
  curve bob{ range: 2, speed: 1 }
  max 6
  ticks 3
  graticule polygon
  showLegend false
"""


def test_axes_and_curves():
    chart = parse(SOURCE)
    assert isinstance(chart, RadarChart)
    assert [(a.id, a.label) for a in chart.axes] == [("speed", "Speed"), ("power", "Power"), ("range", "range")]
    alice = chart.find_curve("alice")
    assert alice.label == "Alice"
    assert alice.values == {"speed": 4.0, "power": 3.0, "range": 5.0}
    assert chart.is_valid()


def test_named_values():
    bob = parse(SOURCE).find_curve("bob")
    assert bob.label == "bob"
    assert bob.value_for("range") == 2.0
    assert bob.value_for("speed") == 1.0
    assert bob.value_for("power") is None


def test_options():
    chart = parse(SOURCE)
    assert chart.max == 6.0
    assert chart.ticks == 3
    assert chart.graticule == Graticule.Polygon
    assert chart.show_legend is False
    assert chart.max_value() == 6.0


def test_defaults():
    chart = parse("radar-beta\naxis a, b\ncurve c{1, 7}\n")
    assert chart.ticks == 5
    assert chart.graticule == Graticule.Circle
    assert chart.max_value() == 7.0


def test_circular_graticule_alias():
    chart = parse("radar-beta\naxis a\ncurve c{1}\ngraticule circular\n")
    assert chart.graticule == Graticule.Circle


@pytest.mark.parametrize(
    "body,message",
    [
        ("axis a, a\ncurve c{1}\n", "duplicate axis 'a'"),
        ("axis a\ncurve c{1, 2}\n", "has 2 values but there are 1 axes"),
        ("axis a, b\ncurve c{a: 1, 2}\n", "mixes named and positional"),
        ("axis a\ncurve c{z: 1}\n", "unknown axis 'z'"),
        ("axis a\ncurve c{1}\nticks many\n", "bad value 'many' for 'ticks'"),
        ("axis a\ncurve c{1}\nshowLegend maybe\n", "bad value 'maybe'"),
    ],
)
def test_errors(body, message):
    with pytest.raises(TransformError, match=message):
        parse("radar-beta\n" + body)
