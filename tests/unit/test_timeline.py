"""Tests for the timeline dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.timeline import Timeline
from mermaid_peg.types import Direction

SOURCE = """timeline
    title History of Social Media
    2002 : LinkedIn
    2004 : Facebook : Google
    section Later
    2005 : YouTube
         : Reddit
    2006 : Twitter
"""


def test_periods_and_sections():
    timeline = parse(SOURCE)
    assert isinstance(timeline, Timeline)
    assert timeline.title == "History of Social Media"
    assert timeline.direction == Direction.LR
    assert [e.time for e in timeline.events] == ["2002", "2004"]
    assert timeline.find_event("2004").descriptions == ["Facebook", "Google"]
    assert [e.time for e in timeline.find_section("Later").events] == ["2005", "2006"]
    assert timeline.is_valid()


def test_continuation_extends_previous_period():
    timeline = parse(SOURCE)
    assert timeline.find_event("2005").descriptions == ["YouTube", "Reddit"]


def test_all_times_in_order():
    assert parse(SOURCE).all_times() == ["2002", "2004", "2005", "2006"]


def test_period_without_events():
    timeline = parse("timeline\n2020\n")
    event = timeline.find_event("2020")
    assert event.descriptions == []
    assert event.primary_description() is None


def test_header_direction():
    assert parse("timeline TD\n2020 : x\n").direction == Direction.TD


def test_continuation_before_period():
    with pytest.raises(TransformError, match="before any time period"):
        parse("timeline\n: orphan\n")
