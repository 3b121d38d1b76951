"""Tests for the gantt dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.gantt import DEFAULT_DATE_FORMAT, GanttChart, TaskTag

SOURCE = """gantt
    title A Gantt Diagram
    dateFormat YYYY-MM-DD
    excludes weekends, 2024-01-15
    section Design
      Research       :done, a1, 2024-01-01, 30d
      Mockups        :active, a2, after a1, 2w
    section Build
      Implementation :crit, b1, after a2, 2024-03-30
      Release        :milestone, b2, 2024-04-01, until b1
      Retro          :5d
"""


def test_settings():
    chart = parse(SOURCE)
    assert isinstance(chart, GanttChart)
    assert chart.title == "A Gantt Diagram"
    assert chart.date_format == "YYYY-MM-DD"
    assert chart.excludes == ["weekends", "2024-01-15"]
    assert chart.is_valid()


def test_default_date_format_and_flags():
    chart = parse("gantt\ninclusiveEndDates\ntopAxis\naxisFormat %m/%d\nA :1d\n")
    assert chart.date_format == DEFAULT_DATE_FORMAT
    assert chart.inclusive_end_dates
    assert chart.top_axis
    assert chart.axis_format == "%m/%d"


def test_task_details():
    chart = parse(SOURCE)
    research = chart.find_task("a1")
    assert research.tags == [TaskTag.Done]
    assert (research.start, research.duration) == ("2024-01-01", "30d")
    mockups = chart.find_task("a2")
    assert mockups.after == ["a1"]
    assert mockups.duration == "2w"
    build = chart.find_task("b1")
    assert build.is_critical()
    assert build.end == "2024-03-30"
    release = chart.find_task("b2")
    assert release.until == "b1"
    assert release.is_milestone()
    retro = chart.find_section("Build").tasks[2]
    assert (retro.id, retro.duration) == (None, "5d")


def test_helpers():
    chart = parse(SOURCE)
    assert [t.id for t in chart.dependents_of("a1")] == ["a2"]
    assert [t.id for t in chart.critical_tasks()] == ["b1"]
    assert [t.id for t in chart.milestones()] == ["b2"]


def test_after_as_only_detail():
    chart = parse("gantt\nA :a, 1d\nB :after a\n")
    assert chart.all_tasks()[1].after == ["a"]


def test_two_details_read_as_id_and_timing():
    chart = parse("gantt\nA :a1, 1d\nB :b1, after a1\nC :after b1, 2d\nD :2024-01-01, 3d\n")
    first, second, third, fourth = chart.all_tasks()
    assert (first.id, first.duration) == ("a1", "1d")
    assert (second.id, second.after) == ("b1", ["a1"])
    assert (third.id, third.after, third.duration) == (None, ["b1"], "2d")
    assert (fourth.id, fourth.start, fourth.duration) == (None, "2024-01-01", "3d")


def test_task_before_section_goes_to_default():
    chart = parse("gantt\nA :1d\n")
    assert chart.sections[0].name == "Default"


def test_duplicate_task_id():
    with pytest.raises(TransformError, match="duplicate task id 'a'"):
        parse("gantt\nA :a, 1d\nB :a, 2d\n")


def test_unknown_after_reference():
    with pytest.raises(TransformError, match="unknown task 'ghost'"):
        parse("gantt\nA :a, after ghost, 1d\n")


def test_too_many_details():
    with pytest.raises(TransformError, match="too many details"):
        parse("gantt\nA :a, 2024-01-01, 2024-01-02, 1d\n")


def test_click():
    chart = parse('gantt\nA :a1, 1d\nB :b1, 1d\nclick a1 href "https://example.com"\nclick b1 call open()\n')
    assert chart.find_task("a1").click_href == "https://example.com"
    assert chart.find_task("b1").click_callback == "open()"
