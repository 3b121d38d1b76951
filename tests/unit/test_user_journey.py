"""Tests for the user journey dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.user_journey import ScoreColor, UserJourney

SOURCE = """journey
    title My working day
    section Go to work
      Make tea: 5: Me
      Go upstairs: 3: Me
      Do work: 1: Me, Cat
    section Go home
      Go downstairs: 5: Me
      Sit down: 4
"""


def test_sections_and_tasks():
    journey = parse(SOURCE)
    assert isinstance(journey, UserJourney)
    assert journey.title == "My working day"
    assert [s.name for s in journey.sections] == ["Go to work", "Go home"]
    work = journey.find_section("Go to work")
    assert [(t.name, t.score) for t in work.tasks] == [("Make tea", 5), ("Go upstairs", 3), ("Do work", 1)]
    assert work.tasks[2].actors == ["Me", "Cat"]
    assert journey.find_section("Go home").tasks[1].actors == []
    assert journey.is_valid()


def test_helpers():
    journey = parse(SOURCE)
    assert journey.average_score() == pytest.approx(18 / 5)
    assert journey.all_actors() == ["Me", "Cat"]
    assert [t.name for t in journey.tasks_by_actor("Cat")] == ["Do work"]
    assert [t.name for t in journey.tasks_by_score(5)] == ["Make tea", "Go downstairs"]


def test_score_colors():
    journey = parse("journey\nsection S\nbad: 2\nok: 3\ngood: 4\n")
    assert [t.score_color() for t in journey.all_tasks()] == [ScoreColor.Red, ScoreColor.Yellow, ScoreColor.Green]


def test_task_before_section_goes_to_default():
    journey = parse("journey\nWake up: 3: Me\n")
    assert journey.sections[0].name == "Default"


def test_score_out_of_range():
    with pytest.raises(TransformError, match="score 6"):
        parse("journey\ntitle T\nsection S\nTask:6:Actor\n")


def test_non_integer_score():
    with pytest.raises(TransformError, match="non-integer"):
        parse("journey\nsection S\nTask: 3.5: Me\n")


def test_empty_journey_is_invalid():
    journey = parse("journey\ntitle Nothing yet\n")
    assert not journey.is_valid()
    assert journey.average_score() == 0.0
