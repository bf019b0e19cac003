"""Tests for the cultivation plan and lunar phase calendar."""

from datetime import date

import pytest

from cannaconnect.models import CultivationTask
from cannaconnect.services import cultivation
from cannaconnect.services.cultivation import (
    PREDEFINED_TASKS,
    build_cultivation_plan,
    get_lunar_phase,
    phase_for_day,
)

pytestmark = [pytest.mark.fast]


def test_predefined_tasks_are_ordered_and_phase_consistent():
    days = [t.day for t in PREDEFINED_TASKS]
    assert days == sorted(days)
    assert days[0] == 1 and days[-1] == 90
    for task in PREDEFINED_TASKS:
        assert task.phase == phase_for_day(task.day)


@pytest.mark.parametrize(
    "day,phase",
    [(1, "germination"), (7, "germination"), (8, "vegetative"), (37, "vegetative"), (38, "flowering"), (120, "flowering")],
)
def test_phase_for_day_boundaries(day, phase):
    assert phase_for_day(day) == phase


def test_phase_for_day_rejects_day_zero():
    with pytest.raises(ValueError):
        phase_for_day(0)


def test_plan_day_one_is_start_date():
    plan = build_cultivation_plan(date(2024, 3, 1))
    assert len(plan) == len(PREDEFINED_TASKS)
    assert plan[0].date == "2024-03-01"
    assert plan[0].name == "Iniciar Germinación"
    # Day 90 = start + 89 days
    assert plan[-1].date == "2024-05-29"


@pytest.mark.parametrize(
    "day,key",
    [
        (date(2023, 1, 21), "newMoon"),
        (date(2023, 1, 28), "waxingCrescent"),
        (date(2023, 2, 5), "fullMoon"),
        (date(2023, 1, 20), "waningCrescent"),
    ],
)
def test_lunar_phase_from_known_new_moon(day, key):
    phase = get_lunar_phase(day)
    assert phase.phaseKey == key
    assert phase.date == day.isoformat()
    assert phase.advice


def test_lunar_phase_repeats_every_cycle():
    assert get_lunar_phase(date(2023, 1, 21)).phaseName == "Luna Nueva"
    # 30 days is just past one full cycle
    assert get_lunar_phase(date(2023, 2, 20)).phaseName == "Luna Nueva"


def test_plan_phase_is_derived_from_task_day(monkeypatch):
    """A task filed under the wrong phase is scheduled under the phase its day falls in."""
    monkeypatch.setattr(
        cultivation,
        "PREDEFINED_TASKS",
        [CultivationTask(day=40, phase="germination", name="Revisar", description="Revisa la planta.")],
    )
    plan = build_cultivation_plan(date(2024, 1, 1))
    assert plan[0].phase == "flowering"
    assert plan[0].date == "2024-02-09"
