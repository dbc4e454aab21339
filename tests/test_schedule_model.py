import pytest
from pydantic import ValidationError

from app.domain.hours.days import DayOfWeek
from app.domain.hours.defaults import default_weekly_schedule
from app.core.validators import is_hhmm
from app.domain.hours.schedule import DaySchedule, WeeklySchedule


def test_weekly_schedule_rejects_duplicate_days():
    with pytest.raises(ValueError):
        WeeklySchedule(
            [
                DaySchedule(day_of_week=DayOfWeek.monday, open_time="09:00", close_time="17:00"),
                DaySchedule(day_of_week=DayOfWeek.monday, open_time="10:00", close_time="18:00"),
            ]
        )


def test_weekly_schedule_is_sparse_and_ordered():
    sched = WeeklySchedule(
        [
            DaySchedule(day_of_week=DayOfWeek.sunday),
            DaySchedule(day_of_week=DayOfWeek.tuesday),
        ]
    )
    assert list(sched) == [DayOfWeek.tuesday, DayOfWeek.sunday]
    assert len(sched) == 2
    assert sched.get(DayOfWeek.monday) is None
    assert DayOfWeek.sunday in sched


def test_day_schedule_is_immutable():
    d = DaySchedule(day_of_week=DayOfWeek.monday)
    with pytest.raises(ValidationError):
        d.open_time = "09:00"


def test_day_schedule_accepts_camel_case():
    d = DaySchedule.model_validate(
        {"dayOfWeek": "friday", "openTime": "18:00", "closeTime": "02:00", "isClosedNextDay": True}
    )
    assert d.day_of_week == DayOfWeek.friday
    assert d.has_hours
    assert d.is_overnight
    assert d.model_dump(by_alias=True)["isClosedNextDay"] is True


def test_has_hours_requires_active_and_open():
    base = {"day_of_week": DayOfWeek.monday, "open_time": "09:00", "close_time": "17:00"}
    assert DaySchedule(**base).has_hours
    assert not DaySchedule(**base, is_active=False).has_hours
    assert not DaySchedule(**base, is_open=False).has_hours


@pytest.mark.parametrize("value,ok", [("00:00", True), ("23:59", True), ("24:00", False), ("9:00", False), ("", False), (None, False)])
def test_is_hhmm(value, ok):
    assert is_hhmm(value) is ok


def test_default_weekly_schedule_covers_every_day():
    sched = default_weekly_schedule()
    assert len(sched) == 7
    assert all(d.open_time == "11:00" and d.close_time == "23:00" for d in sched.values())
