import pytest

from app.domain.hours.days import DayOfWeek
from app.domain.hours.schedule import DaySchedule
from app.repositories.opening_hours import DayOfWeekImmutable, ScheduleNotFound, ScheduleRepository


@pytest.fixture
def repo(db, clean_hours):
    return ScheduleRepository(db)


def test_upsert_creates_then_replaces(repo):
    first = repo.upsert_day(DaySchedule(day_of_week=DayOfWeek.friday, open_time="18:00", close_time="02:00"))
    second = repo.upsert_day(
        DaySchedule(day_of_week=DayOfWeek.friday, open_time="17:00", close_time="01:00", special_note="Trivia")
    )
    assert first.id == second.id
    assert len(repo.list_days()) == 1
    row = repo.get_day(DayOfWeek.friday)
    assert (row.open_time, row.close_time, row.special_note) == ("17:00", "01:00", "Trivia")


def test_closed_day_is_saved_with_empty_times(repo):
    row = repo.upsert_day(DaySchedule(day_of_week=DayOfWeek.monday, open_time="09:00", close_time="17:00", is_open=False))
    assert row.open_time == ""
    assert row.close_time == ""
    assert row.is_open is False


def test_load_weekly_is_sparse_snapshot(repo):
    repo.upsert_day(DaySchedule(day_of_week=DayOfWeek.monday, open_time="09:00", close_time="17:00"))
    repo.upsert_day(DaySchedule(day_of_week=DayOfWeek.sunday, is_open=False))
    sched = repo.load_weekly()
    assert list(sched) == [DayOfWeek.monday, DayOfWeek.sunday]
    assert sched[DayOfWeek.monday].has_hours
    assert not sched[DayOfWeek.sunday].has_hours


def test_update_by_id_keeps_day_identity(repo):
    row = repo.upsert_day(DaySchedule(day_of_week=DayOfWeek.tuesday, open_time="09:00", close_time="17:00"))
    updated = repo.update_by_id(row.id, DaySchedule(day_of_week=DayOfWeek.tuesday, open_time="10:00", close_time="18:00"))
    assert updated.open_time == "10:00"
    with pytest.raises(DayOfWeekImmutable):
        repo.update_by_id(row.id, DaySchedule(day_of_week=DayOfWeek.wednesday, open_time="10:00", close_time="18:00"))
    with pytest.raises(ScheduleNotFound):
        repo.update_by_id(987654, DaySchedule(day_of_week=DayOfWeek.tuesday))
