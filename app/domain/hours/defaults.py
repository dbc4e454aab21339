from __future__ import annotations
from app.domain.hours.days import WEEK, DayOfWeek
from app.domain.hours.schedule import DaySchedule, WeeklySchedule

DEFAULT_OPEN = "11:00"
DEFAULT_CLOSE = "23:00"


def default_day(day: DayOfWeek, open_time: str = DEFAULT_OPEN, close_time: str = DEFAULT_CLOSE) -> DaySchedule:
    return DaySchedule(
        day_of_week=day,
        open_time=open_time,
        close_time=close_time,
        is_active=True,
        is_open=True,
        is_closed_next_day=False,
        special_note="",
    )


def default_weekly_schedule(open_time: str = DEFAULT_OPEN, close_time: str = DEFAULT_CLOSE) -> WeeklySchedule:
    """Placeholder week used when the stored schedule cannot be read."""
    return WeeklySchedule(default_day(d, open_time, close_time) for d in WEEK)
