from __future__ import annotations
from typing import Optional
import structlog
from sqlalchemy.orm import Session
from app.domain.hours.days import DayOfWeek
from app.domain.hours.schedule import DaySchedule, WeeklySchedule
from app.repositories.models import OpeningHours

log = structlog.get_logger()


class ScheduleError(Exception):
    code = "schedule_error"


class ScheduleNotFound(ScheduleError):
    code = "opening_hours_not_found"


class DayOfWeekImmutable(ScheduleError):
    code = "day_of_week_immutable"


def to_day_schedule(row: OpeningHours) -> DaySchedule:
    return DaySchedule(
        day_of_week=row.day_of_week,
        open_time=row.open_time or "",
        close_time=row.close_time or "",
        is_active=bool(row.is_active),
        is_open=bool(row.is_open),
        is_closed_next_day=bool(row.is_closed_next_day),
        special_note=row.special_note,
    )


def _apply(row: OpeningHours, day: DaySchedule) -> None:
    # all fields are written together; a closed day never keeps stale times
    row.open_time = (day.open_time or "") if day.is_open else ""
    row.close_time = (day.close_time or "") if day.is_open else ""
    row.is_active = day.is_active
    row.is_open = day.is_open
    row.is_closed_next_day = day.is_closed_next_day
    row.special_note = day.special_note


class ScheduleRepository:
    """Read and one-day-at-a-time upsert of the weekly opening hours."""

    def __init__(self, db: Session):
        self.db = db

    def list_days(self) -> list[OpeningHours]:
        return self.db.query(OpeningHours).all()

    def get_day(self, day: DayOfWeek) -> Optional[OpeningHours]:
        return self.db.query(OpeningHours).filter(OpeningHours.day_of_week == day).first()

    def get_by_id(self, row_id: int) -> Optional[OpeningHours]:
        return self.db.get(OpeningHours, row_id)

    def load_weekly(self) -> WeeklySchedule:
        return WeeklySchedule(to_day_schedule(r) for r in self.list_days())

    def upsert_day(self, day: DaySchedule) -> OpeningHours:
        row = self.get_day(day.day_of_week)
        created = row is None
        if row is None:
            row = OpeningHours(day_of_week=day.day_of_week)
        _apply(row, day)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        log.info("opening_hours_saved", day=day.day_of_week.value, is_open=day.is_open, created=created)
        return row

    def update_by_id(self, row_id: int, day: DaySchedule) -> OpeningHours:
        row = self.get_by_id(row_id)
        if row is None:
            raise ScheduleNotFound(row_id)
        if row.day_of_week != day.day_of_week:
            raise DayOfWeekImmutable(row.day_of_week.value)
        _apply(row, day)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        log.info("opening_hours_saved", day=day.day_of_week.value, is_open=day.is_open, created=False)
        return row
