from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo
from app.core.config import settings
from app.core.validators import is_hhmm
from app.domain.hours.days import DayOfWeek, next_day, previous
from app.domain.hours.formatting import render_status_message
from app.domain.hours.schedule import (
    CurrentStatus,
    DaySchedule,
    NextOpening,
    StatusKind,
    WeeklySchedule,
)


def local_now(now: datetime, tz: Union[ZoneInfo, str, None] = None) -> datetime:
    """Convert an instant to the business wall clock.

    A naive datetime is taken as UTC, never as the host's local time.
    ``tz`` defaults to the configured BUSINESS_TIMEZONE.
    """
    if tz is None:
        tz = settings.business_tz
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def _open_today(day: Optional[DaySchedule], t: str) -> Optional[StatusKind]:
    if day is None or not day.has_hours:
        return None
    if day.is_overnight:
        # [open..23:59] U [00:00..close]
        if t >= day.open_time or t <= day.close_time:  # type: ignore[operator]
            return StatusKind.open_overnight
        return None
    if day.open_time <= t <= day.close_time:  # type: ignore[operator]
        return StatusKind.open_today
    return None


def _open_from_previous_day(day: Optional[DaySchedule], t: str) -> bool:
    return day is not None and day.has_hours and day.is_overnight and t <= day.close_time  # type: ignore[operator]


def find_next_opening(schedule: WeeklySchedule, today: DayOfWeek, t: str) -> Optional[NextOpening]:
    """First day, starting today, whose opening is still ahead of ``t``.

    Today counts only while its open time has not been reached yet.
    """
    for i in range(7):
        check = next_day(today, i)
        day = schedule.get(check)
        if day is None or not day.opens_for_business or not is_hhmm(day.open_time):
            continue
        if i == 0 and not t < day.open_time:  # type: ignore[operator]
            continue
        return NextOpening(day=check, open_time=day.open_time)  # type: ignore[arg-type]
    return None


def _status(kind: StatusKind, day: DayOfWeek, closes_at: Optional[str] = None,
            next_opening: Optional[NextOpening] = None) -> CurrentStatus:
    return CurrentStatus(
        is_open=kind != StatusKind.closed,
        message=render_status_message(kind, day, closes_at, next_opening),
        day=day,
        kind=kind,
        closes_at=closes_at,
        next_opening=next_opening,
    )


def compute_status(now: datetime, schedule: WeeklySchedule, tz: Union[ZoneInfo, str, None] = None) -> CurrentStatus:
    """Open/closed determination for ``now`` against a weekly snapshot.

    Order matters: today's window, then last night's overnight span, then the
    forward search for the next opening. Missing or malformed days count as
    closed; this function never raises on schedule data.
    """
    local = local_now(now, tz)
    today = DayOfWeek.from_datetime(local)
    t = local.strftime("%H:%M")

    today_schedule = schedule.get(today)
    kind = _open_today(today_schedule, t)
    if kind is not None:
        return _status(kind, today, closes_at=today_schedule.close_time)  # type: ignore[union-attr]

    yesterday = previous(today)
    prev_schedule = schedule.get(yesterday)
    if _open_from_previous_day(prev_schedule, t):
        return _status(StatusKind.open_from_previous_day, yesterday, closes_at=prev_schedule.close_time)  # type: ignore[union-attr]

    return _status(StatusKind.closed, today, next_opening=find_next_opening(schedule, today, t))


def is_current_day(day: DayOfWeek, now: datetime, tz: Union[ZoneInfo, str, None] = None) -> bool:
    return DayOfWeek.from_datetime(local_now(now, tz)) == day
