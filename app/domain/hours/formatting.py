from __future__ import annotations
from typing import Optional
from app.domain.hours.days import DayOfWeek
from app.core.validators import is_hhmm
from app.domain.hours.schedule import DaySchedule, NextOpening, StatusKind


def format_time_12h(hhmm: str) -> str:
    """``14:00`` -> ``2:00 PM``; ``00:30`` -> ``12:30 AM``. Presentation only."""
    hh, mm = hhmm.split(":")
    hour = int(hh)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{mm} {suffix}"


def format_time_range(open_time: str, close_time: str, is_closed_next_day: bool = False) -> str:
    text = f"{format_time_12h(open_time)} - {format_time_12h(close_time)}"
    if is_closed_next_day or close_time < open_time:
        text += " (+1 day)"
    return text


def describe_day(day: DaySchedule) -> str:
    """Human label used by the editor listing."""
    if not day.is_open or not (is_hhmm(day.open_time) and is_hhmm(day.close_time)):
        return "Closed"
    return format_time_range(day.open_time, day.close_time, day.is_closed_next_day)  # type: ignore[arg-type]


def render_status_message(
    kind: StatusKind,
    day: DayOfWeek,
    closes_at: Optional[str] = None,
    next_opening: Optional[NextOpening] = None,
) -> str:
    """Status line built only from the facts carried by CurrentStatus."""
    if kind == StatusKind.open_overnight:
        return f"Open until {format_time_12h(closes_at)} (overnight)"  # type: ignore[arg-type]
    if kind == StatusKind.open_today:
        return f"Open until {format_time_12h(closes_at)}"  # type: ignore[arg-type]
    if kind == StatusKind.open_from_previous_day:
        return f"Open until {format_time_12h(closes_at)} (from {day.display_name})"  # type: ignore[arg-type]
    if next_opening is None:
        return "Currently closed - Opening hours not available"
    return (
        f"Currently closed - Next open: {next_opening.day.display_name} "
        f"at {format_time_12h(next_opening.open_time)}"
    )
