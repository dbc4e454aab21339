from __future__ import annotations
from datetime import datetime
from enum import Enum


class DayOfWeek(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_datetime(cls, dt: datetime) -> DayOfWeek:
        """Day of week of a datetime already converted to the business timezone."""
        return WEEK[dt.weekday()]


# 0=Mon .. 6=Sun, same indexing as datetime.weekday()
WEEK: tuple[DayOfWeek, ...] = tuple(DayOfWeek)
_INDEX: dict[DayOfWeek, int] = {d: i for i, d in enumerate(WEEK)}

_PREVIOUS: dict[DayOfWeek, DayOfWeek] = {d: WEEK[(i - 1) % 7] for i, d in enumerate(WEEK)}


def previous(day: DayOfWeek) -> DayOfWeek:
    return _PREVIOUS[day]


def next_day(day: DayOfWeek, offset: int = 1) -> DayOfWeek:
    """Cyclic successor: sunday + 1 -> monday. Negative offsets walk backwards."""
    return WEEK[(_INDEX[day] + offset) % 7]
