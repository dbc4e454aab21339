from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from app.core.validators import is_hhmm
from app.domain.hours.days import DayOfWeek, WEEK


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DaySchedule(_CamelModel):
    """Configuration for one day of the week.

    Times are kept as the raw strings the editor saved. Nothing here rejects
    empty or malformed values: the status engine treats such a day as closed.
    """

    day_of_week: DayOfWeek
    open_time: Optional[str] = ""
    close_time: Optional[str] = ""
    is_active: bool = True
    is_open: bool = True
    is_closed_next_day: bool = False
    special_note: Optional[str] = None

    @property
    def opens_for_business(self) -> bool:
        return self.is_active and self.is_open

    @property
    def has_hours(self) -> bool:
        """Active, open and with both times usable for comparison."""
        return self.opens_for_business and is_hhmm(self.open_time) and is_hhmm(self.close_time)

    @property
    def is_overnight(self) -> bool:
        # only meaningful when has_hours
        return self.close_time < self.open_time  # type: ignore[operator]


class WeeklySchedule(Mapping[DayOfWeek, DaySchedule]):
    """Immutable snapshot of the week, at most one DaySchedule per day (may be sparse)."""

    def __init__(self, days: Iterable[DaySchedule] = ()):
        by_day: dict[DayOfWeek, DaySchedule] = {}
        for d in days:
            if d.day_of_week in by_day:
                raise ValueError(f"duplicate schedule for {d.day_of_week.value}")
            by_day[d.day_of_week] = d
        self._days = MappingProxyType(by_day)

    def __getitem__(self, day: DayOfWeek) -> DaySchedule:
        return self._days[day]

    def __iter__(self) -> Iterator[DayOfWeek]:
        return (d for d in WEEK if d in self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __repr__(self) -> str:
        return f"WeeklySchedule({[d.value for d in self]})"


class StatusKind(str, Enum):
    open_today = "open_today"
    open_overnight = "open_overnight"
    open_from_previous_day = "open_from_previous_day"
    closed = "closed"


class NextOpening(_CamelModel):
    day: DayOfWeek
    open_time: str


class CurrentStatus(_CamelModel):
    is_open: bool
    message: str
    day: DayOfWeek
    kind: StatusKind
    closes_at: Optional[str] = None
    next_opening: Optional[NextOpening] = None
