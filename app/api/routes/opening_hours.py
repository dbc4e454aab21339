from __future__ import annotations
from datetime import datetime, timezone
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
import structlog
from app.api.deps import get_schedule_repository, require_staff
from app.core.config import settings
from app.domain.hours.days import WEEK, DayOfWeek
from app.domain.hours.defaults import default_day, default_weekly_schedule
from app.domain.hours.formatting import describe_day
from app.core.validators import is_hhmm
from app.domain.hours.schedule import DaySchedule, NextOpening, StatusKind
from app.domain.hours.status import compute_status, is_current_day
from app.repositories.models import OpeningHours
from app.repositories.opening_hours import (
    DayOfWeekImmutable,
    ScheduleNotFound,
    ScheduleRepository,
    to_day_schedule,
)

router = APIRouter()
log = structlog.get_logger()

Repo = Annotated[ScheduleRepository, Depends(get_schedule_repository)]


class _CamelIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DayScheduleIn(_CamelIn):
    """Full payload for one day; the editor always sends every field."""

    day_of_week: Optional[DayOfWeek] = None
    open_time: str = ""
    close_time: str = ""
    is_active: bool = True
    is_open: bool = True
    is_closed_next_day: bool = False
    special_note: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "dayOfWeek": "friday",
                    "openTime": "18:00",
                    "closeTime": "02:00",
                    "isActive": True,
                    "isOpen": True,
                    "isClosedNextDay": True,
                    "specialNote": "Live music",
                }
            ]
        },
    )

    @model_validator(mode="after")
    def _times_required_when_open(self) -> DayScheduleIn:
        if self.is_open:
            if not (is_hhmm(self.open_time) and is_hhmm(self.close_time)):
                raise ValueError("openTime and closeTime (HH:mm) are required when isOpen is true")
        else:
            self.open_time = ""
            self.close_time = ""
        return self

    def to_domain(self, day: DayOfWeek) -> DaySchedule:
        return DaySchedule(
            day_of_week=day,
            open_time=self.open_time,
            close_time=self.close_time,
            is_active=self.is_active,
            is_open=self.is_open,
            is_closed_next_day=self.is_closed_next_day,
            special_note=self.special_note,
        )


class OpeningHoursOut(_CamelIn):
    id: Optional[int] = None
    day_of_week: DayOfWeek
    open_time: str
    close_time: str
    is_active: bool
    is_open: bool
    is_closed_next_day: bool
    special_note: Optional[str] = None
    updated_at: Optional[datetime] = None
    persisted: bool = True
    display_name: str
    is_today: bool
    time_range: str


class StatusOut(_CamelIn):
    is_open: bool
    message: str
    day: DayOfWeek
    kind: StatusKind
    closes_at: Optional[str] = None
    next_opening: Optional[NextOpening] = None
    timezone: str
    fallback: bool = False


def _out(day: DaySchedule, now: datetime, row: Optional[OpeningHours] = None) -> OpeningHoursOut:
    return OpeningHoursOut(
        id=row.id if row is not None else None,
        day_of_week=day.day_of_week,
        open_time=day.open_time or "",
        close_time=day.close_time or "",
        is_active=day.is_active,
        is_open=day.is_open,
        is_closed_next_day=day.is_closed_next_day,
        special_note=day.special_note,
        updated_at=row.updated_at if row is not None else None,
        persisted=row is not None,
        display_name=day.day_of_week.display_name,
        is_today=is_current_day(day.day_of_week, now, settings.business_tz),
        time_range=describe_day(day),
    )


def _row_out(row: OpeningHours) -> OpeningHoursOut:
    return _out(to_day_schedule(row), datetime.now(timezone.utc), row)


@router.get("/status", response_model=StatusOut, summary="Current open/closed status (public)")
def opening_status(repo: Repo, at: Optional[datetime] = Query(default=None, description="Instant to evaluate (ISO-8601); defaults to now")):
    now = at or datetime.now(timezone.utc)
    fallback = False
    try:
        schedule = repo.load_weekly()
    except SQLAlchemyError as e:
        log.warning("opening_hours_status_fallback", error=str(e))
        schedule = default_weekly_schedule(settings.DEFAULT_OPEN_TIME, settings.DEFAULT_CLOSE_TIME)
        fallback = True
    status = compute_status(now, schedule, settings.business_tz)
    return StatusOut(**status.model_dump(), timezone=settings.BUSINESS_TIMEZONE, fallback=fallback)


@router.get("", response_model=list[OpeningHoursOut], dependencies=[Depends(require_staff)])
def list_opening_hours(repo: Repo):
    """All seven days, monday first; days never saved come back as unsaved defaults."""
    now = datetime.now(timezone.utc)
    rows = {r.day_of_week: r for r in repo.list_days()}
    out = []
    for d in WEEK:
        row = rows.get(d)
        if row is not None:
            out.append(_out(to_day_schedule(row), now, row))
        else:
            out.append(_out(default_day(d, settings.DEFAULT_OPEN_TIME, settings.DEFAULT_CLOSE_TIME), now))
    return out


@router.get("/{day}", response_model=OpeningHoursOut, dependencies=[Depends(require_staff)])
def get_opening_hours(day: DayOfWeek, repo: Repo):
    row = repo.get_day(day)
    if row is None:
        raise HTTPException(status_code=404, detail="opening_hours_not_found")
    return _row_out(row)


@router.put("/{day}", response_model=OpeningHoursOut, dependencies=[Depends(require_staff)])
def put_opening_hours(day: DayOfWeek, payload: DayScheduleIn, repo: Repo):
    if payload.day_of_week is not None and payload.day_of_week != day:
        raise HTTPException(status_code=400, detail="day_of_week_mismatch")
    return _row_out(repo.upsert_day(payload.to_domain(day)))


@router.post("", response_model=OpeningHoursOut, dependencies=[Depends(require_staff)])
def create_opening_hours(payload: DayScheduleIn, repo: Repo):
    if payload.day_of_week is None:
        raise HTTPException(status_code=422, detail={"code": "validation_error", "message": "dayOfWeek is required"})
    return _row_out(repo.upsert_day(payload.to_domain(payload.day_of_week)))


@router.patch("/{row_id}", response_model=OpeningHoursOut, dependencies=[Depends(require_staff)])
def update_opening_hours(row_id: int, payload: DayScheduleIn, repo: Repo):
    existing = repo.get_by_id(row_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="opening_hours_not_found")
    day = payload.day_of_week or existing.day_of_week
    try:
        row = repo.update_by_id(row_id, payload.to_domain(day))
    except ScheduleNotFound:
        raise HTTPException(status_code=404, detail="opening_hours_not_found")
    except DayOfWeekImmutable:
        raise HTTPException(status_code=400, detail="day_of_week_immutable")
    return _row_out(row)
