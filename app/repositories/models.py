from __future__ import annotations
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Integer, DateTime, Enum as SAEnum, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.domain.hours.days import DayOfWeek
from .db import Base


class UserRole(str, Enum):
    super_admin = "super_admin"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(180), unique=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(90), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(90), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    role: Mapped[UserRole] = mapped_column(SAEnum(UserRole), default=UserRole.admin, index=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class OpeningHours(Base):
    """One row per day of week. Times are "HH:mm" or "" when the day is closed."""

    __tablename__ = "opening_hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    day_of_week: Mapped[DayOfWeek] = mapped_column(SAEnum(DayOfWeek))
    open_time: Mapped[str] = mapped_column(String(5), default="")
    close_time: Mapped[str] = mapped_column(String(5), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_open: Mapped[bool] = mapped_column(Boolean, default=True)
    is_closed_next_day: Mapped[bool] = mapped_column(Boolean, default=False)
    special_note: Mapped[str | None] = mapped_column(String(500), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("uix_opening_hours_day", "day_of_week", unique=True),
    )
