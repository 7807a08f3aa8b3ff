"""Pydantic schemas for Pomodoro sessions."""
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from timemaster.schemas._validators import blank_to_none, optional_ref

SessionType = Literal["work", "short_break", "long_break"]


class PomodoroStart(BaseModel):
    task_id: Optional[int] = None
    duration_minutes: int = Field(default=25, gt=0)
    session_type: SessionType = "work"

    @field_validator("task_id", mode="before")
    @classmethod
    def unset_empty_task(cls, value):
        return optional_ref(value)


class PomodoroCreate(PomodoroStart):
    """A session recorded after the fact, possibly already completed."""

    completed: bool = False
    session_date: Optional[str] = None

    @field_validator("session_date", mode="before")
    @classmethod
    def unset_blank_date(cls, value):
        return blank_to_none(value)


class PomodoroOut(BaseModel):
    id: int
    task_id: Optional[int] = None
    duration_minutes: Optional[int] = None
    session_type: Optional[str] = None
    completed: Optional[bool] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    session_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PomodoroWithTaskOut(PomodoroOut):
    task_title: Optional[str] = None


class TodayTotals(BaseModel):
    completed: int
    total_minutes: int


class StreakOut(BaseModel):
    length: int


class PomodoroStatsOut(BaseModel):
    today: TodayTotals
    streak: StreakOut
