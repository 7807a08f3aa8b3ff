"""Pydantic schemas for Tasks."""
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from timemaster.schemas._validators import blank_to_none, not_null, optional_ref

TaskStatus = Literal["pending", "completed"]


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    category_id: Optional[int] = None
    priority: int = 2
    due_date: Optional[str] = None  # YYYY-MM-DD
    due_time: Optional[str] = None  # HH:MM
    reminder_minutes_before: int = Field(default=10, ge=0)
    voice_reminder: bool = True

    @field_validator("due_date", "due_time", mode="before")
    @classmethod
    def unset_blank_dates(cls, value):
        return blank_to_none(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def unset_empty_category(cls, value):
        return optional_ref(value)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Optional[int] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    status: Optional[TaskStatus] = None
    reminder_minutes_before: Optional[int] = Field(default=None, ge=0)
    voice_reminder: Optional[bool] = None

    @field_validator("title", "status", "priority", "voice_reminder")
    @classmethod
    def keep_required(cls, value):
        return not_null(value)

    @field_validator("due_date", "due_time", mode="before")
    @classmethod
    def unset_blank_dates(cls, value):
        return blank_to_none(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def unset_empty_category(cls, value):
        return optional_ref(value)


class TaskOut(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: Optional[int] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    status: Optional[str] = None
    reminder_minutes_before: Optional[int] = None
    voice_reminder: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class TaskWithCategoryOut(TaskOut):
    category_name: Optional[str] = None
    category_color: Optional[str] = None
