"""Pydantic schemas for settings and data export/import.

Imported records reuse the response field types, so a dump produced by
``/export`` always validates and a mistyped field is rejected before any
data is replaced. Unknown keys are ignored; ``id`` and timestamps are
optional and filled in on import.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict

from timemaster.schemas.category import CategoryOut
from timemaster.schemas.pomodoro import PomodoroOut, SessionType
from timemaster.schemas.task import TaskOut, TaskStatus
from timemaster.schemas.time_block import TimeBlockOut

SettingValue = Optional[Union[str, bool, int, float]]


class CategoryImport(CategoryOut):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None


class TaskImport(TaskOut):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    status: Optional[TaskStatus] = None


class TimeBlockImport(TimeBlockOut):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None


class PomodoroImport(PomodoroOut):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    session_type: Optional[SessionType] = None


class UserDataImport(BaseModel):
    """Any section left out is kept as is; settings are merged, collections replaced."""

    categories: Optional[list[CategoryImport]] = None
    tasks: Optional[list[TaskImport]] = None
    time_blocks: Optional[list[TimeBlockImport]] = None
    pomodoro_sessions: Optional[list[PomodoroImport]] = None
    settings: Optional[dict[str, SettingValue]] = None


class UserDataExport(BaseModel):
    categories: list[dict[str, Any]]
    tasks: list[dict[str, Any]]
    time_blocks: list[dict[str, Any]]
    pomodoro_sessions: list[dict[str, Any]]
    settings: dict[str, str]
