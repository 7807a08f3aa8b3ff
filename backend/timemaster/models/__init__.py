"""ORM models for the relational storage backend."""
from timemaster.models.user import User
from timemaster.models.category import Category
from timemaster.models.task import Task
from timemaster.models.time_block import TimeBlock
from timemaster.models.pomodoro import PomodoroSession
from timemaster.models.setting import UserSetting, RecordCounter

__all__ = [
    "User",
    "Category",
    "Task",
    "TimeBlock",
    "PomodoroSession",
    "UserSetting",
    "RecordCounter",
]
