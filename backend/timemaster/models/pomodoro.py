"""PomodoroSession ORM model."""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from timemaster.database import Base


class PomodoroSession(Base):
    __tablename__ = "pomodoro_sessions"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    id = Column(Integer, primary_key=True, autoincrement=False)
    task_id = Column(Integer, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    session_type = Column(String(20), nullable=True)
    completed = Column(Boolean, nullable=True)
    started_at = Column(String(32), nullable=True)
    completed_at = Column(String(32), nullable=True)
    session_date = Column(String(10), nullable=True)
    created_at = Column(String(32), nullable=True)
    updated_at = Column(String(32), nullable=True)
