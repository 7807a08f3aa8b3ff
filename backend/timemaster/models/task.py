"""Task ORM model.

``category_id`` is deliberately not a foreign key: a task may keep pointing at
a deleted category.
"""
from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from timemaster.database import Base


class Task(Base):
    __tablename__ = "tasks"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, nullable=True)
    priority = Column(Integer, nullable=True)
    due_date = Column(String(10), nullable=True)  # YYYY-MM-DD
    due_time = Column(String(8), nullable=True)   # HH:MM
    status = Column(String(20), nullable=True)
    reminder_minutes_before = Column(Integer, nullable=True)
    voice_reminder = Column(Boolean, nullable=True)
    created_at = Column(String(32), nullable=True)
    updated_at = Column(String(32), nullable=True)
