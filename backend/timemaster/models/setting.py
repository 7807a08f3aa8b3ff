"""Per-user settings and id counters."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from timemaster.database import Base


class UserSetting(Base):
    __tablename__ = "user_settings"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)


class RecordCounter(Base):
    """Next id to hand out for one (owner, collection) pair. Ids are never reused."""

    __tablename__ = "record_counters"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    collection = Column(String(50), primary_key=True)
    next_id = Column(Integer, nullable=False, default=1)
