"""TimeBlock ORM model."""
from sqlalchemy import Column, Integer, String, ForeignKey
from timemaster.database import Base


class TimeBlock(Base):
    __tablename__ = "time_blocks"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=True)
    start_datetime = Column(String(32), nullable=True)
    end_datetime = Column(String(32), nullable=True)
    category_id = Column(Integer, nullable=True)
    color = Column(String(20), nullable=True)
    created_at = Column(String(32), nullable=True)
    updated_at = Column(String(32), nullable=True)
