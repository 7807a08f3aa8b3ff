"""Category ORM model.

Ids are local to the owner: the primary key is (user_id, id).
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from timemaster.database import Base


class Category(Base):
    __tablename__ = "categories"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=True)
    color = Column(String(20), nullable=True)
    icon = Column(String(100), nullable=True)
    created_at = Column(String(32), nullable=True)
    updated_at = Column(String(32), nullable=True)
