"""User ORM model."""
from sqlalchemy import Column, Integer, String
from timemaster.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)  # always lowercase
    password_hash = Column(String(255), nullable=False)
    created_at = Column(String(32), nullable=False)
