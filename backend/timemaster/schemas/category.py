"""Pydantic schemas for Categories."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from timemaster.schemas._validators import not_null


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = "#666"
    icon: str = "fas fa-tag"


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("name")
    @classmethod
    def keep_name(cls, value):
        return not_null(value)


class CategoryOut(BaseModel):
    id: int
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
