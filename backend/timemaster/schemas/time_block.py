"""Pydantic schemas for TimeBlocks."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from timemaster.schemas._validators import not_null, optional_ref


class TimeBlockCreate(BaseModel):
    title: str = Field(min_length=1)
    start_datetime: str = Field(min_length=1)
    end_datetime: str = Field(min_length=1)
    category_id: Optional[int] = None
    color: str = "#4DA8DA"

    @field_validator("category_id", mode="before")
    @classmethod
    def unset_empty_category(cls, value):
        return optional_ref(value)


class TimeBlockUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    start_datetime: Optional[str] = Field(default=None, min_length=1)
    end_datetime: Optional[str] = Field(default=None, min_length=1)
    category_id: Optional[int] = None
    color: Optional[str] = None

    @field_validator("title", "start_datetime", "end_datetime")
    @classmethod
    def keep_required(cls, value):
        return not_null(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def unset_empty_category(cls, value):
        return optional_ref(value)


class TimeBlockOut(BaseModel):
    id: int
    title: Optional[str] = None
    start_datetime: Optional[str] = None
    end_datetime: Optional[str] = None
    category_id: Optional[int] = None
    color: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
