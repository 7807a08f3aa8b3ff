"""Pydantic schemas for the statistics endpoints."""
from pydantic import BaseModel


class CategoryTaskCount(BaseModel):
    category_id: int
    name: str
    color: str
    task_count: int


class DailyStatsOut(BaseModel):
    total: int
    completed: int
    pending: int
    by_category: list[CategoryTaskCount]


class CategoryShare(BaseModel):
    category_id: int
    name: str
    color: str
    count: int


class WeeklyStatsOut(BaseModel):
    days: list[int]
    labels: list[str]
    categories: list[CategoryShare]


class FocusStatsOut(BaseModel):
    days: list[str]
    minutes: list[int]
