"""Task API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from timemaster import clock
from timemaster.dependencies import get_auth_context, get_store
from timemaster.errors import NotFound
from timemaster.schemas.task import TaskCreate, TaskOut, TaskStatus, TaskUpdate, TaskWithCategoryOut
from timemaster.services import stats_service
from timemaster.services.auth_service import AuthContext
from timemaster.store import CATEGORIES, TASKS, Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[TaskWithCategoryOut])
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    category: Optional[int] = Query(None),
    date: Optional[str] = Query(None),
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    """List tasks with optional filters, highest priority first."""
    tasks = stats_service.filter_tasks(
        store.list_all(ctx.user_id, TASKS), status=status_filter, category_id=category, due_date=date
    )
    categories = store.list_all(ctx.user_id, CATEGORIES)
    joined = [stats_service.join_category(t, categories) for t in tasks]
    return stats_service.sort_by_priority(joined)


@router.get("/today", response_model=list[TaskWithCategoryOut])
def todays_tasks(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Tasks due today, by due time then priority."""
    tasks = stats_service.tasks_due_on(store.list_all(ctx.user_id, TASKS), clock.today())
    categories = store.list_all(ctx.user_id, CATEGORIES)
    return stats_service.sort_for_today(stats_service.join_category(t, categories) for t in tasks)


@router.get("/upcoming", response_model=list[TaskOut])
def upcoming_tasks(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Tasks whose voice reminder is due within the next hour (polled by the client alarm)."""
    return stats_service.upcoming_reminders(store.list_all(ctx.user_id, TASKS), clock.now())


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    task = store.get_by_id(ctx.user_id, TASKS, task_id)
    if not task:
        raise NotFound("Task not found")
    return task


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Create a task; new tasks always start pending."""
    return store.insert(ctx.user_id, TASKS, {**payload.model_dump(), "status": "pending"})


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    task = store.update(ctx.user_id, TASKS, task_id, payload.model_dump(exclude_unset=True))
    if not task:
        raise NotFound("Task not found")
    return task


@router.delete("/{task_id}")
def delete_task(task_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    store.remove(ctx.user_id, TASKS, task_id)
    return {"success": True}
