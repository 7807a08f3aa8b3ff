"""Pomodoro session API routes."""
import logging
from fastapi import APIRouter, Depends, status

from timemaster import clock
from timemaster.dependencies import get_auth_context, get_store
from timemaster.errors import NotFound
from timemaster.schemas.pomodoro import (
    PomodoroCreate,
    PomodoroOut,
    PomodoroStart,
    PomodoroStatsOut,
    PomodoroWithTaskOut,
)
from timemaster.services import stats_service
from timemaster.services.auth_service import AuthContext
from timemaster.store import POMODORO_SESSIONS, TASKS, Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[PomodoroOut])
def list_sessions(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """All sessions, most recently started first."""
    sessions = store.list_all(ctx.user_id, POMODORO_SESSIONS)
    return sorted(sessions, key=lambda s: s.get("started_at") or "", reverse=True)


@router.post("/start", response_model=PomodoroOut, status_code=status.HTTP_201_CREATED)
def start_session(
    payload: PomodoroStart, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)
):
    """Open a running session; it counts toward stats once completed."""
    started = clock.timestamp()
    return store.insert(ctx.user_id, POMODORO_SESSIONS, {
        **payload.model_dump(),
        "completed": False,
        "started_at": started,
        "completed_at": None,
        "session_date": started[:10],
    })


@router.put("/{session_id}/complete", response_model=PomodoroOut)
def complete_session(session_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    session = store.update(ctx.user_id, POMODORO_SESSIONS, session_id, {
        "completed": True,
        "completed_at": clock.timestamp(),
    })
    if not session:
        raise NotFound("Session not found")
    return session


@router.delete("/{session_id}")
def delete_session(session_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Cancel or delete a session."""
    store.remove(ctx.user_id, POMODORO_SESSIONS, session_id)
    return {"success": True}


@router.get("/today", response_model=list[PomodoroWithTaskOut])
def todays_sessions(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    sessions = stats_service.started_on(store.list_all(ctx.user_id, POMODORO_SESSIONS), clock.today())
    tasks = store.list_all(ctx.user_id, TASKS)
    return [stats_service.join_task_title(s, tasks) for s in sessions]


@router.get("/stats", response_model=PomodoroStatsOut)
def session_stats(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Today's completed count and minutes, plus the current daily streak."""
    return stats_service.pomodoro_summary(store.list_all(ctx.user_id, POMODORO_SESSIONS), clock.today())


@router.post("", response_model=PomodoroOut, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: PomodoroCreate, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)
):
    """Record a session directly, e.g. one the client timed on its own."""
    stamp = clock.timestamp()
    return store.insert(ctx.user_id, POMODORO_SESSIONS, {
        **payload.model_dump(),
        "started_at": stamp,
        "completed_at": stamp if payload.completed else None,
        "session_date": payload.session_date or stamp[:10],
    })
