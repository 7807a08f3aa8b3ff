"""Statistics API routes."""
import logging
from fastapi import APIRouter, Depends

from timemaster import clock
from timemaster.dependencies import get_auth_context, get_store
from timemaster.schemas.stats import DailyStatsOut, FocusStatsOut, WeeklyStatsOut
from timemaster.services import stats_service
from timemaster.services.auth_service import AuthContext
from timemaster.store import CATEGORIES, POMODORO_SESSIONS, TASKS, Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/daily", response_model=DailyStatsOut)
def daily(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Totals for tasks due today, split by category."""
    return stats_service.daily_stats(
        store.list_all(ctx.user_id, TASKS), store.list_all(ctx.user_id, CATEGORIES), clock.today()
    )


@router.get("/weekly", response_model=WeeklyStatsOut)
def weekly(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    return stats_service.weekly_stats(
        store.list_all(ctx.user_id, TASKS), store.list_all(ctx.user_id, CATEGORIES), clock.today()
    )


@router.get("/focus", response_model=FocusStatsOut)
def focus(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Completed Pomodoro minutes per day over the trailing week."""
    return stats_service.focus_stats(store.list_all(ctx.user_id, POMODORO_SESSIONS), clock.today())
