"""Settings and data export/import routes."""
import logging
from fastapi import APIRouter, Body, Depends

from timemaster.dependencies import get_auth_context, get_store
from timemaster.schemas.settings import SettingValue, UserDataExport, UserDataImport
from timemaster.services.auth_service import AuthContext
from timemaster.store import Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=dict[str, str])
def get_settings(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    return store.get_settings(ctx.user_id)


@router.put("", response_model=dict[str, str])
def update_settings(
    payload: dict[str, SettingValue] = Body(...),
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    """Merge the given keys into the user's settings; values are stored as strings."""
    return store.update_settings(ctx.user_id, payload)


@router.post("/export", response_model=UserDataExport)
def export_data(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Full dump of the caller's collections and settings."""
    logger.info("Exporting data for user %s", ctx.user_id)
    return store.export_user_data(ctx.user_id)


@router.post("/import")
def import_data(
    payload: UserDataImport, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)
):
    """Replace the collections present in the payload; merge settings."""
    sections = {name: value for name, value in payload.model_dump().items() if value is not None}
    store.import_user_data(ctx.user_id, sections)
    return {"success": True}
