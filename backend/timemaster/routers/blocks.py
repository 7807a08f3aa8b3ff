"""Time block API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from timemaster.dependencies import get_auth_context, get_store
from timemaster.errors import NotFound
from timemaster.schemas.time_block import TimeBlockCreate, TimeBlockOut, TimeBlockUpdate
from timemaster.services import stats_service
from timemaster.services.auth_service import AuthContext
from timemaster.store import TIME_BLOCKS, Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[TimeBlockOut])
def list_blocks(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    """List blocks; with both ``start`` and ``end``, only those overlapping the range."""
    blocks = store.list_all(ctx.user_id, TIME_BLOCKS)
    if start and end:
        blocks = stats_service.blocks_overlapping(blocks, start, end)
    return blocks


@router.get("/{block_id}", response_model=TimeBlockOut)
def get_block(block_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    block = store.get_by_id(ctx.user_id, TIME_BLOCKS, block_id)
    if not block:
        raise NotFound("Time block not found")
    return block


@router.post("", response_model=TimeBlockOut, status_code=status.HTTP_201_CREATED)
def create_block(
    payload: TimeBlockCreate, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)
):
    return store.insert(ctx.user_id, TIME_BLOCKS, payload.model_dump())


@router.put("/{block_id}", response_model=TimeBlockOut)
def update_block(
    block_id: int,
    payload: TimeBlockUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    block = store.update(ctx.user_id, TIME_BLOCKS, block_id, payload.model_dump(exclude_unset=True))
    if not block:
        raise NotFound("Time block not found")
    return block


@router.delete("/{block_id}")
def delete_block(block_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    store.remove(ctx.user_id, TIME_BLOCKS, block_id)
    return {"success": True}
