"""Category API routes."""
import logging
from fastapi import APIRouter, Depends, status

from timemaster.dependencies import get_auth_context, get_store
from timemaster.errors import NotFound
from timemaster.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from timemaster.services.auth_service import AuthContext
from timemaster.store import CATEGORIES, Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[CategoryOut])
def list_categories(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    return store.list_all(ctx.user_id, CATEGORIES)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    category = store.get_by_id(ctx.user_id, CATEGORIES, category_id)
    if not category:
        raise NotFound("Category not found")
    return category


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)
):
    return store.insert(ctx.user_id, CATEGORIES, payload.model_dump())


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    store: Store = Depends(get_store),
):
    """Partial update: only the fields sent are changed."""
    category = store.update(ctx.user_id, CATEGORIES, category_id, payload.model_dump(exclude_unset=True))
    if not category:
        raise NotFound("Category not found")
    return category


@router.delete("/{category_id}")
def delete_category(category_id: int, ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    """Delete a category. Tasks and blocks that reference it keep the dangling id."""
    store.remove(ctx.user_id, CATEGORIES, category_id)
    return {"success": True}
