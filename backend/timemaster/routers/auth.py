"""Authentication routes: register, login, current user."""
import logging
from fastapi import APIRouter, Depends, status

from timemaster.dependencies import get_auth_context, get_store
from timemaster.errors import NotFound
from timemaster.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserOut
from timemaster.services import auth_service
from timemaster.services.auth_service import AuthContext
from timemaster.store import Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, store: Store = Depends(get_store)):
    """Create an account; the response carries a 30-day token."""
    return auth_service.register(store, payload.name, payload.email, payload.password)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, store: Store = Depends(get_store)):
    return auth_service.login(store, payload.email, payload.password)


@router.get("/me", response_model=UserOut)
def me(ctx: AuthContext = Depends(get_auth_context), store: Store = Depends(get_store)):
    user = store.get_user_by_id(ctx.user_id)
    if user is None:
        raise NotFound("User not found")
    return user.public()
