"""FastAPI dependencies: the store instance and the authenticated caller."""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from timemaster.errors import Unauthorized
from timemaster.services.auth_service import AuthContext, decode_access_token
from timemaster.store import Store

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> Store:
    """The backend built at startup (or injected by ``create_app``)."""
    return request.app.state.store


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing token")
    return decode_access_token(credentials.credentials)
