"""Pydantic schemas for authentication."""
from typing import Optional
from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # Presence is checked by auth_service so the error message stays uniform.
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    user: UserOut
