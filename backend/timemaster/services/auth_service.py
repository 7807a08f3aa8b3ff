"""Registration, login and bearer-token handling.

Passwords are hashed with passlib; tokens are HS256 JWTs (PyJWT) whose ``sub``
claim is the user id and which expire ``TOKEN_EXPIRE_DAYS`` after issuance.
Login failures never reveal whether the email exists.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext

from timemaster.config import settings
from timemaster.errors import Conflict, Unauthorized, ValidationError
from timemaster.store import IdentityStore, UserAccount

logger = logging.getLogger(__name__)

# bcrypt hashes (e.g. from older exports) still verify.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

BAD_LOGIN = "Invalid email or password"


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller. Every store call of a request is scoped to ``user_id``."""

    user_id: int


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognized hash format.
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    issued = datetime.now(timezone.utc)
    expire = issued + (expires_delta or timedelta(days=settings.TOKEN_EXPIRE_DAYS))
    payload = {"sub": str(user_id), "iat": issued, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> AuthContext:
    """Resolve a token to its user; any malformed, expired or forged token is Unauthorized."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return AuthContext(user_id=int(payload["sub"]))
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        raise Unauthorized("Invalid or expired token") from None


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _session_payload(user: UserAccount) -> dict[str, Any]:
    return {"token": create_access_token(user.id), "user": user.public()}


def register(store: IdentityStore, name: Optional[str], email: Optional[str], password: Optional[str]) -> dict[str, Any]:
    """Create an account and return ``{token, user}``."""
    if not (_present(name) and _present(email) and password):
        raise ValidationError("Name, email and password are required")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password too short (min {settings.MIN_PASSWORD_LENGTH} characters)")
    if store.find_user_by_email(email) is not None:
        raise Conflict("This email is already registered")

    user = store.create_user(name.strip(), email, hash_password(password))
    logger.info("Registered user %s", user.id)
    return _session_payload(user)


def login(store: IdentityStore, email: Optional[str], password: Optional[str]) -> dict[str, Any]:
    if not (_present(email) and password):
        raise ValidationError("Email and password are required")
    user = store.find_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise Unauthorized(BAD_LOGIN)
    logger.info("User %s logged in", user.id)
    return _session_payload(user)
