"""Registration, login, bearer-token resolution and the authorization checks shared by resolvers."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import jwt
from sqlalchemy.orm import Session

from app.core.database import commit_or_raise
from app.core.errors import AuthenticationError, AuthorizationError, ValidationError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models.user import ROLE_USER, User
from app.schemas.auth import LoginInput, RegisterInput
from app.services.validation import validate_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Signed token plus the user it was issued for. Never persisted."""

    token: str
    user: User


def issue_token(user: User) -> str:
    return create_access_token(sub=user.id, role=user.role, email=user.email)


def get_user_from_token(db: Session, token: str) -> User | None:
    """
    Resolve a bearer token to an active user.

    Fails closed: malformed, expired or mis-signed tokens, and tokens for
    unknown or inactive users all yield None (anonymous), never a partial identity.
    """
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.debug("Rejected bearer token: invalid sub claim")
        return None
    user = db.get(User, user_id)
    if user is None or not user.is_active:
        logger.debug("Rejected bearer token: user %s not found or inactive", user_id)
        return None
    return user


def require_user(actor: User | None) -> User:
    """Raise AuthenticationError for anonymous callers."""
    if actor is None:
        raise AuthenticationError()
    return actor


def require_admin(actor: User | None, message: str = "Admin access required") -> User:
    """Raise AuthenticationError for anonymous callers and AuthorizationError for non-admins."""
    user = require_user(actor)
    if not user.is_admin:
        raise AuthorizationError(message)
    return user


def ensure_owner_or_admin(actor: User, owner_id: int, message: str) -> None:
    """Ownership check: the acting user must own the record or be an admin."""
    if actor.is_admin or actor.id == owner_id:
        return
    raise AuthorizationError(message)


def register(db: Session, data: Mapping[str, Any]) -> AuthResult:
    """Create a 'user'-role account and return a token for it. Duplicate username or email is a ValidationError."""
    body = validate_input(RegisterInput, data)

    if db.query(User).filter(User.username == body.username).first() is not None:
        raise ValidationError("Username already exists")
    if body.email and db.query(User).filter(User.email == body.email).first() is not None:
        raise ValidationError("Email already exists")

    user = User(
        username=body.username,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        password_hash=hash_password(body.password),
        role=ROLE_USER,
        is_active=True,
    )
    db.add(user)
    commit_or_raise(db, "Registration failed", duplicate_message="Username already exists")
    db.refresh(user)

    logger.info("User registered: id=%s username=%s", user.id, user.username)
    return AuthResult(token=issue_token(user), user=user)


def login(db: Session, data: Mapping[str, Any]) -> AuthResult:
    """Verify username and password; inactive accounts cannot log in."""
    body = validate_input(LoginInput, data)

    user = db.query(User).filter(User.username == body.username).first()
    if user is None or not verify_password(body.password, user.password_hash):
        raise AuthenticationError("Invalid username or password")
    if not user.is_active:
        raise AuthenticationError("Account is inactive")

    logger.info("User logged in: id=%s", user.id)
    return AuthResult(token=issue_token(user), user=user)


def logout(actor: User | None) -> str:
    """Tokens are stateless; logout only confirms the caller was authenticated."""
    user = require_user(actor)
    logger.info("User logged out: id=%s", user.id)
    return "Logged out successfully"
