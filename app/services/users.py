"""User profile and administration operations."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.database import commit_or_raise
from app.core.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.auth import ChangePasswordInput
from app.schemas.common import DEFAULT_PAGE_SIZE, Pagination
from app.schemas.user import UpdateUserInput, UserFilter
from app.services.auth import ensure_owner_or_admin, require_admin, require_user
from app.services.query_utils import LIKE_ESCAPE, contains_pattern, parse_id
from app.services.validation import validate_input

logger = logging.getLogger(__name__)

ADMIN_ONLY_FIELDS = frozenset({"role", "is_active"})


def _load_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_me(actor: User | None) -> User:
    return require_user(actor)


def get_user(db: Session, actor: User | None, user_id: str | int) -> User:
    """Users can view their own profile; admins can view any profile."""
    user = require_user(actor)
    target_id = parse_id(user_id, "User not found")
    ensure_owner_or_admin(user, target_id, "You can only access your own profile")
    return _load_user(db, target_id)


def list_users(
    db: Session,
    actor: User | None,
    filters: Mapping[str, Any] | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[User]:
    """Admin only. Newest accounts first, optionally filtered by role and active flag."""
    require_admin(actor, "Only administrators can view all users")
    criteria = validate_input(UserFilter, filters or {})
    page = validate_input(Pagination, {"limit": limit, "offset": offset})

    query = db.query(User)
    if criteria.role is not None:
        query = query.filter(User.role == criteria.role)
    if criteria.is_active is not None:
        query = query.filter(User.is_active == criteria.is_active)
    return (
        query.order_by(User.created_at.desc(), User.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )


def search_users(
    db: Session,
    actor: User | None,
    text: str,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[User]:
    """Admin only. Case-insensitive substring match on username, email, first or last name."""
    require_admin(actor, "Only administrators can search users")
    page = validate_input(Pagination, {"limit": limit, "offset": offset})
    pattern = contains_pattern(text or "")
    return (
        db.query(User)
        .filter(
            or_(
                User.username.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
                User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )


def update_user(
    db: Session, actor: User | None, user_id: str | int, data: Mapping[str, Any]
) -> User:
    """
    Self or admin may update a profile. Only admins may change role or the active flag;
    username and email must stay unique.
    """
    user = require_user(actor)
    target_id = parse_id(user_id, "User not found")
    ensure_owner_or_admin(user, target_id, "You can only update your own profile")
    if not user.is_admin and ADMIN_ONLY_FIELDS.intersection(data):
        raise AuthorizationError("Only administrators can change role or account status")

    changes = validate_input(UpdateUserInput, data).changes()
    target = _load_user(db, target_id)

    if changes.get("username"):
        taken = (
            db.query(User)
            .filter(User.username == changes["username"], User.id != target_id)
            .first()
        )
        if taken is not None:
            raise ValidationError("Username is already taken")
    if changes.get("email"):
        taken = (
            db.query(User)
            .filter(User.email == changes["email"], User.id != target_id)
            .first()
        )
        if taken is not None:
            raise ValidationError("Email is already taken")

    for field, value in changes.items():
        setattr(target, field, value)
    commit_or_raise(db, "Failed to update user", duplicate_message="Username or email is already taken")
    db.refresh(target)
    logger.info(
        "User updated: id=%s fields=%s by user=%s", target.id, sorted(changes), user.id
    )
    return target


def change_password(db: Session, actor: User | None, data: Mapping[str, Any]) -> User:
    """Re-verify the current password before storing a new hash; a wrong password changes nothing."""
    user = require_user(actor)
    body = validate_input(ChangePasswordInput, data)

    target = _load_user(db, user.id)
    if not verify_password(body.current_password, target.password_hash):
        raise AuthenticationError("Current password is incorrect")

    target.password_hash = hash_password(body.new_password)
    commit_or_raise(db, "Password change failed")
    db.refresh(target)
    logger.info("Password changed: user=%s", target.id)
    return target


def delete_user(db: Session, actor: User | None, user_id: str | int) -> bool:
    """Admin only; admins cannot delete their own account. The user's books are deleted too."""
    admin = require_admin(actor, "Only administrators can delete users")
    target_id = parse_id(user_id, "User not found")
    if admin.id == target_id:
        raise AuthorizationError("You cannot delete your own account")

    target = _load_user(db, target_id)
    db.delete(target)
    commit_or_raise(db, "Failed to delete user")
    logger.info("User deleted: id=%s by admin=%s", target_id, admin.id)
    return True


def toggle_user_status(db: Session, actor: User | None, user_id: str | int) -> User:
    """Admin only; flips is_active. Admins cannot change their own status."""
    admin = require_admin(actor, "Only administrators can change user status")
    target_id = parse_id(user_id, "User not found")
    if admin.id == target_id:
        raise AuthorizationError("You cannot change your own account status")

    target = _load_user(db, target_id)
    target.is_active = not target.is_active
    commit_or_raise(db, "Failed to change user status")
    db.refresh(target)
    logger.info(
        "User status changed: id=%s is_active=%s by admin=%s", target.id, target.is_active, admin.id
    )
    return target
