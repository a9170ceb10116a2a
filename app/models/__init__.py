"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.book import Book
from app.models.user import ROLE_ADMIN, ROLE_USER, USER_ROLES, User

__all__ = ["Base", "Book", "ROLE_ADMIN", "ROLE_USER", "USER_ROLES", "User"]
