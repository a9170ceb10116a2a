"""Pydantic input records and response schemas."""

from app.schemas.auth import ChangePasswordInput, LoginInput, RegisterInput
from app.schemas.book import BookCreate, BookFilter, BookUpdate
from app.schemas.common import Pagination
from app.schemas.health import HealthResponse, RootResponse
from app.schemas.user import UpdateUserInput, UserFilter

__all__ = [
    "BookCreate",
    "BookFilter",
    "BookUpdate",
    "ChangePasswordInput",
    "HealthResponse",
    "LoginInput",
    "Pagination",
    "RegisterInput",
    "RootResponse",
    "UpdateUserInput",
    "UserFilter",
]
