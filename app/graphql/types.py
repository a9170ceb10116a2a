"""GraphQL object types. Built explicitly from ORM rows so password hashes can never leak."""

import enum
from datetime import datetime

import strawberry

from app.models import Book, User


@strawberry.enum
class UserRole(enum.Enum):
    USER = "user"
    ADMIN = "admin"


@strawberry.type(name="User")
class UserType:
    """Public projection of a user account."""

    id: strawberry.ID
    username: str
    email: str | None
    first_name: str | None
    last_name: str | None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=UserRole(user.role),
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@strawberry.type(name="Book")
class BookType:
    id: strawberry.ID
    title: str
    author: str
    genre: str
    published_year: int
    created_by: UserType
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, book: Book) -> "BookType":
        return cls(
            id=strawberry.ID(str(book.id)),
            title=book.title,
            author=book.author,
            genre=book.genre,
            published_year=book.published_year,
            created_by=UserType.from_model(book.creator),
            created_at=book.created_at,
            updated_at=book.updated_at,
        )


@strawberry.type
class AuthPayload:
    token: str
    user: UserType
