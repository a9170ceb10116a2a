"""GraphQL input types, one per mutation. Validation happens in the service layer, not here."""

import enum
from typing import Any

import strawberry

from app.graphql.types import UserRole


def supplied_fields(value: object | None) -> dict[str, Any]:
    """
    Turn an input object into a plain dict of the fields the client actually sent.

    Fields left as UNSET are dropped, so partial updates only touch supplied fields;
    explicit nulls are kept and rejected by validation where the field is required.
    """
    if value is None:
        return {}
    fields: dict[str, Any] = {}
    for name, field_value in vars(value).items():
        if field_value is strawberry.UNSET:
            continue
        fields[name] = field_value.value if isinstance(field_value, enum.Enum) else field_value
    return fields


@strawberry.input
class RegisterInput:
    username: str
    password: str
    email: str | None = strawberry.UNSET
    first_name: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET


@strawberry.input
class LoginInput:
    username: str
    password: str


@strawberry.input
class UpdateUserInput:
    username: str | None = strawberry.UNSET
    email: str | None = strawberry.UNSET
    first_name: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET
    is_active: bool | None = strawberry.UNSET
    role: UserRole | None = strawberry.UNSET


@strawberry.input
class ChangePasswordInput:
    current_password: str
    new_password: str


@strawberry.input
class BookInput:
    title: str
    author: str
    published_year: int
    genre: str


@strawberry.input
class BookUpdateInput:
    title: str | None = strawberry.UNSET
    author: str | None = strawberry.UNSET
    published_year: int | None = strawberry.UNSET
    genre: str | None = strawberry.UNSET


@strawberry.input
class BookFilterInput:
    title: str | None = strawberry.UNSET
    author: str | None = strawberry.UNSET
    genre: str | None = strawberry.UNSET
    published_year: int | None = strawberry.UNSET
