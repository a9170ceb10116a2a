"""Input records for profile updates and the admin user listing."""

from typing import Literal

from pydantic import BaseModel, EmailStr, field_validator

from app.schemas.auth import NAME_MAX_LEN, normalize_email, validate_username
from app.schemas.common import optional_text

RoleName = Literal["user", "admin"]


class UpdateUserInput(BaseModel):
    """
    Partial profile update. role and is_active are admin-only; the service
    rejects them for other callers before this record is applied.
    """

    model_config = {"extra": "ignore"}

    username: str | None = None
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool | None = None
    role: RoleName | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str:
        return validate_username(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: object) -> object:
        return normalize_email(v)

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str | None) -> str | None:
        return optional_text(v, "First name", NAME_MAX_LEN)

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v: str | None) -> str | None:
        return optional_text(v, "Last name", NAME_MAX_LEN)

    @field_validator("is_active")
    @classmethod
    def check_is_active(cls, v: bool | None) -> bool:
        if v is None:
            raise ValueError("isActive cannot be null")
        return v

    @field_validator("role")
    @classmethod
    def check_role(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("role cannot be null")
        return v

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class UserFilter(BaseModel):
    """Admin listing filters; unset fields are ignored."""

    model_config = {"extra": "ignore"}

    role: RoleName | None = None
    is_active: bool | None = None
