"""Input records for registration, login and password change."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import optional_text

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
NAME_MAX_LEN = 50


def validate_username(value: str | None) -> str:
    """Usernames are 3-30 letters or digits (surrounding whitespace is trimmed)."""
    if value is None or not value.strip():
        raise ValueError("Username is required")
    value = value.strip()
    if not value.isalnum() or not value.isascii():
        raise ValueError("Username can only contain letters and numbers")
    if len(value) < USERNAME_MIN_LEN:
        raise ValueError(f"Username must be at least {USERNAME_MIN_LEN} characters")
    if len(value) > USERNAME_MAX_LEN:
        raise ValueError(f"Username must be less than {USERNAME_MAX_LEN} characters")
    return value


def validate_new_password(value: str | None, label: str = "Password") -> str:
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) < PASSWORD_MIN_LEN:
        raise ValueError(f"{label} must be at least {PASSWORD_MIN_LEN} characters")
    if len(value) > PASSWORD_MAX_LEN:
        raise ValueError(f"{label} must be less than {PASSWORD_MAX_LEN} characters")
    return value


def normalize_email(value: object) -> object:
    """Blank means no email; addresses are stored lowercased so uniqueness ignores case."""
    if isinstance(value, str) and not value.strip():
        return None
    return value.strip().lower() if isinstance(value, str) else value


class RegisterInput(BaseModel):
    """Self-service registration. New accounts always get the 'user' role."""

    model_config = {"extra": "ignore"}

    username: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str:
        return validate_username(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str | None) -> str:
        return validate_new_password(v)

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


class LoginInput(BaseModel):
    """Credentials for login."""

    model_config = {"extra": "ignore"}

    username: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("Username is required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str | None) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class ChangePasswordInput(BaseModel):
    model_config = {"extra": "ignore"}

    current_password: str | None = Field(default=None, validate_default=True)
    new_password: str | None = Field(default=None, validate_default=True)

    @field_validator("current_password")
    @classmethod
    def check_current_password(cls, v: str | None) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str | None) -> str:
        return validate_new_password(v, label="New password")
