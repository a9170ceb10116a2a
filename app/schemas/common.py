"""Shared field rules and pagination for input records."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def required_text(value: str | None, label: str, max_len: int, empty_message: str) -> str:
    """Trim and check a required string field; raise ValueError with a client-facing message."""
    if value is None or not value.strip():
        raise ValueError(empty_message)
    value = value.strip()
    if len(value) > max_len:
        raise ValueError(f"{label} cannot exceed {max_len} characters")
    return value


def optional_text(value: str | None, label: str, max_len: int) -> str | None:
    """Trim an optional string field; empty strings are stored as None."""
    if value is None:
        return None
    value = value.strip()
    if len(value) > max_len:
        raise ValueError(f"{label} must be less than {max_len} characters")
    return value or None


class Pagination(BaseModel):
    """Offset/limit pagination shared by every list query."""

    limit: int = Field(default=DEFAULT_PAGE_SIZE)
    offset: int = Field(default=0)

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 1 or v > MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        return v

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, v: int) -> int:
        if v < 0:
            raise ValueError("offset must be zero or greater")
        return v
