"""Input records for book operations: create, partial update, and list filters."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import required_text

TITLE_MAX_LEN = 200
AUTHOR_MAX_LEN = 100
GENRE_MAX_LEN = 50
MIN_PUBLISHED_YEAR = 1000
MAX_YEARS_AHEAD = 10


def max_published_year() -> int:
    """Latest accepted publication year; moves with the calendar."""
    return datetime.now(UTC).year + MAX_YEARS_AHEAD


def _validate_published_year(value: int | None, empty_message: str) -> int:
    if value is None:
        raise ValueError(empty_message)
    if value < MIN_PUBLISHED_YEAR:
        raise ValueError(f"Published year must be at least {MIN_PUBLISHED_YEAR}")
    if value > max_published_year():
        raise ValueError(
            f"Published year cannot be more than {MAX_YEARS_AHEAD} years in the future"
        )
    return value


class BookCreate(BaseModel):
    """Fields required to create a book. Strings are trimmed."""

    model_config = {"extra": "ignore"}

    title: str | None = Field(default=None, validate_default=True)
    author: str | None = Field(default=None, validate_default=True)
    genre: str | None = Field(default=None, validate_default=True)
    published_year: int | None = Field(default=None, validate_default=True)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return required_text(v, "Title", TITLE_MAX_LEN, "Title is required")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str | None) -> str:
        return required_text(v, "Author", AUTHOR_MAX_LEN, "Author is required")

    @field_validator("genre")
    @classmethod
    def validate_genre(cls, v: str | None) -> str:
        return required_text(v, "Genre", GENRE_MAX_LEN, "Genre is required")

    @field_validator("published_year")
    @classmethod
    def validate_published_year(cls, v: int | None) -> int:
        return _validate_published_year(v, "Valid published year is required")


class BookUpdate(BaseModel):
    """
    Partial update: only supplied fields are validated and changed.

    Supplying null or an empty string for a field is rejected, since every book field is required.
    """

    model_config = {"extra": "ignore"}

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    published_year: int | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return required_text(v, "Title", TITLE_MAX_LEN, "Title cannot be empty")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str | None) -> str:
        return required_text(v, "Author", AUTHOR_MAX_LEN, "Author cannot be empty")

    @field_validator("genre")
    @classmethod
    def validate_genre(cls, v: str | None) -> str:
        return required_text(v, "Genre", GENRE_MAX_LEN, "Genre cannot be empty")

    @field_validator("published_year")
    @classmethod
    def validate_published_year(cls, v: int | None) -> int:
        return _validate_published_year(v, "Published year cannot be empty")

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class BookFilter(BaseModel):
    """List filters; unset or blank fields are ignored."""

    model_config = {"extra": "ignore"}

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    published_year: int | None = None

    @field_validator("title", "author", "genre")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None
