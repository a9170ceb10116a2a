"""Validation entrypoint: every write validates its input record here before touching the database."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_error(error: Mapping[str, Any]) -> str:
    """Prefer the message raised by our own validators; fall back to 'field: pydantic message'."""
    ctx_error = (error.get("ctx") or {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


def validate_input(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """
    Validate a raw input mapping against an input record.

    Collects every failing field (no early abort) and raises ValidationError
    with the messages joined, e.g. "Validation error: Title is required, Genre is required".
    """
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        messages = [_format_error(err) for err in e.errors()]
        raise ValidationError(f"Validation error: {', '.join(messages)}") from e
