"""Helpers shared by the list/search queries."""

from app.core.errors import NotFoundError

LIKE_ESCAPE = "\\"

# Largest value a BIGINT/SQLite INTEGER primary key can hold.
MAX_RECORD_ID = 2**63 - 1


def contains_pattern(text: str) -> str:
    """Case-insensitive substring pattern for ILIKE with LIKE wildcards escaped."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def parse_id(raw_id: str | int, message: str) -> int:
    """
    Record ids are positive 64-bit integers written as plain ASCII digits; anything
    else (signs, whitespace, underscores, out-of-range values) cannot name a record.
    """
    text = str(raw_id)
    if not (text.isascii() and text.isdigit()):
        raise NotFoundError(message)
    record_id = int(text)
    if not 0 < record_id <= MAX_RECORD_ID:
        raise NotFoundError(message)
    return record_id
