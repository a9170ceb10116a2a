"""Book catalog operations: filtered listing, search, and owner-or-admin mutations."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

from app.core.database import commit_or_raise
from app.core.errors import NotFoundError
from app.models import Book, User
from app.schemas.book import BookCreate, BookFilter, BookUpdate
from app.schemas.common import DEFAULT_PAGE_SIZE, Pagination
from app.services.auth import ensure_owner_or_admin, require_user
from app.services.query_utils import LIKE_ESCAPE, contains_pattern, parse_id
from app.services.validation import validate_input

logger = logging.getLogger(__name__)


def _base_query(db: Session) -> Query:
    return db.query(Book).options(selectinload(Book.creator))


def _page(query: Query, limit: int, offset: int) -> list[Book]:
    page = validate_input(Pagination, {"limit": limit, "offset": offset})
    return (
        query.order_by(Book.created_at.desc(), Book.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )


def list_books(
    db: Session,
    actor: User | None,
    filters: Mapping[str, Any] | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[Book]:
    """
    List books newest first. Title, author and genre filters are case-insensitive
    substring matches, published_year is exact; provided filters are AND-combined.
    """
    require_user(actor)
    criteria = validate_input(BookFilter, filters or {})
    query = _base_query(db)
    if criteria.title:
        query = query.filter(Book.title.ilike(contains_pattern(criteria.title), escape=LIKE_ESCAPE))
    if criteria.author:
        query = query.filter(Book.author.ilike(contains_pattern(criteria.author), escape=LIKE_ESCAPE))
    if criteria.genre:
        query = query.filter(Book.genre.ilike(contains_pattern(criteria.genre), escape=LIKE_ESCAPE))
    if criteria.published_year is not None:
        query = query.filter(Book.published_year == criteria.published_year)
    return _page(query, limit, offset)


def get_book(db: Session, actor: User | None, book_id: str | int) -> Book:
    require_user(actor)
    book = _base_query(db).filter(Book.id == parse_id(book_id, "Book not found")).first()
    if book is None:
        raise NotFoundError("Book not found")
    return book


def search_books(
    db: Session,
    actor: User | None,
    text: str,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[Book]:
    """Case-insensitive substring match against title OR author OR genre."""
    require_user(actor)
    pattern = contains_pattern(text or "")
    query = _base_query(db).filter(
        or_(
            Book.title.ilike(pattern, escape=LIKE_ESCAPE),
            Book.author.ilike(pattern, escape=LIKE_ESCAPE),
            Book.genre.ilike(pattern, escape=LIKE_ESCAPE),
        )
    )
    return _page(query, limit, offset)


def books_by_genre(
    db: Session, actor: User | None, genre: str, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
) -> list[Book]:
    return list_books(db, actor, {"genre": genre}, limit=limit, offset=offset)


def books_by_author(
    db: Session, actor: User | None, author: str, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
) -> list[Book]:
    return list_books(db, actor, {"author": author}, limit=limit, offset=offset)


def create_book(db: Session, actor: User | None, data: Mapping[str, Any]) -> Book:
    """Validate and persist a new book owned by the caller."""
    user = require_user(actor)
    body = validate_input(BookCreate, data)
    book = Book(
        title=body.title,
        author=body.author,
        genre=body.genre,
        published_year=body.published_year,
        created_by=user.id,
    )
    db.add(book)
    commit_or_raise(db, "Failed to create book")
    db.refresh(book)
    logger.info("Book created: id=%s title=%r by user=%s", book.id, book.title, user.username)
    return book


def update_book(
    db: Session, actor: User | None, book_id: str | int, data: Mapping[str, Any]
) -> Book:
    """Apply a partial update. Only the creator or an admin may update a book."""
    user = require_user(actor)
    book = db.get(Book, parse_id(book_id, "Book not found"))
    if book is None:
        raise NotFoundError("Book not found")
    ensure_owner_or_admin(user, book.created_by, "You can only update books you created")

    changes = validate_input(BookUpdate, data).changes()
    for field, value in changes.items():
        setattr(book, field, value)
    commit_or_raise(db, "Failed to update book")
    db.refresh(book)
    logger.info(
        "Book updated: id=%s fields=%s by user=%s", book.id, sorted(changes), user.username
    )
    return book


def delete_book(db: Session, actor: User | None, book_id: str | int) -> str:
    """Hard delete. Only the creator or an admin may delete a book."""
    user = require_user(actor)
    book = db.get(Book, parse_id(book_id, "Book not found"))
    if book is None:
        raise NotFoundError("Book not found")
    ensure_owner_or_admin(user, book.created_by, "You can only delete books you created")

    title = book.title
    db.delete(book)
    commit_or_raise(db, "Failed to delete book")
    logger.info("Book deleted: id=%s title=%r by user=%s", book_id, title, user.username)
    return f'Book "{title}" has been successfully deleted'
