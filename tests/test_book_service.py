"""Tests for app.services.books: listing, search, and owner-or-admin mutations."""

import unittest

from support import add_admin, add_book, add_user, make_session

from app.core.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from app.models import Book
from app.schemas.book import max_published_year
from app.services.books import (
    books_by_author,
    books_by_genre,
    create_book,
    delete_book,
    get_book,
    list_books,
    search_books,
    update_book,
)
from app.services.query_utils import MAX_RECORD_ID, parse_id


def _titles(books: list[Book]) -> list[str]:
    return [b.title for b in books]


class BookServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session()
        self.owner = add_user(self.db, "alice")
        self.other = add_user(self.db, "bob")
        self.admin = add_admin(self.db)

    def tearDown(self) -> None:
        self.db.close()


class TestCreateBook(BookServiceTestCase):
    def test_create_trims_fields_and_sets_creator(self) -> None:
        book = create_book(
            self.db,
            self.owner,
            {"title": "  Dune ", "author": " Frank Herbert", "genre": "Sci-Fi ", "published_year": 1965},
        )
        self.assertEqual(book.title, "Dune")
        self.assertEqual(book.author, "Frank Herbert")
        self.assertEqual(book.genre, "Sci-Fi")
        self.assertEqual(book.created_by, self.owner.id)
        self.assertEqual(book.creator.username, "alice")
        self.assertIsNotNone(book.created_at)

    def test_create_requires_authentication(self) -> None:
        with self.assertRaises(AuthenticationError):
            create_book(self.db, None, {"title": "Dune", "author": "F", "genre": "G", "published_year": 1965})

    def test_year_bounds(self) -> None:
        base = {"title": "T", "author": "A", "genre": "G"}
        for year in (500, max_published_year() + 1):
            with self.subTest(year=year), self.assertRaises(ValidationError):
                create_book(self.db, self.owner, {**base, "published_year": year})
        book = create_book(self.db, self.owner, {**base, "published_year": max_published_year()})
        self.assertEqual(book.published_year, max_published_year())
        self.assertEqual(self.db.query(Book).count(), 1)

    def test_missing_genre_is_rejected(self) -> None:
        with self.assertRaises(ValidationError) as cm:
            create_book(self.db, self.owner, {"title": "T", "author": "A", "genre": " ", "published_year": 2000})
        self.assertIn("Genre is required", cm.exception.message)


class TestListAndSearch(BookServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        add_book(self.db, self.owner, "Dune", "Frank Herbert", "Science Fiction", 1965)
        add_book(self.db, self.owner, "Fictional Lives", "Jane Roe", "Biography", 2001)
        add_book(self.db, self.other, "Emma", "Jane Austen", "Classic", 1815)
        add_book(self.db, self.other, "Pride and Prejudice", "Jane Austen", "Classic", 1813)
        add_book(self.db, self.owner, "The Hobbit", "J.R.R. Tolkien", "Fantasy", 1937)
        add_book(self.db, self.other, "Ficciones", "Jorge Luis Borges", "Short Stories", 1944)

    def test_list_requires_authentication(self) -> None:
        with self.assertRaises(AuthenticationError):
            list_books(self.db, None)

    def test_unfiltered_list_is_newest_first(self) -> None:
        self.assertEqual(
            _titles(list_books(self.db, self.owner)),
            ["Ficciones", "The Hobbit", "Pride and Prejudice", "Emma", "Fictional Lives", "Dune"],
        )

    def test_pagination(self) -> None:
        page = list_books(self.db, self.owner, limit=2, offset=1)
        self.assertEqual(_titles(page), ["The Hobbit", "Pride and Prejudice"])

    def test_invalid_pagination_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            list_books(self.db, self.owner, limit=0)

    def test_filters_are_case_insensitive_substrings_combined_with_and(self) -> None:
        self.assertEqual(_titles(list_books(self.db, self.owner, {"author": "AUSTEN"})), ["Pride and Prejudice", "Emma"])
        self.assertEqual(
            _titles(list_books(self.db, self.owner, {"author": "austen", "title": "em"})),
            ["Emma"],
        )

    def test_year_filter_is_exact(self) -> None:
        self.assertEqual(_titles(list_books(self.db, self.owner, {"published_year": 1813})), ["Pride and Prejudice"])
        self.assertEqual(list_books(self.db, self.owner, {"published_year": 181}), [])

    def test_unset_filter_fields_are_ignored(self) -> None:
        self.assertEqual(len(list_books(self.db, self.owner, {"title": "", "genre": None})), 6)

    def test_search_matches_title_author_or_genre(self) -> None:
        results = search_books(self.db, self.owner, "fic")
        self.assertEqual(
            sorted(_titles(results)),
            sorted(["Dune", "Fictional Lives", "Ficciones"]),
        )
        for book in results:
            haystack = f"{book.title} {book.author} {book.genre}".lower()
            self.assertIn("fic", haystack)

    def test_search_treats_like_wildcards_literally(self) -> None:
        self.assertEqual(search_books(self.db, self.owner, "%"), [])
        self.assertEqual(search_books(self.db, self.owner, "_"), [])

    def test_books_by_genre_and_author(self) -> None:
        self.assertEqual(_titles(books_by_genre(self.db, self.owner, "classic")), ["Pride and Prejudice", "Emma"])
        self.assertEqual(_titles(books_by_author(self.db, self.owner, "tolkien")), ["The Hobbit"])

    def test_get_book(self) -> None:
        book = self.db.query(Book).filter(Book.title == "Emma").one()
        self.assertEqual(get_book(self.db, self.owner, str(book.id)).title, "Emma")

    def test_parse_id_accepts_only_plain_in_range_digits(self) -> None:
        self.assertEqual(parse_id("42", "Book not found"), 42)
        self.assertEqual(parse_id(42, "Book not found"), 42)
        self.assertEqual(parse_id(str(MAX_RECORD_ID), "Book not found"), MAX_RECORD_ID)
        for raw in (str(MAX_RECORD_ID + 1), "1_0", "\u0661", "4.0", ""):
            with self.subTest(raw=raw), self.assertRaises(NotFoundError):
                parse_id(raw, "Book not found")

    def test_get_missing_book_is_not_found(self) -> None:
        for book_id in ("9999", "not-an-id", "99999999999999999999", "1_0", " 12 ", "-1", "0"):
            with self.subTest(book_id=book_id), self.assertRaises(NotFoundError):
                get_book(self.db, self.owner, book_id)


class TestUpdateAndDelete(BookServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.book = add_book(self.db, self.owner, "Dune", "Frank Herbert", "Science Fiction", 1965)

    def test_creator_updates_only_supplied_fields(self) -> None:
        updated = update_book(self.db, self.owner, self.book.id, {"genre": " Space Opera "})
        self.assertEqual(updated.genre, "Space Opera")
        self.assertEqual(updated.title, "Dune")
        self.assertEqual(updated.published_year, 1965)

    def test_non_creator_cannot_update_and_record_is_unchanged(self) -> None:
        with self.assertRaises(AuthorizationError):
            update_book(self.db, self.other, self.book.id, {"title": "Hijacked"})
        self.db.refresh(self.book)
        self.assertEqual(self.book.title, "Dune")

    def test_admin_can_update_any_book(self) -> None:
        updated = update_book(self.db, self.admin, self.book.id, {"published_year": 1966})
        self.assertEqual(updated.published_year, 1966)
        self.assertEqual(updated.created_by, self.owner.id)

    def test_empty_required_field_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            update_book(self.db, self.owner, self.book.id, {"author": ""})
        self.db.refresh(self.book)
        self.assertEqual(self.book.author, "Frank Herbert")

    def test_update_missing_book_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            update_book(self.db, self.owner, 9999, {"title": "X"})

    def test_non_creator_cannot_delete(self) -> None:
        with self.assertRaises(AuthorizationError):
            delete_book(self.db, self.other, self.book.id)
        self.assertEqual(self.db.query(Book).count(), 1)

    def test_creator_deletes_with_confirmation_message(self) -> None:
        book_id = self.book.id
        message = delete_book(self.db, self.owner, book_id)
        self.assertEqual(message, 'Book "Dune" has been successfully deleted')
        self.assertEqual(self.db.query(Book).count(), 0)
        with self.assertRaises(NotFoundError):
            get_book(self.db, self.owner, book_id)

    def test_admin_can_delete_any_book(self) -> None:
        delete_book(self.db, self.admin, self.book.id)
        self.assertEqual(self.db.query(Book).count(), 0)


if __name__ == "__main__":
    unittest.main()
