"""Shared test helpers: an isolated in-memory SQLite database and record factories."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import hash_password
from app.models import ROLE_ADMIN, ROLE_USER, Base, Book, User

DEFAULT_PASSWORD = "secret123"

# bcrypt at cost 12 is slow; hash each distinct test password once.
_hash_cache: dict[str, str] = {}


def make_engine() -> Engine:
    """One in-memory database per call; StaticPool keeps it alive across sessions and threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or make_engine(), autocommit=False, autoflush=False)


def make_session() -> Session:
    return make_session_factory()()


def cached_hash(password: str) -> str:
    if password not in _hash_cache:
        _hash_cache[password] = hash_password(password)
    return _hash_cache[password]


def add_user(
    db: Session,
    username: str,
    password: str = DEFAULT_PASSWORD,
    role: str = ROLE_USER,
    is_active: bool = True,
    email: str | None = None,
    first_name: str | None = None,
) -> User:
    user = User(
        username=username,
        email=email,
        first_name=first_name,
        password_hash=cached_hash(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_admin(db: Session, username: str = "admin", **kwargs: object) -> User:
    return add_user(db, username, role=ROLE_ADMIN, **kwargs)


def add_book(
    db: Session,
    owner: User,
    title: str = "Dune",
    author: str = "Frank Herbert",
    genre: str = "Science Fiction",
    published_year: int = 1965,
) -> Book:
    book = Book(
        title=title,
        author=author,
        genre=genre,
        published_year=published_year,
        created_by=owner.id,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    return book
