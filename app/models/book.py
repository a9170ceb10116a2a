"""ORM model for catalog books."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow


class Book(Base):
    """
    A catalog entry owned by the user who created it.

    Field constraints here only describe storage; input rules live in app.schemas.book.
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False, index=True)
    author = Column(String(100), nullable=False, index=True)
    genre = Column(String(50), nullable=False, index=True)
    published_year = Column(Integer, nullable=False, index=True)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    creator = relationship("User", back_populates="books")

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r}>"
