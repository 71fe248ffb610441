"""SQLAlchemy models."""

from bookshelf.models.base import Base, TimestampMixin
from bookshelf.models.book import Book, Tag, book_tags

__all__ = [
    "Base",
    "TimestampMixin",
    "Book",
    "Tag",
    "book_tags",
]
