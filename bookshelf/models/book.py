"""Book, Tag and the book_tags association table."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.constants import MAX_TAG_NAME_LENGTH
from bookshelf.models.base import Base, TimestampMixin

# Association table
book_tags = Table(
    "book_tags",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("ix_book_tags_tag_id", "tag_id"),
)


class Tag(Base, TimestampMixin):
    """User-defined tag, unique by name."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_TAG_NAME_LENGTH), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name})>"


class Book(Base, TimestampMixin):
    """A catalogued book.

    Text fields are stored as empty strings rather than NULL so every
    consumer sees total values.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    isbn: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Titles
    title: Mapped[str] = mapped_column(Text, nullable=False)
    title_ruby: Mapped[str] = mapped_column(Text, nullable=False, default="")
    alt_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    alt_title_ruby: Mapped[str] = mapped_column(Text, nullable=False, default="")
    series: Mapped[str] = mapped_column(Text, nullable=False, default="")
    series_ruby: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Bibliographic details
    creators: Mapped[str] = mapped_column(Text, nullable=False, default="")
    publisher: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pages: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    ndc: Mapped[str] = mapped_column(String(20), nullable=False, default="")  # e.g. "007.6"
    url: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # Shelf labels, editable after creation
    location1: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    location2: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Relationships
    tags: Mapped[list[Tag]] = relationship(
        "Tag", secondary=book_tags, lazy="selectin", order_by="Tag.id"
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, isbn={self.isbn}, title={self.title})>"
