"""Tagging service: idempotent tags, book-tag links and tag queries."""

from collections.abc import Iterable, Sequence

from sqlalchemy import Select, delete, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.constants import MAX_TAG_NAME_LENGTH
from bookshelf.db.database import storage_operation
from bookshelf.exceptions import ConstraintError
from bookshelf.models.book import Book, Tag, book_tags
from bookshelf.utils.logging import get_logger

logger = get_logger(__name__)


async def get_or_create_tag(db: AsyncSession, name: str) -> Tag:
    """Get existing tag by name or create it, without committing.

    The insert ignores a name conflict, so a concurrent creator of the same
    name is resolved by the lookup that follows instead of an error.
    """
    name = name.strip()
    if not name:
        raise ConstraintError("Tag name must not be empty")
    if len(name) > MAX_TAG_NAME_LENGTH:
        raise ConstraintError(f"Tag name longer than {MAX_TAG_NAME_LENGTH} characters")

    await db.execute(
        sqlite_insert(Tag).values(name=name).on_conflict_do_nothing(index_elements=["name"])
    )
    result = await db.execute(select(Tag).where(Tag.name == name))
    return result.scalar_one()


def books_with_all_tags(tag_ids: Iterable[int]) -> Select:
    """Select ids of books linked to every one of the given tags."""
    ids = set(tag_ids)
    return (
        select(book_tags.c.book_id)
        .where(book_tags.c.tag_id.in_(ids))
        .group_by(book_tags.c.book_id)
        .having(func.count(func.distinct(book_tags.c.tag_id)) == len(ids))
    )


@storage_operation
async def create_tag(db: AsyncSession, name: str) -> Tag:
    """Create a tag, or return the existing one with the same name."""
    tag = await get_or_create_tag(db, name)
    await db.commit()
    return tag


@storage_operation
async def list_tags(db: AsyncSession) -> Sequence[Tag]:
    """Get all tags."""
    result = await db.execute(select(Tag).order_by(Tag.name, Tag.id))
    return result.scalars().all()


@storage_operation
async def get_tags_for_book(db: AsyncSession, book_id: int) -> Sequence[Tag]:
    """Get the tags linked to a book (empty if none or if the book is unknown)."""
    result = await db.execute(
        select(Tag)
        .join(book_tags, book_tags.c.tag_id == Tag.id)
        .where(book_tags.c.book_id == book_id)
        .order_by(Tag.id)
    )
    return result.scalars().all()


@storage_operation
async def link_book_tag(db: AsyncSession, book_id: int, tag_id: int) -> bool:
    """Link a book to a tag.

    Re-linking an existing pair succeeds without adding a row.

    Returns:
        True if a new link was created, False if it already existed

    Raises:
        ConstraintError: if the book or the tag does not exist
    """
    if await db.scalar(select(Book.id).where(Book.id == book_id)) is None:
        raise ConstraintError(f"Book {book_id} does not exist")
    if await db.scalar(select(Tag.id).where(Tag.id == tag_id)) is None:
        raise ConstraintError(f"Tag {tag_id} does not exist")

    result = await db.execute(
        sqlite_insert(book_tags).values(book_id=book_id, tag_id=tag_id).on_conflict_do_nothing()
    )
    await db.commit()

    created = result.rowcount > 0
    if not created:
        logger.debug(f"Book {book_id} already tagged with {tag_id}")
    return created


@storage_operation
async def unlink_book_tag(db: AsyncSession, book_id: int, tag_id: int) -> bool:
    """Remove a book-tag link. Absent links are a no-op (returns False)."""
    result = await db.execute(
        delete(book_tags).where(
            book_tags.c.book_id == book_id,
            book_tags.c.tag_id == tag_id,
        )
    )
    await db.commit()
    return result.rowcount > 0


@storage_operation
async def get_books_by_tag_ids(db: AsyncSession, tag_ids: Iterable[int]) -> Sequence[Book]:
    """Get books linked to all of the given tags, with tags loaded.

    An empty tag set matches every book.
    """
    ids = set(tag_ids)
    query = select(Book).order_by(Book.id).execution_options(populate_existing=True)
    if ids:
        query = query.where(Book.id.in_(books_with_all_tags(ids)))

    result = await db.execute(query)
    return result.scalars().all()
