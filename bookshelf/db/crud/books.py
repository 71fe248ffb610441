"""Book repository: create, list, delete and relocate books."""

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.constants import BOOK_SORT_KEYS, DEFAULT_SORT_ORDER
from bookshelf.db.crud.tags import books_with_all_tags, get_or_create_tag
from bookshelf.db.database import storage_operation
from bookshelf.models.book import Book, book_tags
from bookshelf.models.schemas import BookData
from bookshelf.utils.logging import get_logger

logger = get_logger(__name__)

_BOOK_FIELDS = set(BookData.model_fields)


@storage_operation
async def create_book(
    db: AsyncSession,
    data: BookData,
    tag_names: Iterable[str] | None = None,
) -> int:
    """Store a book and tag it, creating missing tags by name.

    The book row and every tag link are committed together; if any tag step
    fails the whole creation is rolled back.

    Returns:
        The new book id
    """
    book = Book(**data.model_dump(include=_BOOK_FIELDS))
    db.add(book)
    await db.flush()

    seen: set[str] = set()
    for raw_name in tag_names or ():
        name = raw_name.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        tag = await get_or_create_tag(db, name)
        await db.execute(book_tags.insert().values(book_id=book.id, tag_id=tag.id))

    await db.commit()
    logger.info(f"Created book {book.id} ({book.isbn}) with {len(seen)} tag(s)")
    return book.id


@storage_operation
async def get_book(db: AsyncSession, book_id: int) -> Book | None:
    """Get a single book by ID with its tags."""
    result = await db.execute(
        select(Book).where(Book.id == book_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@storage_operation
async def list_books(
    db: AsyncSession,
    title: str | None = None,
    publisher: str | None = None,
    creators: str | None = None,
    tag_ids: Iterable[int] | None = None,
    sort_by: str | None = None,
    sort_order: str = DEFAULT_SORT_ORDER,
) -> Sequence[Book]:
    """Get books with their tags, optionally filtered and sorted.

    Args:
        title: Case-insensitive substring of the title
        publisher: Case-insensitive substring of the publisher
        creators: Case-insensitive substring of the creators
        tag_ids: Keep only books carrying every one of these tags
        sort_by: One of BOOK_SORT_KEYS; insertion order when omitted
        sort_order: asc or desc
    """
    query = select(Book).execution_options(populate_existing=True)

    if title:
        query = query.where(Book.title.icontains(title, autoescape=True))
    if publisher:
        query = query.where(Book.publisher.icontains(publisher, autoescape=True))
    if creators:
        query = query.where(Book.creators.icontains(creators, autoescape=True))
    ids = set(tag_ids or ())
    if ids:
        query = query.where(Book.id.in_(books_with_all_tags(ids)))

    if sort_by is not None:
        if sort_by not in BOOK_SORT_KEYS:
            raise ValueError(f"Unsupported sort key: {sort_by}")
        column = getattr(Book, sort_by)
        if sort_order == "desc":
            query = query.order_by(column.desc(), Book.id.desc())
        else:
            query = query.order_by(column.asc(), Book.id.asc())
    else:
        query = query.order_by(Book.id)

    result = await db.execute(query)
    return result.scalars().all()


@storage_operation
async def delete_book(db: AsyncSession, book_id: int) -> int:
    """Delete a book and its tag links.

    Returns:
        Number of book rows removed (0 if the book did not exist)
    """
    await db.execute(delete(book_tags).where(book_tags.c.book_id == book_id))
    result = await db.execute(delete(Book).where(Book.id == book_id))
    await db.commit()

    changes = result.rowcount
    logger.info(f"Deleted book {book_id} (changes={changes})")
    return changes


@storage_operation
async def update_book_location(
    db: AsyncSession,
    book_id: int,
    location1: str,
    location2: str,
) -> bool:
    """Overwrite a book's two shelf labels.

    Unknown ids are a no-op.

    Returns:
        True if a book was updated
    """
    result = await db.execute(
        update(Book)
        .where(Book.id == book_id)
        .values(location1=location1, location2=location2)
    )
    await db.commit()

    updated = result.rowcount > 0
    if not updated:
        logger.debug(f"Location update ignored: book {book_id} does not exist")
    return updated
