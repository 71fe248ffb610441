"""Book API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.db import get_db
from bookshelf.db.crud import (
    create_book,
    delete_book,
    get_book,
    get_books_by_tag_ids,
    get_tags_for_book,
    link_book_tag,
    list_books,
    unlink_book_tag,
    update_book_location,
)
from bookshelf.models.schemas import (
    BookCreate,
    BookCreated,
    BookDeleted,
    BookLocationUpdate,
    BookRead,
    OperationSuccess,
    TagRead,
)

router = APIRouter()

SortKey = Literal["title", "creators", "ndc", "publisher", "location1", "location2"]


@router.post("", response_model=BookCreated, status_code=201)
async def add_book(
    data: BookCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookCreated:
    """Store a book together with its tags (tags are created by name as needed)."""
    book_id = await create_book(db, data, data.tags)
    return BookCreated(id=book_id)


@router.get("", response_model=list[BookRead])
async def get_books(
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str | None, Query()] = None,
    publisher: Annotated[str | None, Query()] = None,
    creators: Annotated[str | None, Query()] = None,
    tag_ids: Annotated[list[int] | None, Query()] = None,
    sort_by: Annotated[SortKey | None, Query()] = None,
    sort_order: Annotated[Literal["asc", "desc"], Query()] = "asc",
) -> list[BookRead]:
    """List books with tags, optionally searched and sorted."""
    books = await list_books(
        db,
        title=title,
        publisher=publisher,
        creators=creators,
        tag_ids=tag_ids,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return [BookRead.model_validate(book) for book in books]


@router.get("/by-tags", response_model=list[BookRead])
async def get_books_by_tags(
    db: Annotated[AsyncSession, Depends(get_db)],
    tag_ids: Annotated[list[int] | None, Query()] = None,
) -> list[BookRead]:
    """List books carrying every given tag; no tags means all books."""
    books = await get_books_by_tag_ids(db, tag_ids or [])
    return [BookRead.model_validate(book) for book in books]


@router.get("/{book_id}", response_model=BookRead)
async def get_book_endpoint(
    book_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookRead:
    """Get a single book by ID."""
    book = await get_book(db, book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookRead.model_validate(book)


@router.delete("/{book_id}", response_model=BookDeleted)
async def delete_book_endpoint(
    book_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookDeleted:
    """Delete a book and its tag links."""
    changes = await delete_book(db, book_id)
    return BookDeleted(changes=changes)


@router.patch("/{book_id}/location", status_code=204)
async def update_location(
    book_id: int,
    data: BookLocationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """Set the shelf labels of a book. Unknown ids are ignored."""
    await update_book_location(db, book_id, data.location1, data.location2)
    return Response(status_code=204)


@router.get("/{book_id}/tags", response_model=list[TagRead])
async def get_book_tags(
    book_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TagRead]:
    """Get the tags of a book."""
    tags = await get_tags_for_book(db, book_id)
    return [TagRead.model_validate(tag) for tag in tags]


@router.post("/{book_id}/tags/{tag_id}", response_model=OperationSuccess)
async def add_book_tag(
    book_id: int,
    tag_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OperationSuccess:
    """Tag a book."""
    await link_book_tag(db, book_id, tag_id)
    return OperationSuccess()


@router.delete("/{book_id}/tags/{tag_id}", response_model=OperationSuccess)
async def remove_book_tag(
    book_id: int,
    tag_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OperationSuccess:
    """Untag a book."""
    await unlink_book_tag(db, book_id, tag_id)
    return OperationSuccess()
