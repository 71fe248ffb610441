"""Metadata lookup endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bookshelf.models.schemas import BookData
from bookshelf.services.metadata import NDLBookService, ndl_service

router = APIRouter()


def get_ndl_service() -> NDLBookService:
    """Dependency for the NDL lookup service."""
    return ndl_service


@router.get("/isbn/{isbn}", response_model=BookData)
async def fetch_book_data(
    isbn: str,
    service: Annotated[NDLBookService, Depends(get_ndl_service)],
) -> BookData:
    """Look up book metadata by ISBN (nothing is stored)."""
    return await service.fetch_book_data(isbn)
