"""Main API router."""

from fastapi import APIRouter

from bookshelf.api.books import router as books_router
from bookshelf.api.metadata import router as metadata_router
from bookshelf.api.tags import router as tags_router

api_router = APIRouter(prefix="/api")

api_router.include_router(books_router, prefix="/books", tags=["books"])
api_router.include_router(metadata_router, prefix="/metadata", tags=["metadata"])
api_router.include_router(tags_router, prefix="/tags", tags=["tags"])
