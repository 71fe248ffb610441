"""Tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.db import get_db
from bookshelf.db.crud import create_tag, list_tags
from bookshelf.models.schemas import TagCreate, TagRead

router = APIRouter()


@router.post("", response_model=TagRead)
async def add_tag(
    data: TagCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TagRead:
    """Create a tag, or return the existing tag with that name."""
    tag = await create_tag(db, data.name)
    return TagRead.model_validate(tag)


@router.get("", response_model=list[TagRead])
async def get_all_tags(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TagRead]:
    """Get all tags."""
    tags = await list_tags(db)
    return [TagRead.model_validate(tag) for tag in tags]
