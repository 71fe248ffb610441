"""Pydantic schemas for API validation and serialization."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookshelf.constants import MAX_TAG_NAME_LENGTH


# Tag schemas
class TagBase(BaseModel):
    """Base tag schema."""

    name: str = Field(min_length=1, max_length=MAX_TAG_NAME_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("tag name must not be blank")
        return v


class TagCreate(TagBase):
    """Tag creation schema."""

    pass


class TagRead(BaseModel):
    """Tag read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


# Book schemas
class BookData(BaseModel):
    """Book fields known before the book is stored (no id, no tags).

    This is what an NDL lookup produces and what add-book accepts. Missing
    text fields are empty strings and a missing price is 0.
    """

    model_config = ConfigDict(from_attributes=True)

    isbn: str
    title: str
    title_ruby: str = ""
    alt_title: str = ""
    alt_title_ruby: str = ""
    series: str = ""
    series_ruby: str = ""
    creators: str = ""
    publisher: str = ""
    date: str = ""
    price: int = 0
    pages: str = ""
    ndc: str = ""
    location1: str = ""
    location2: str = ""
    url: str = ""


class BookCreate(BookData):
    """Book creation schema: book fields plus tag names to attach."""

    tags: list[str] = []

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        names = [name.strip() for name in v if name and name.strip()]
        for name in names:
            if len(name) > MAX_TAG_NAME_LENGTH:
                raise ValueError(
                    f"tag name must be at most {MAX_TAG_NAME_LENGTH} characters"
                )
        return names


class BookRead(BookData):
    """Book read schema with hydrated tags."""

    id: int
    tags: list[TagRead] = []
    created_at: datetime
    updated_at: datetime


class BookLocationUpdate(BaseModel):
    """Shelf location update schema."""

    location1: str = ""
    location2: str = ""


# Operation results
class BookCreated(BaseModel):
    """Result of add-book."""

    id: int


class BookDeleted(BaseModel):
    """Result of delete-book."""

    changes: int


class OperationSuccess(BaseModel):
    """Result of link/unlink operations."""

    success: Literal[True] = True
