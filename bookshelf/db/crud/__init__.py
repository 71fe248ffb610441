"""CRUD operations module."""

from bookshelf.db.crud.books import (
    create_book,
    delete_book,
    get_book,
    list_books,
    update_book_location,
)
from bookshelf.db.crud.tags import (
    create_tag,
    get_books_by_tag_ids,
    get_or_create_tag,
    get_tags_for_book,
    link_book_tag,
    list_tags,
    unlink_book_tag,
)

__all__ = [
    "create_book",
    "create_tag",
    "delete_book",
    "get_book",
    "get_books_by_tag_ids",
    "get_or_create_tag",
    "get_tags_for_book",
    "link_book_tag",
    "list_books",
    "list_tags",
    "unlink_book_tag",
    "update_book_location",
]
