"""Database module."""

from bookshelf.db.database import (
    Database,
    create_database,
    get_db,
    storage_operation,
)

__all__ = [
    "Database",
    "create_database",
    "get_db",
    "storage_operation",
]
