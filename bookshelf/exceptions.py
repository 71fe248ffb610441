"""Error taxonomy shared by the data layer, the NDL lookup and the API."""


class BookshelfError(Exception):
    """Base exception for bookshelf errors."""

    pass


class NotFoundError(BookshelfError):
    """Lookup yielded no record."""

    pass


class NetworkError(BookshelfError):
    """Remote call failed (transport error, bad status or unreadable body)."""

    pass


class StorageError(BookshelfError):
    """Underlying store failure."""

    pass


class ConstraintError(StorageError):
    """Integrity violation not absorbed by idempotent handling."""

    pass
