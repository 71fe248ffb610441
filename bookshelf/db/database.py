"""Database handle, session management and storage error translation."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookshelf.config import Settings, get_settings
from bookshelf.exceptions import ConstraintError, StorageError
from bookshelf.models.base import Base
from bookshelf.utils.logging import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def _is_memory_url(url: str) -> bool:
    return ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:")


class Database:
    """One SQLite store: an async engine plus its session factory.

    Constructed once per process (or once per test) and passed to whatever
    needs it. An in-memory URL keeps a single shared connection, so each
    instance is its own isolated store.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if _is_memory_url(url):
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_async_engine(url, **engine_kwargs)
        event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create missing tables. Safe to call on every startup."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create schema: {e}") from e
        logger.info("Database schema ready")

    async def ping(self) -> None:
        """Run a trivial query; raises StorageError if the store is unreachable."""
        try:
            async with self.session_maker() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, rolling back on error."""
        async with self.session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self.engine.dispose()


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database(settings: Settings | None = None) -> Database:
    """Build the process-wide Database from settings."""
    settings = settings or get_settings()
    return Database(settings.database_url, echo=settings.database_echo)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting a session from the app's Database."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def storage_operation(
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[T]]:
    """Translate SQLAlchemy failures of a CRUD coroutine into StorageError.

    The first positional argument must be the AsyncSession; it is rolled back
    before the error propagates, also when the coroutine itself raises
    ConstraintError. Integrity violations become ConstraintError.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        db = args[0] if args else kwargs["db"]
        try:
            return await func(*args, **kwargs)
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"{func.__name__}: integrity violation: {e.orig}")
            raise ConstraintError(str(e.orig)) from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"{func.__name__}: storage failure: {e}")
            raise StorageError(str(e)) from e
        except ConstraintError:
            await db.rollback()
            raise

    return wrapper
