"""Tests for the database handle and storage error translation."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import Settings
from bookshelf.db import Database, create_database, storage_operation
from bookshelf.exceptions import ConstraintError, StorageError
from bookshelf.models.book import book_tags


@storage_operation
async def insert_link(db: AsyncSession, book_id: int, tag_id: int) -> None:
    await db.execute(book_tags.insert().values(book_id=book_id, tag_id=tag_id))
    await db.commit()


@storage_operation
async def run_sql(db: AsyncSession, sql: str) -> None:
    await db.execute(text(sql))


class TestDatabase:
    """Tests for the Database handle."""

    @pytest.mark.asyncio
    async def test_foreign_keys_enforced(self, db_session: AsyncSession):
        """Test that links to missing rows are rejected by the store."""
        result = await db_session.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1

        with pytest.raises(ConstraintError):
            await insert_link(db_session, 1, 1)

    @pytest.mark.asyncio
    async def test_storage_error_translation(self, db_session: AsyncSession):
        """Test that driver errors surface as StorageError."""
        with pytest.raises(StorageError) as exc_info:
            await run_sql(db_session, "SELECT * FROM no_such_table")

        assert not isinstance(exc_info.value, ConstraintError)

    @pytest.mark.asyncio
    async def test_create_all_is_idempotent(self, database: Database):
        """Test schema creation can run on every startup."""
        await database.create_all()
        await database.ping()

    @pytest.mark.asyncio
    async def test_in_memory_databases_are_isolated(self, database: Database):
        """Test two in-memory handles do not share data."""
        other = Database("sqlite+aiosqlite:///:memory:")
        await other.create_all()
        try:
            async with database.session() as db:
                await db.execute(text("INSERT INTO tags (name, created_at, updated_at) "
                                      "VALUES ('x', '2026-01-01', '2026-01-01')"))
                await db.commit()
            async with other.session() as db:
                count = (await db.execute(text("SELECT count(*) FROM tags"))).scalar()
            assert count == 0
        finally:
            await other.dispose()

    def test_create_database_from_settings(self):
        """Test plain sqlite URLs are switched to the async driver."""
        settings = Settings(database_url="sqlite:///./catalogue.sqlite")
        database = create_database(settings)

        assert database.url == "sqlite+aiosqlite:///./catalogue.sqlite"

    def test_rejects_other_databases(self):
        """Test non-SQLite URLs are refused."""
        with pytest.raises(ValueError):
            Settings(database_url="postgresql://localhost/books")

    @pytest.mark.asyncio
    async def test_echo_follows_settings(self):
        """Test DATABASE_ECHO switches SQL statement logging on the engine."""
        quiet = create_database(Settings(database_url="sqlite:///:memory:"))
        loud = create_database(Settings(database_url="sqlite:///:memory:", database_echo=True))
        try:
            assert quiet.engine.sync_engine.echo is False
            assert loud.engine.sync_engine.echo is True
        finally:
            await quiet.dispose()
            await loud.dispose()
