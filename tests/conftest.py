"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.db import Database
from bookshelf.main import app
from bookshelf.models.schemas import BookData

# Each test gets its own in-memory store
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create an isolated, empty database."""
    db = Database(TEST_DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the test database."""
    app.state.database = database

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    del app.state.database


@pytest.fixture
def book_data() -> Callable[..., BookData]:
    """Factory for BookData with sensible defaults."""

    def make(**overrides) -> BookData:
        fields = {
            "isbn": "9784000000001",
            "title": "吾輩は猫である",
            "creators": "夏目, 漱石",
            "publisher": "岩波書店",
            "date": "1990.4",
            "price": 600,
            "pages": "452p ; 15cm",
            "ndc": "913.6",
            "url": "https://ndlsearch.ndl.go.jp/books/R100000002-I000000000001",
        }
        fields.update(overrides)
        return BookData(**fields)

    return make
