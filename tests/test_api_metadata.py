"""Tests for metadata lookup endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from bookshelf.api.metadata import get_ndl_service
from bookshelf.exceptions import NetworkError, NotFoundError
from bookshelf.main import app
from bookshelf.models.schemas import BookData


@pytest.fixture
def ndl_mock() -> AsyncMock:
    """Replace the NDL service with a mock for the duration of a test."""
    service = AsyncMock()
    app.dependency_overrides[get_ndl_service] = lambda: service
    return service


class TestFetchBookData:
    """Tests for GET /api/metadata/isbn/{isbn}."""

    @pytest.mark.asyncio
    async def test_fetch_book_data(self, client: AsyncClient, ndl_mock: AsyncMock):
        """Test a found ISBN returns book data without storing it."""
        ndl_mock.fetch_book_data.return_value = BookData(
            isbn="9784000000001",
            title="Pythonプログラミング入門",
            creators="山田, 太郎",
            publisher="技術書房",
            price=1800,
            ndc="007.64",
        )

        response = await client.get("/api/metadata/isbn/9784000000001")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Pythonプログラミング入門"
        assert data["ndc"] == "007.64"
        assert data["series"] == ""
        assert "id" not in data
        ndl_mock.fetch_book_data.assert_awaited_once_with("9784000000001")
        assert (await client.get("/api/books")).json() == []

    @pytest.mark.asyncio
    async def test_fetch_book_data_not_found(self, client: AsyncClient, ndl_mock: AsyncMock):
        """Test an unknown ISBN maps to 404."""
        ndl_mock.fetch_book_data.side_effect = NotFoundError("No book found for ISBN 0000")

        response = await client.get("/api/metadata/isbn/0000")

        assert response.status_code == 404
        assert response.json() == {"detail": "No book found for ISBN 0000"}

    @pytest.mark.asyncio
    async def test_fetch_book_data_network_error(self, client: AsyncClient, ndl_mock: AsyncMock):
        """Test a failed lookup maps to 502."""
        ndl_mock.fetch_book_data.side_effect = NetworkError("Lookup failed")

        response = await client.get("/api/metadata/isbn/9784000000001")

        assert response.status_code == 502
        assert response.json()["detail"] == "Lookup failed"
