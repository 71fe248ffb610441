"""Tests for tag API endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from bookshelf.exceptions import StorageError


class TestTagEndpoints:
    """Tests for /api/tags endpoints."""

    @pytest.mark.asyncio
    async def test_add_tag(self, client: AsyncClient):
        """Test creating a tag."""
        response = await client.post("/api/tags", json={"name": "novel"})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "novel"
        assert isinstance(data["id"], int)

    @pytest.mark.asyncio
    async def test_add_tag_idempotent(self, client: AsyncClient):
        """Test creating an existing name returns the same tag."""
        first = (await client.post("/api/tags", json={"name": "novel"})).json()
        second = (await client.post("/api/tags", json={"name": " novel "})).json()

        assert first == second
        assert len((await client.get("/api/tags")).json()) == 1

    @pytest.mark.asyncio
    async def test_add_tag_blank_name(self, client: AsyncClient):
        """Test a blank name is rejected."""
        response = await client.post("/api/tags", json={"name": "   "})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_add_tag_name_too_long(self, client: AsyncClient):
        """Test an overlong name is rejected."""
        response = await client.post("/api/tags", json={"name": "x" * 101})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_all_tags(self, client: AsyncClient):
        """Test listing tags in name order."""
        for name in ["sf", "essay", "manga"]:
            await client.post("/api/tags", json={"name": name})

        response = await client.get("/api/tags")

        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["essay", "manga", "sf"]

    @pytest.mark.asyncio
    async def test_get_all_tags_storage_failure(self, client: AsyncClient):
        """Test storage failures map to 500."""
        with patch(
            "bookshelf.api.tags.list_tags",
            AsyncMock(side_effect=StorageError("disk I/O error")),
        ):
            response = await client.get("/api/tags")

        assert response.status_code == 500
        assert response.json() == {"detail": "disk I/O error"}
