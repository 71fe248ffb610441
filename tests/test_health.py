"""Tests for health check endpoint."""

import pytest
from httpx import AsyncClient

from bookshelf.db import Database
from bookshelf.main import app


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_ok(self, client: AsyncClient):
        """Test a reachable database reports healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"] == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        data = (await client.get("/health")).json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "checks" in data

    @pytest.mark.asyncio
    async def test_health_unreachable_database(self, client: AsyncClient, tmp_path):
        """Test an unusable database reports degraded."""
        broken = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
        app.state.database = broken
        try:
            response = await client.get("/health")
        finally:
            await broken.dispose()

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
