import pytest
from httpx import AsyncClient

from app.db.session import check_database
from app.main import app


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert "version" in response.json()


@pytest.mark.asyncio
async def test_health_connected(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["dbStatus"] == "connected"
    assert data["timestamp"]


@pytest.mark.asyncio
async def test_health_degraded(client: AsyncClient):
    async def database_down():
        return False

    app.dependency_overrides[check_database] = database_down

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["dbStatus"] == "disconnected"
