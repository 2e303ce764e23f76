import pytest
from httpx import AsyncClient
from motor.motor_asyncio import AsyncIOMotorClient

from app.db.session import get_db
from app.main import app


@pytest.mark.asyncio
async def test_admin_stats_counts(client: AsyncClient, admin_headers, registered_user, institute_headers, certificate_data):
    await client.post(
        "/api/auth/register",
        json={
            "role": "INSTITUTE",
            "name": "Tech Institute",
            "email": "registrar@institute.example.com",
            "password": "Secret1!",
            "recognitionNumber": "REC-42",
        },
    )
    await client.post("/api/certificates", json=certificate_data, headers=institute_headers)

    response = await client.get("/api/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["totalUsers"] == 2
    assert data["totalCertificates"] == 1
    assert data["roles"] == {"students": 1, "institutes": 1, "companies": 0, "admins": 0}
    assert len(data["recentActivity"]) == 7
    assert set(data["recentActivity"][0]) == {"name", "newUsers", "issuedCerts"}
    assert data["recentActivityIsSample"] is True


@pytest.mark.asyncio
async def test_admin_stats_requires_admin(client: AsyncClient, institute_headers):
    anonymous = await client.get("/api/admin/stats")
    institute = await client.get("/api/admin/stats", headers=institute_headers)

    assert anonymous.status_code == 401
    assert institute.status_code == 403
    assert institute.json()["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_admin_stats_database_down(client: AsyncClient, admin_headers):
    """An unreachable store is a 503, never a 200 with zeros"""
    unreachable = AsyncIOMotorClient("mongodb://127.0.0.1:1", serverSelectionTimeoutMS=100)

    async def override_get_db():
        return unreachable["skillchain_test"]

    app.dependency_overrides[get_db] = override_get_db
    try:
        response = await client.get("/api/admin/stats", headers=admin_headers)
    finally:
        unreachable.close()

    assert response.status_code == 503
    assert response.json()["detail"] == "Database unavailable"
