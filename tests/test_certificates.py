import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_certificate(client: AsyncClient, institute_headers, certificate_data):
    response = await client.post("/api/certificates", json=certificate_data, headers=institute_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["certificateId"] == certificate_data["certificateId"]
    assert data["studentApparId"] == certificate_data["studentApparId"]
    assert data["isValid"] is True


@pytest.mark.asyncio
async def test_duplicate_certificate_id(client: AsyncClient, institute_headers, certificate_data):
    """Distinct ids can both be created; a repeated id cannot"""
    first = await client.post("/api/certificates", json=certificate_data, headers=institute_headers)
    second = await client.post(
        "/api/certificates",
        json={**certificate_data, "certificateId": "crt-second"},
        headers=institute_headers,
    )
    third = await client.post(
        "/api/certificates",
        json={**certificate_data, "courseName": "Another course"},
        headers=institute_headers,
    )

    assert first.status_code == 201
    assert second.status_code == 201
    assert third.status_code == 409


@pytest.mark.asyncio
async def test_create_requires_token(client: AsyncClient, certificate_data):
    response = await client.post("/api/certificates", json=certificate_data)

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("headers_fixture", ["student_headers", "company_headers"])
async def test_create_requires_issuer_role(client: AsyncClient, certificate_data, headers_fixture, request):
    headers = request.getfixturevalue(headers_fixture)

    response = await client.post("/api/certificates", json=certificate_data, headers=headers)

    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_admin_can_issue(client: AsyncClient, admin_headers, certificate_data):
    response = await client.post("/api/certificates", json=certificate_data, headers=admin_headers)

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_create_missing_fields(client: AsyncClient, institute_headers):
    response = await client.post(
        "/api/certificates", json={"certificateId": "crt-1"}, headers=institute_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_newest_first(client: AsyncClient, institute_headers, certificate_data):
    await client.post("/api/certificates", json=certificate_data, headers=institute_headers)
    await client.post(
        "/api/certificates",
        json={**certificate_data, "certificateId": "crt-newer"},
        headers=institute_headers,
    )

    response = await client.get("/api/certificates")

    assert response.status_code == 200
    ids = [cert["certificateId"] for cert in response.json()]
    assert ids == ["crt-newer", certificate_data["certificateId"]]


@pytest.mark.asyncio
async def test_student_filter(client: AsyncClient, institute_headers, certificate_data):
    await client.post("/api/certificates", json=certificate_data, headers=institute_headers)
    await client.post(
        "/api/certificates",
        json={**certificate_data, "certificateId": "crt-other", "studentApparId": "APPAR-OTHER"},
        headers=institute_headers,
    )

    response = await client.get(f"/api/certificates/student/{certificate_data['studentApparId']}")
    empty = await client.get("/api/certificates/student/APPAR-NOBODY")

    assert response.status_code == 200
    assert [c["certificateId"] for c in response.json()] == [certificate_data["certificateId"]]
    assert empty.json() == []


@pytest.mark.asyncio
async def test_get_single_certificate(client: AsyncClient, institute_headers, certificate_data):
    await client.post("/api/certificates", json=certificate_data, headers=institute_headers)

    found = await client.get(f"/api/certificates/{certificate_data['certificateId']}")
    missing = await client.get("/api/certificates/crt-missing")

    assert found.status_code == 200
    assert found.json()["courseName"] == certificate_data["courseName"]
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_issuer_name(client: AsyncClient, institute_headers, certificate_data):
    await client.post("/api/certificates", json=certificate_data, headers=institute_headers)

    response = await client.put(
        f"/api/certificates/{certificate_data['certificateId']}",
        json={"issuerName": "Renamed Institute", "grade": "F"},
        headers=institute_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["issuerName"] == "Renamed Institute"
    # Only the issuer name is editable
    assert data["grade"] == certificate_data["grade"]


@pytest.mark.asyncio
async def test_update_missing_certificate(client: AsyncClient, institute_headers):
    response = await client.put(
        "/api/certificates/crt-missing",
        json={"issuerName": "Nobody"},
        headers=institute_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_requires_issuer(client: AsyncClient, student_headers):
    response = await client.put(
        "/api/certificates/crt-any", json={"issuerName": "X"}, headers=student_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_seed_check(client: AsyncClient):
    first = await client.get("/api/seed-check")
    second = await client.get("/api/seed-check")
    listed = await client.get("/api/certificates")

    assert first.json()["seeded"] is True
    assert second.json()["seeded"] is False
    assert {c["certificateId"] for c in listed.json()} == {"crt-88293-uuid", "crt-99120-uuid"}
