import pytest
from unittest.mock import AsyncMock, patch
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_submit_help_request(client: AsyncClient, auth_headers, test_user):
    response = await client.post(
        "/api/v1/help-requests",
        json={"title": "Arduino project", "details": "Sensor readings are noisy"},
        headers=auth_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["response"] == ""
    assert data["user_id"] == test_user.id
    assert data["username"] == test_user.username


@pytest.mark.asyncio
async def test_submit_requires_login(client: AsyncClient):
    response = await client.post(
        "/api/v1/help-requests",
        json={"title": "t", "details": "d"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_submit_blank_fields(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/v1/help-requests",
        json={"title": "  ", "details": "d"},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please fill in all fields"


@pytest.mark.asyncio
async def test_list_mine_only_returns_own(client: AsyncClient, auth_headers, other_auth_headers):
    await client.post("/api/v1/help-requests", json={"title": "Mine", "details": "d"}, headers=auth_headers)
    await client.post("/api/v1/help-requests", json={"title": "Theirs", "details": "d"}, headers=other_auth_headers)

    response = await client.get("/api/v1/help-requests/mine", headers=auth_headers)

    assert response.status_code == 200
    assert [r["title"] for r in response.json()] == ["Mine"]


@pytest.mark.asyncio
async def test_list_all_requires_admin(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/help-requests", headers=auth_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_lists_oldest_first(client: AsyncClient, auth_headers, other_auth_headers, admin_auth_headers):
    await client.post("/api/v1/help-requests", json={"title": "First", "details": "d"}, headers=auth_headers)
    await client.post("/api/v1/help-requests", json={"title": "Second", "details": "d"}, headers=other_auth_headers)

    response = await client.get("/api/v1/help-requests", headers=admin_auth_headers)

    assert [r["title"] for r in response.json()] == ["First", "Second"]


@pytest.mark.asyncio
async def test_admin_respond(client: AsyncClient, auth_headers, admin_auth_headers, test_user):
    created = await client.post(
        "/api/v1/help-requests",
        json={"title": "Bridge design", "details": "Load calculation"},
        headers=auth_headers
    )
    request_id = created.json()["id"]

    with patch(
        "app.api.v1.endpoints.help_requests.email_service.send_help_response_email",
        new_callable=AsyncMock
    ) as send_mail:
        response = await client.post(
            f"/api/v1/help-requests/{request_id}/respond",
            json={"response": "Use a truss model."},
            headers=admin_auth_headers
        )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "responded"
    assert data["response"] == "Use a truss model."
    assert data["responded_at"] is not None
    send_mail.assert_awaited_once()
    assert send_mail.await_args.kwargs["to_email"] == test_user.email


@pytest.mark.asyncio
async def test_respond_blank_rejected(client: AsyncClient, auth_headers, admin_auth_headers):
    created = await client.post(
        "/api/v1/help-requests",
        json={"title": "t", "details": "d"},
        headers=auth_headers
    )

    response = await client.post(
        f"/api/v1/help-requests/{created.json()['id']}/respond",
        json={"response": ""},
        headers=admin_auth_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_respond_missing_request(client: AsyncClient, admin_auth_headers):
    response = await client.post(
        "/api/v1/help-requests/missing/respond",
        json={"response": "Hello"},
        headers=admin_auth_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_respond_requires_admin(client: AsyncClient, auth_headers):
    created = await client.post(
        "/api/v1/help-requests",
        json={"title": "t", "details": "d"},
        headers=auth_headers
    )

    response = await client.post(
        f"/api/v1/help-requests/{created.json()['id']}/respond",
        json={"response": "I answer myself"},
        headers=auth_headers
    )

    assert response.status_code == 403
