"""Auth and current-user endpoint tests."""

import pytest
from fastapi import status
from httpx import AsyncClient

from pawmarket.api.core.constants import ACCESS_TOKEN_COOKIE
from pawmarket.database.models import UserStatus
from pawmarket.modules.user import google
from pawmarket.modules.user.tokens import REFRESH, create_refresh_token, decode_token
from pawmarket.utils.settings.access_gate import AccessGateSettings


@pytest.mark.asyncio
async def test_mock_login_creates_user_and_issues_tokens(public_client: AsyncClient):
    response = await public_client.post(
        "/api/v1/auth/mock", json={"email": "New.Owner@mypaws.in", "name": "New Owner"}
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message_code"] == "logged_in"
    data = body["data"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "new.owner@mypaws.in"
    assert data["user"]["is_breeder"] is False
    assert decode_token(data["refresh_token"], expected_type=REFRESH)["sub"] == data["user"]["id"]
    assert ACCESS_TOKEN_COOKIE in response.headers.get("set-cookie", "")

    me = await public_client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["data"]["id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_mock_login_is_find_or_create(public_client: AsyncClient):
    first = await public_client.post("/api/v1/auth/mock", json={"email": "same@mypaws.in"})
    second = await public_client.post("/api/v1/auth/mock", json={"email": "SAME@mypaws.in"})

    assert first.json()["data"]["user"]["id"] == second.json()["data"]["user"]["id"]


@pytest.mark.asyncio
async def test_mock_login_promotes_configured_admins(public_client: AsyncClient, monkeypatch):
    monkeypatch.setenv("ADMIN_EMAILS", '["boss@mypaws.in"]')

    response = await public_client.post("/api/v1/auth/mock", json={"email": "boss@mypaws.in"})

    assert response.json()["data"]["user"]["is_admin"] is True


@pytest.mark.asyncio
async def test_mock_login_disabled(public_client: AsyncClient, monkeypatch):
    monkeypatch.setenv("AUTH_MOCK_ENABLED", "false")

    response = await public_client.post("/api/v1/auth/mock", json={"email": "x@mypaws.in"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message_code"] == "mock_auth_disabled"


@pytest.mark.asyncio
async def test_me_requires_authentication(public_client: AsyncClient):
    response = await public_client.get("/api/v1/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message_code"] == "auth_required"


@pytest.mark.asyncio
async def test_malformed_bearer_is_rejected(public_client: AsyncClient):
    response = await public_client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message_code"] == "invalid_token"


@pytest.mark.asyncio
async def test_stale_bearer_does_not_block_login(public_client: AsyncClient):
    response = await public_client.post(
        "/api/v1/auth/mock",
        json={"email": "again@mypaws.in"},
        headers={"Authorization": "Bearer expired.token.value"},
    )

    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_refresh_issues_new_access_token(public_client: AsyncClient, test_user):
    response = await public_client.post(
        "/api/v1/auth/refresh", json={"refresh_token": create_refresh_token(test_user)}
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message_code"] == "token_refreshed"
    assert decode_token(body["data"]["access_token"])["sub"] == str(test_user.id)


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(public_client: AsyncClient, user_token: str):
    response = await public_client.post(
        "/api/v1/auth/refresh", json={"refresh_token": user_token}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message_code"] == "invalid_token"


@pytest.mark.asyncio
async def test_update_profile(authorized_client: AsyncClient, test_city):
    response = await authorized_client.put(
        "/api/v1/auth/me",
        json={"name": "Renamed", "phone": "9000000001", "city_id": str(test_city.id)},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["name"] == "Renamed"
    assert data["phone"] == "9000000001"
    assert data["city_id"] == str(test_city.id)


@pytest.mark.asyncio
async def test_deleted_account_becomes_anonymous(authorized_client: AsyncClient):
    deleted = await authorized_client.delete("/api/v1/auth/me")
    assert deleted.status_code == status.HTTP_204_NO_CONTENT

    response = await authorized_client.get("/api/v1/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_suspended_user_is_gated_but_can_logout(
    app, create_user_factory, client_factory
):
    user = await create_user_factory(status=UserStatus.SUSPENDED)

    async with client_factory(user) as client:
        blocked = await client.get("/api/v1/auth/me")
        logout = await client.post("/api/v1/auth/logout")

    assert blocked.status_code == status.HTTP_403_FORBIDDEN
    assert blocked.json()["message_code"] == "account_suspended"
    assert logout.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.asyncio
async def test_gate_bypass_identity(app, create_user_factory, client_factory):
    user = await create_user_factory(status=UserStatus.BANNED)
    app.state.access_gate_settings = AccessGateSettings(
        ACCESS_GATE_BYPASS_EMAILS=[user.email]
    )

    async with client_factory(user) as client:
        response = await client.get("/api/v1/auth/me")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["status"] == "banned"


ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.mark.asyncio
async def test_suspended_response_keeps_cors_and_security_headers(
    create_user_factory, client_factory
):
    user = await create_user_factory(status=UserStatus.SUSPENDED)

    async with client_factory(user) as client:
        blocked = await client.get(
            "/api/v1/auth/me", headers={"Origin": ALLOWED_ORIGIN}
        )

    assert blocked.status_code == status.HTTP_403_FORBIDDEN
    assert blocked.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert blocked.headers["x-content-type-options"] == "nosniff"


@pytest.mark.asyncio
async def test_invalid_bearer_response_keeps_cors_and_security_headers(
    public_client: AsyncClient,
):
    response = await public_client.get(
        "/api/v1/auth/me",
        headers={"Authorization": "Bearer not-a-jwt", "Origin": ALLOWED_ORIGIN},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert response.headers["x-content-type-options"] == "nosniff"


@pytest.mark.asyncio
async def test_google_login_unavailable_without_client_id(
    public_client: AsyncClient, monkeypatch
):
    monkeypatch.delenv("GOOGLE_CLIENT_ID", raising=False)

    response = await public_client.post(
        "/api/v1/auth/google", json={"id_token": "header.payload.signature"}
    )

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["message_code"] == "google_auth_unavailable"


@pytest.mark.asyncio
async def test_google_login_rejects_unverified_email(
    public_client: AsyncClient, monkeypatch
):
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "pawmarket-web.apps.googleusercontent.com")
    monkeypatch.setattr(
        google,
        "_verify",
        lambda token, client_id: {
            "sub": "1094",
            "email": "unverified@example.com",
            "email_verified": False,
        },
    )

    response = await public_client.post(
        "/api/v1/auth/google", json={"id_token": "header.payload.signature"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message_code"] == "invalid_token"


@pytest.mark.asyncio
async def test_google_login_with_verified_email(
    public_client: AsyncClient, monkeypatch
):
    client_id = "pawmarket-web.apps.googleusercontent.com"
    monkeypatch.setenv("GOOGLE_CLIENT_ID", client_id)
    seen = {}

    def fake_verify(token, audience):
        seen["audience"] = audience
        return {"sub": "2211", "email": "Owner@Example.com", "email_verified": True}

    monkeypatch.setattr(google, "_verify", fake_verify)

    response = await public_client.post(
        "/api/v1/auth/google", json={"id_token": "header.payload.signature"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert seen["audience"] == client_id
    assert response.json()["data"]["user"]["email"] == "owner@example.com"
