"""Tests for the authentication endpoints."""

import pytest

from tests.conftest import auth_headers

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"


@pytest.mark.asyncio
async def test_register_returns_tokens_for_new_account(client):
    response = await client.post(
        REGISTER_URL,
        json={
            "name": "Rahim Uddin",
            "email": "Rahim@Slotbook.io",
            "password": "secret123",
            "phone": "+880 1712-345678",
            "role": "OWNER",
        },
    )

    assert response.status_code == 201
    tokens = response.json()
    assert tokens["token_type"] == "bearer"

    me = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )
    assert me.status_code == 200
    profile = me.json()
    assert profile["email"] == "rahim@slotbook.io"
    assert profile["role"] == "OWNER"
    assert profile["phone"] == "+8801712345678"


@pytest.mark.asyncio
async def test_register_rejects_admin_role(client):
    response = await client.post(
        REGISTER_URL,
        json={"name": "Mallory", "email": "mallory@slotbook.io", "password": "secret123", "role": "ADMIN"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client, customer):
    response = await client.post(
        REGISTER_URL,
        json={"name": "Someone Else", "email": customer.email, "password": "secret123"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_login_and_refresh(client, owner):
    response = await client.post(LOGIN_URL, json={"email": owner.email, "password": "Test@1234"})
    assert response.status_code == 200
    tokens = response.json()

    refreshed = await client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["access_token"]


@pytest.mark.asyncio
async def test_login_wrong_password(client, owner):
    response = await client.post(LOGIN_URL, json={"email": owner.email, "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_deactivated_account(client, make_user):
    user = await make_user("USER", is_active=False)

    response = await client.post(LOGIN_URL, json={"email": user.email, "password": "Test@1234"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Account is deactivated"


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(client, owner):
    access = auth_headers(owner)["Authorization"].removeprefix("Bearer ")

    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_token(client):
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
