"""
Registration, login and bearer-token handling.
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.auth import create_access_token
from app.routes import users as user_routes


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, client):
        response = await client.post(
            "/users/register",
            json={"name": "Test User", "email": "test@example.com", "password": "password123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["user"]["email"] == "test@example.com"
        assert body["user"]["name"] == "Test User"
        assert body["user"]["id"]
        assert body["user"]["createdAt"].endswith("Z")
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]
        assert body["token"]

    @pytest.mark.asyncio
    async def test_invalid_email_is_rejected(self, client):
        response = await client.post(
            "/users/register",
            json={"name": "Test User", "email": "invalid-email", "password": "password123"},
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert any("email" in error["msg"] for error in errors)

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self, client):
        response = await client.post(
            "/users/register",
            json={"name": "Test User", "email": "test@example.com", "password": "123"},
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert any("6 characters" in error["msg"] for error in errors)

    @pytest.mark.asyncio
    async def test_missing_name_is_rejected(self, client):
        response = await client.post(
            "/users/register",
            json={"email": "test@example.com", "password": "password123"},
        )

        assert response.status_code == 400
        assert response.json()["errors"]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, client, register):
        await register("duplicate@example.com")

        response = await client.post(
            "/users/register",
            json={"name": "Someone Else", "email": "Duplicate@Example.com", "password": "password123"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists"}

    @pytest.mark.asyncio
    async def test_registration_losing_email_race_is_a_conflict(self, client, register, monkeypatch):
        await register("race@example.com")
        # Both requests pass the lookup before either inserts
        monkeypatch.setattr(user_routes, "_find_by_email", AsyncMock(return_value=None))

        response = await client.post(
            "/users/register",
            json={"name": "Second", "email": "race@example.com", "password": "password123"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists"}

    @pytest.mark.asyncio
    async def test_password_over_72_bytes_is_rejected(self, client):
        response = await client.post(
            "/users/register",
            json={"name": "Test User", "email": "test@example.com", "password": "\u00e9" * 60},
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert any("72 bytes" in error["msg"] for error in errors)

    @pytest.mark.asyncio
    async def test_multibyte_password_at_byte_limit(self, client, register):
        password = "\u00e9" * 36
        await register("accents@example.com", password=password)

        response = await client.post(
            "/users/login",
            json={"email": "accents@example.com", "password": password},
        )

        assert response.status_code == 200


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_with_valid_credentials(self, client, register):
        user, _ = await register("login@example.com")

        response = await client.post(
            "/users/login",
            json={"email": "login@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["id"] == user["id"]
        assert body["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, client, register):
        await register("login@example.com")

        wrong_password = await client.post(
            "/users/login",
            json={"email": "login@example.com", "password": "wrongpassword"},
        )
        unknown_email = await client.post(
            "/users/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_overlong_password_is_invalid_credentials(self, client, register):
        await register("login@example.com")

        response = await client.post(
            "/users/login",
            json={"email": "login@example.com", "password": "x" * 100},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_login_validation(self, client):
        response = await client.post("/users/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["errors"]


class TestTokens:

    @pytest.mark.asyncio
    async def test_profile_with_token(self, client, register):
        user, headers = await register("me@example.com", name="Me")

        response = await client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]
        assert response.json()["user"]["name"] == "Me"

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client):
        response = await client.get("/users/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_401(self, client):
        response = await client.get("/users/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token_is_403(self, client):
        response = await client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 403
        assert response.json() == {"error": "Invalid or expired token"}

    @pytest.mark.asyncio
    async def test_expired_token_is_403(self, client, register):
        user, _ = await register("expired@example.com")
        token = create_access_token(uuid.UUID(user["id"]), expires_in=timedelta(seconds=-30))

        response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_token_for_unknown_user_is_403(self, client):
        token = create_access_token(uuid.uuid4())

        response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403


class TestApplication:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/no-such-route")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}
