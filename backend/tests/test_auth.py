"""Registration, login and bearer-token resolution."""

from datetime import timedelta

from jose import jwt

from newsportal.auth.service import create_access_token
from newsportal.config import settings
from newsportal.users import service as user_service


class TestRegisterAndLogin:
    async def test_register_returns_token_and_public_user(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Carol", "email": "Carol@Example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["email"] == "carol@example.com"
        assert body["user"]["role"] == "user"
        assert "password" not in body["user"]
        assert "hashedPassword" not in body["user"]

    async def test_register_duplicate_email_is_rejected(self, client, author):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Copycat", "email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_register_race_on_unique_email_is_invalid_input(self, client, author, monkeypatch):
        # The existence check passes, as it would for two registrations racing each other.
        async def _nobody(email, db):
            return None

        monkeypatch.setattr(user_service, "get_user_by_email", _nobody)

        response = await client.post(
            "/api/auth/register",
            json={"name": "Late twin", "email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "User already exists with this email."}

    async def test_register_missing_fields_is_invalid_input(self, client):
        response = await client.post("/api/auth/register", json={"email": "x@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"]

    async def test_login_returns_token_usable_for_me(self, client, author):
        user, _ = author
        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "secret123"},
        )
        assert response.status_code == 200
        token = response.json()["token"]

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["user"]["id"] == user.id

    async def test_login_wrong_password_is_unauthenticated(self, client, author):
        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid email or password."}

    async def test_login_unknown_email_fails_the_same_way(self, client):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password."


class TestGuard:
    async def test_missing_token(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_garbage_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_token_signed_with_other_secret(self, client, author):
        user, _ = author
        forged = jwt.encode({"sub": user.id, "type": "access"}, "other-secret", algorithm="HS256")

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401

    async def test_expired_token(self, client, author):
        user, _ = author
        token = create_access_token(user, expires_delta=timedelta(seconds=-10))

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_token_for_missing_user(self, client):
        token = jwt.encode(
            {"sub": "00000000-0000-0000-0000-000000000000", "type": "access"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_token_carries_expiry_and_subject(self, author):
        user, _ = author
        payload = jwt.decode(
            create_access_token(user), settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )

        assert payload["sub"] == user.id
        assert payload["type"] == "access"
        assert "exp" in payload
