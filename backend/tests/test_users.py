"""Profile update, password change and public profile lookup."""

from newsportal.users.service import get_user_by_id


class TestProfile:
    async def test_update_profile_changes_only_own_fields(self, client, author):
        user, headers = author
        response = await client.put(
            "/api/users/profile",
            json={"name": "Alice W.", "bio": "Political desk", "avatar": "https://cdn.example.com/a.png", "role": "admin"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["name"] == "Alice W."
        assert body["user"]["bio"] == "Political desk"
        assert body["user"]["avatar"] == "https://cdn.example.com/a.png"
        assert body["user"]["role"] == "user"
        assert "password" not in body["user"]

    async def test_empty_name_is_ignored(self, client, author):
        _, headers = author
        response = await client.put("/api/users/profile", json={"name": "", "bio": "x"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Alice Writer"

    async def test_bio_longer_than_200_is_rejected(self, client, author):
        _, headers = author
        response = await client.put("/api/users/profile", json={"bio": "b" * 201}, headers=headers)

        assert response.status_code == 400

    async def test_update_profile_requires_auth(self, client):
        response = await client.put("/api/users/profile", json={"bio": "nope"})

        assert response.status_code == 401


class TestChangePassword:
    async def test_wrong_current_password_keeps_hash(self, client, db, author):
        user, headers = author
        old_hash = user.hashed_password

        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect."
        stored = await get_user_by_id(user.id, db)
        assert stored.hashed_password == old_hash

    async def test_short_new_password_is_rejected(self, client, author):
        _, headers = author
        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "secret123", "newPassword": "12345"},
            headers=headers,
        )

        assert response.status_code == 400
        assert "at least 6" in response.json()["message"]

    async def test_new_password_replaces_old_one(self, client, author):
        _, headers = author
        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "secret123", "newPassword": "brand-new-pass"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Password changed successfully!"}

        new_login = await client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "brand-new-pass"}
        )
        old_login = await client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        )
        assert new_login.status_code == 200
        assert old_login.status_code == 401

    async def test_existing_token_still_valid_after_change(self, client, author):
        _, headers = author
        await client.put(
            "/api/users/change-password",
            json={"currentPassword": "secret123", "newPassword": "brand-new-pass"},
            headers=headers,
        )

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200


class TestPublicProfile:
    async def test_lookup_without_auth(self, client, author):
        user, _ = author
        response = await client.get(f"/api/users/{user.id}")

        assert response.status_code == 200
        body = response.json()["user"]
        assert body["id"] == user.id
        assert body["name"] == "Alice Writer"
        assert "password" not in body
        assert "hashedPassword" not in body

    async def test_unknown_user(self, client):
        response = await client.get("/api/users/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found."}
