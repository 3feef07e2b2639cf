"""Tests for profile, password and avatar endpoints."""
from bingekaro.settings import settings

USERS = "/api/v1/users"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def upload(client, headers, content=PNG_BYTES, content_type="image/png"):
    return client.post(
        f"{USERS}/avatar",
        files={"file": ("avatar.png", content, content_type)},
        headers=headers,
    )


class TestProfile:

    def test_get_own_profile(self, client, alice, alice_headers):
        response = client.get(f"{USERS}/profile", headers=alice_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == alice.id
        assert data["email"] == "alice@example.com"
        assert "hashed_password" not in data

    def test_update_profile(self, client, alice_headers):
        response = client.put(
            f"{USERS}/profile",
            json={"display_name": "Alice L.", "bio": "  Horror buff  "},
            headers=alice_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["display_name"] == "Alice L."
        assert data["bio"] == "Horror buff"
        assert data["username"] == "alice"

    def test_rename_to_taken_username(self, client, alice_headers, bob):
        response = client.put(f"{USERS}/profile", json={"username": "Bob"}, headers=alice_headers)
        assert response.status_code == 409

    def test_rename_username(self, client, alice_headers):
        response = client.put(f"{USERS}/profile", json={"username": "Alice_2"}, headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["username"] == "alice_2"
        assert client.get(f"{USERS}/alice_2").status_code == 200

    def test_public_profile_hides_email(self, client, alice):
        response = client.get(f"{USERS}/alice")
        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert "email" not in response.json()

    def test_public_profile_unknown(self, client):
        assert client.get(f"{USERS}/nobody").status_code == 404


class TestPassword:

    def test_change_password(self, client, alice_headers):
        response = client.put(
            f"{USERS}/password",
            json={"current_password": "password123", "new_password": "newpassword456"},
            headers=alice_headers,
        )
        assert response.status_code == 200

        old = client.post("/api/v1/auth/login", data={"username": "alice", "password": "password123"})
        new = client.post("/api/v1/auth/login", data={"username": "alice", "password": "newpassword456"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_overlong_new_password(self, client, alice_headers):
        response = client.put(
            f"{USERS}/password",
            json={"current_password": "password123", "new_password": "x" * 80},
            headers=alice_headers,
        )
        assert response.status_code == 422

    def test_wrong_current_password(self, client, alice_headers):
        response = client.put(
            f"{USERS}/password",
            json={"current_password": "not-it", "new_password": "newpassword456"},
            headers=alice_headers,
        )
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "current_password", "message": "Current password is incorrect"}
        ]


class TestAvatar:

    def test_upload_avatar(self, client, alice_headers):
        response = upload(client, alice_headers)
        assert response.status_code == 200
        url = response.json()["avatar_url"]
        assert url.startswith("/uploads/avatar-")
        assert (settings.upload_dir / url.rsplit("/", 1)[-1]).exists()

    def test_replacing_avatar_deletes_old_file(self, client, alice_headers):
        first = upload(client, alice_headers).json()["avatar_url"].rsplit("/", 1)[-1]
        second = upload(client, alice_headers).json()["avatar_url"].rsplit("/", 1)[-1]
        assert first != second
        assert not (settings.upload_dir / first).exists()
        assert (settings.upload_dir / second).exists()

    def test_upload_rejects_non_image(self, client, alice_headers):
        response = upload(client, alice_headers, content=b"hello", content_type="text/plain")
        assert response.status_code == 400

    def test_upload_rejects_empty_file(self, client, alice_headers):
        assert upload(client, alice_headers, content=b"").status_code == 400

    def test_remove_avatar(self, client, alice_headers):
        filename = upload(client, alice_headers).json()["avatar_url"].rsplit("/", 1)[-1]
        response = client.delete(f"{USERS}/avatar", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["avatar_url"] is None
        assert not (settings.upload_dir / filename).exists()

    def test_remove_missing_avatar(self, client, alice_headers):
        assert client.delete(f"{USERS}/avatar", headers=alice_headers).status_code == 400


class TestDeactivate:

    def test_deactivate_hides_profile(self, client, alice_headers):
        response = client.delete(f"{USERS}/me", headers=alice_headers)
        assert response.status_code == 200
        assert client.get(f"{USERS}/alice").status_code == 404
