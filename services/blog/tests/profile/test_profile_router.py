import uuid
from urllib.parse import parse_qs, urlparse

from app.email import send as email_send


async def test_public_profile(async_client, alice, bob, make_blog) -> None:
    await make_blog(alice, "Public")
    await make_blog(alice, "Private", status="Draft")
    await async_client.post(f"/api/blogs/follow/{alice['id']}", headers=bob["headers"])

    resp = await async_client.get(f"/api/user/profile/{alice['id']}")
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["name"] == "Alice"
    assert user["followers"] == [bob["id"]]
    assert user["followersCount"] == 1
    assert user["postsCount"] == 1
    assert "email" not in user


async def test_public_profile_unknown(async_client) -> None:
    resp = await async_client.get(f"/api/user/profile/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found."


async def test_update_profile_and_duplicate_handle(async_client, alice, bob) -> None:
    resp = await async_client.patch(
        "/api/user/profile",
        json={"handle": "alice_writes", "about": "I write."},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["handle"] == "alice_writes"
    assert resp.json()["user"]["about"] == "I write."
    assert resp.json()["user"]["name"] == "Alice"

    taken = await async_client.patch(
        "/api/user/profile", json={"handle": "alice_writes"}, headers=bob["headers"]
    )
    assert taken.status_code == 400
    assert taken.json()["message"] == "That handle is already taken."

    # Re-saving your own handle is fine.
    same = await async_client.patch(
        "/api/user/profile", json={"handle": "alice_writes"}, headers=alice["headers"]
    )
    assert same.status_code == 200


async def test_handle_too_short(async_client, alice) -> None:
    resp = await async_client.patch(
        "/api/user/profile", json={"handle": "ab"}, headers=alice["headers"]
    )
    assert resp.status_code == 400


async def test_update_picture(async_client, alice, fake_upload) -> None:
    resp = await async_client.patch(
        "/api/user/picture",
        json={"coverImageBase64": "aGVsbG8=", "fileName": "me.png"},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["profilePicture"] == "https://cdn.test/user_profiles/me.png"
    assert fake_upload == [("me.png", "user_profiles")]


async def test_change_password(async_client, alice) -> None:
    wrong = await async_client.patch(
        "/api/user/password",
        json={"currentPassword": "nope", "newPassword": "newpass123"},
        headers=alice["headers"],
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password incorrect."

    ok = await async_client.patch(
        "/api/user/password",
        json={"currentPassword": "pw123456", "newPassword": "newpass123"},
        headers=alice["headers"],
    )
    assert ok.status_code == 200

    login = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "newpass123"}
    )
    assert login.status_code == 200


async def test_password_reset_flow(async_client, alice, monkeypatch) -> None:
    sent: list[str] = []

    async def _send(to_email, name, reset_link, settings):
        sent.append(reset_link)
        return True

    monkeypatch.setattr(email_send, "send_password_reset", _send)

    resp = await async_client.post(
        "/api/user/password-reset-request", json={"email": "alice@example.com"}
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "If an account exists, a recovery email was sent."
    assert len(sent) == 1

    query = parse_qs(urlparse(sent[0]).query)
    token = query["token"][0]
    assert query["email"] == ["alice@example.com"]

    bad = await async_client.post(
        "/api/user/reset-password",
        json={"email": "alice@example.com", "token": "0" * 64, "newPassword": "reset1234"},
    )
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid or expired reset link."

    good = await async_client.post(
        "/api/user/reset-password",
        json={"email": "alice@example.com", "token": token, "newPassword": "reset1234"},
    )
    assert good.status_code == 200

    login = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "reset1234"}
    )
    assert login.status_code == 200

    # Tokens are single-use.
    reuse = await async_client.post(
        "/api/user/reset-password",
        json={"email": "alice@example.com", "token": token, "newPassword": "again1234"},
    )
    assert reuse.status_code == 400


async def test_password_reset_unknown_email_is_generic(async_client, monkeypatch) -> None:
    async def _send(to_email, name, reset_link, settings):
        raise AssertionError("no email for unknown accounts")

    monkeypatch.setattr(email_send, "send_password_reset", _send)

    resp = await async_client.post(
        "/api/user/password-reset-request", json={"email": "ghost@example.com"}
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "If an account exists, a recovery email was sent."


async def test_password_reset_email_failure(async_client, alice, monkeypatch) -> None:
    async def _send(to_email, name, reset_link, settings):
        return False

    monkeypatch.setattr(email_send, "send_password_reset", _send)

    resp = await async_client.post(
        "/api/user/password-reset-request", json={"email": "alice@example.com"}
    )
    assert resp.status_code == 500
    assert resp.json()["message"] == "Email could not be sent. Please try again later."


async def test_reset_password_missing_fields(async_client) -> None:
    resp = await async_client.post("/api/user/reset-password", json={"token": "abc"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Missing fields."
