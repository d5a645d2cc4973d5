from app.auth import controller as auth_controller
from app.auth.oauth import OAuthUserInfo
from app.exceptions import InvalidGoogleToken


async def test_register_returns_token_and_user(async_client) -> None:
    resp = await async_client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "pw123456"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["role"] == "user"
    assert "passwordHash" not in data["user"]
    assert data["user"]["profilePicture"].startswith("https://")


async def test_register_duplicate_email(async_client, alice) -> None:
    resp = await async_client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "ALICE@example.com", "password": "pw123456"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email already registered"


async def test_register_validation_error_is_400_envelope(async_client) -> None:
    resp = await async_client.post(
        "/api/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "123"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "password" in body["message"]


async def test_login_returns_same_user(async_client, alice) -> None:
    resp = await async_client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "pw123456"},
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == alice["id"]
    assert resp.json()["message"] == "Login successful"


async def test_login_wrong_password(async_client, alice) -> None:
    resp = await async_client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "wrong-password"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid password"


async def test_login_unknown_user(async_client) -> None:
    resp = await async_client.post(
        "/api/auth/login",
        json={"email": "ghost@example.com", "password": "pw123456"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "User does not exist"


async def test_protected_route_without_token(async_client) -> None:
    resp = await async_client.get("/api/user/following")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Not authorized, no token"


async def test_protected_route_with_garbage_token(async_client) -> None:
    resp = await async_client.get(
        "/api/user/following", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Not authorized, token failed"


async def test_google_sign_in_creates_then_reuses_account(async_client, monkeypatch) -> None:
    async def _verify(*, id_token, client_id):
        return OAuthUserInfo(
            provider="google",
            provider_id="google-sub-1",
            email="carol@example.com",
            full_name="Carol",
            picture_url="https://lh3.googleusercontent.com/carol.png",
            email_verified=True,
        )

    monkeypatch.setattr(auth_controller, "verify_google_id_token", _verify)

    first = await async_client.post("/api/auth/google", json={"idToken": "tok"})
    assert first.status_code == 200
    user = first.json()["user"]
    assert user["email"] == "carol@example.com"
    assert user["handle"] == "carol"
    assert user["profilePicture"] == "https://lh3.googleusercontent.com/carol.png"

    second = await async_client.post("/api/auth/google", json={"idToken": "tok"})
    assert second.status_code == 200
    assert second.json()["user"]["id"] == user["id"]


async def test_google_sign_in_rejects_bad_token(async_client, monkeypatch) -> None:
    async def _verify(*, id_token, client_id):
        raise InvalidGoogleToken()

    monkeypatch.setattr(auth_controller, "verify_google_id_token", _verify)

    resp = await async_client.post("/api/auth/google", json={"idToken": "bad"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False
