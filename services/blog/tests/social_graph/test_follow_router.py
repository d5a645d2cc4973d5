import uuid


async def _following_ids(client, user) -> list[str]:
    resp = await client.get("/api/user/following", headers=user["headers"])
    assert resp.status_code == 200
    return [u["id"] for u in resp.json()["following"]]


async def _follower_ids(client, user) -> list[str]:
    resp = await client.get("/api/user/followers", headers=user["headers"])
    assert resp.status_code == 200
    return [u["id"] for u in resp.json()["followers"]]


async def test_follow_then_unfollow(async_client, alice, bob) -> None:
    resp = await async_client.post(f"/api/blogs/follow/{bob['id']}", headers=alice["headers"])
    assert resp.status_code == 200
    assert resp.json()["following"] is True
    assert resp.json()["message"] == "Following"

    assert await _following_ids(async_client, alice) == [bob["id"]]
    assert await _follower_ids(async_client, bob) == [alice["id"]]

    resp = await async_client.post(f"/api/blogs/follow/{bob['id']}", headers=alice["headers"])
    assert resp.json()["following"] is False
    assert resp.json()["message"] == "Unfollowed"

    assert await _following_ids(async_client, alice) == []
    assert await _follower_ids(async_client, bob) == []


async def test_follow_is_directed(async_client, alice, bob) -> None:
    await async_client.post(f"/api/blogs/follow/{bob['id']}", headers=alice["headers"])

    assert await _following_ids(async_client, bob) == []
    assert await _follower_ids(async_client, alice) == []


async def test_cannot_follow_self(async_client, alice) -> None:
    resp = await async_client.post(f"/api/blogs/follow/{alice['id']}", headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot follow yourself"


async def test_follow_unknown_user(async_client, alice) -> None:
    resp = await async_client.post(f"/api/blogs/follow/{uuid.uuid4()}", headers=alice["headers"])
    assert resp.status_code == 404


async def test_follow_requires_auth(async_client, bob) -> None:
    resp = await async_client.post(f"/api/blogs/follow/{bob['id']}")
    assert resp.status_code == 401
