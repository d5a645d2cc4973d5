async def test_health(async_client) -> None:
    response = await async_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "blog"


async def test_request_id_is_echoed(async_client) -> None:
    response = await async_client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


async def test_unknown_route_uses_error_envelope(async_client) -> None:
    response = await async_client.get("/api/nothing-here", headers={"X-Request-ID": "r-1"})
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["requestId"] == "r-1"
