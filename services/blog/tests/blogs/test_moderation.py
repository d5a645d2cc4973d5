async def test_report_and_dismiss(async_client, alice, bob, admin, make_blog) -> None:
    blog = await make_blog(alice, "P")

    resp = await async_client.post(f"/api/blogs/report/{blog['id']}", headers=bob["headers"])
    assert resp.status_code == 200
    assert resp.json()["isReported"] is True
    assert resp.json()["reportCount"] == 1

    resp = await async_client.post(
        f"/api/blogs/admin/reports/{blog['id']}/dismiss", headers=admin["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["isReported"] is False
    assert resp.json()["reportCount"] == 0


async def test_author_cannot_report_own_post(async_client, alice, make_blog) -> None:
    blog = await make_blog(alice)
    resp = await async_client.post(f"/api/blogs/report/{blog['id']}", headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "You cannot report your own post."


async def test_repeat_reports_add_up(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    await async_client.post(f"/api/blogs/report/{blog['id']}", headers=bob["headers"])
    resp = await async_client.post(f"/api/blogs/report/{blog['id']}", headers=bob["headers"])
    assert resp.json()["reportCount"] == 2


async def test_admin_routes_require_admin(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    for method, url in (
        ("GET", "/api/blogs/admin/all-posts"),
        ("GET", "/api/blogs/admin/top-liked"),
        ("DELETE", f"/api/blogs/admin/posts/{blog['id']}"),
        ("POST", f"/api/blogs/admin/reports/{blog['id']}/dismiss"),
        ("GET", "/api/admin/reports"),
    ):
        resp = await async_client.request(method, url, headers=bob["headers"])
        assert resp.status_code == 403, url
        assert resp.json()["message"] == "Not authorized as an administrator"


async def test_reports_queue_order(async_client, alice, bob, admin, make_blog) -> None:
    once = await make_blog(alice, "Once")
    twice = await make_blog(alice, "Twice")
    await make_blog(alice, "Clean")
    await async_client.post(f"/api/blogs/report/{once['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/report/{twice['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/report/{twice['id']}", headers=admin["headers"])

    resp = await async_client.get("/api/admin/reports", headers=admin["headers"])
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()["blogs"]] == [twice["id"], once["id"]]


async def test_admin_listings_include_drafts(async_client, alice, bob, admin, make_blog) -> None:
    draft = await make_blog(alice, "Draft", status="Draft")
    published = await make_blog(alice, "Published")
    await async_client.post(f"/api/blogs/like/{published['id']}", headers=bob["headers"])

    all_posts = await async_client.get("/api/blogs/admin/all-posts", headers=admin["headers"])
    assert {b["id"] for b in all_posts.json()["blogs"]} == {draft["id"], published["id"]}

    top = await async_client.get("/api/blogs/admin/top-liked", headers=admin["headers"])
    assert top.json()["blogs"][0]["id"] == published["id"]


async def test_admin_delete_post(async_client, alice, admin, make_blog) -> None:
    blog = await make_blog(alice)
    url = f"/api/blogs/admin/posts/{blog['id']}"

    assert (await async_client.delete(url, headers=admin["headers"])).status_code == 200
    assert (await async_client.delete(url, headers=admin["headers"])).status_code == 404
