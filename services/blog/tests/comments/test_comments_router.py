async def test_comment_lifecycle(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    url = f"/api/comments/{blog['id']}"

    first = await async_client.post(url, json={"content": "First!"}, headers=bob["headers"])
    assert first.status_code == 201
    comment = first.json()["comment"]
    assert comment["author"]["id"] == bob["id"]
    assert comment["isApproved"] is True

    await async_client.post(url, json={"content": "Second"}, headers=alice["headers"])

    listing = await async_client.get(url)
    assert listing.status_code == 200
    assert [c["content"] for c in listing.json()["comments"]] == ["First!", "Second"]


async def test_comment_count_matches_rows(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    for i in range(3):
        await async_client.post(
            f"/api/comments/{blog['id']}", json={"content": f"c{i}"}, headers=bob["headers"]
        )

    listing = await async_client.get("/api/blogs/")
    assert listing.json()["blogs"][0]["commentCount"] == 3
    comments = await async_client.get(f"/api/comments/{blog['id']}")
    assert len(comments.json()["comments"]) == 3


async def test_comment_length_limits(async_client, alice, make_blog) -> None:
    blog = await make_blog(alice)
    url = f"/api/comments/{blog['id']}"

    too_long = await async_client.post(url, json={"content": "x" * 501}, headers=alice["headers"])
    assert too_long.status_code == 400
    blank = await async_client.post(url, json={"content": "   "}, headers=alice["headers"])
    assert blank.status_code == 400
    at_limit = await async_client.post(url, json={"content": "x" * 500}, headers=alice["headers"])
    assert at_limit.status_code == 201


async def test_comments_on_hidden_draft(async_client, alice, bob, make_blog) -> None:
    draft = await make_blog(alice, status="Draft")
    url = f"/api/comments/{draft['id']}"

    assert (await async_client.get(url)).status_code == 404
    resp = await async_client.post(url, json={"content": "sneaky"}, headers=bob["headers"])
    assert resp.status_code == 404


async def test_comment_requires_auth(async_client, alice, make_blog) -> None:
    blog = await make_blog(alice)
    resp = await async_client.post(f"/api/comments/{blog['id']}", json={"content": "hi"})
    assert resp.status_code == 401
