import uuid

from app import genai
from app.exceptions import AIGenerationFailed


async def test_create_blog_uploads_cover(async_client, alice, fake_upload) -> None:
    resp = await async_client.post(
        "/api/blogs/",
        json={
            "title": "First post",
            "subtitle": "Hello world",
            "content": "<p>Hi</p>",
            "category": "Tech",
            "coverImageBase64": "aGVsbG8=",
            "fileName": "cover.jpg",
        },
        headers=alice["headers"],
    )
    assert resp.status_code == 201
    blog = resp.json()["blog"]
    assert blog["coverImage"] == "https://cdn.test/blog_covers/cover.jpg"
    assert blog["status"] == "Published"
    assert blog["category"] == "Tech"
    assert blog["author"]["id"] == alice["id"]
    assert blog["likeCount"] == 0
    assert blog["commentCount"] == 0
    assert fake_upload == [("cover.jpg", "blog_covers")]


async def test_create_blog_requires_cover(async_client, alice, fake_upload) -> None:
    resp = await async_client.post(
        "/api/blogs/",
        json={"title": "No cover", "content": "<p>x</p>"},
        headers=alice["headers"],
    )
    assert resp.status_code == 400
    assert fake_upload == []


async def test_create_blog_rejects_undecodable_cover(async_client, alice) -> None:
    resp = await async_client.post(
        "/api/blogs/",
        json={"title": "Bad cover", "content": "<p>x</p>", "coverImageBase64": "not base64!!"},
        headers=alice["headers"],
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid image data."

    listing = await async_client.get("/api/blogs/")
    assert listing.json()["count"] == 0


async def test_public_listing_hides_drafts_and_content(async_client, alice, make_blog) -> None:
    published = await make_blog(alice, "Visible")
    await make_blog(alice, "Hidden", status="Draft")

    resp = await async_client.get("/api/blogs/")
    assert resp.status_code == 200
    blogs = resp.json()["blogs"]
    assert [b["id"] for b in blogs] == [published["id"]]
    assert "content" not in blogs[0]


async def test_draft_detail_visibility(async_client, alice, bob, admin, make_blog) -> None:
    draft = await make_blog(alice, "Secret", status="Draft")
    url = f"/api/blogs/{draft['id']}"

    assert (await async_client.get(url)).status_code == 404
    assert (await async_client.get(url, headers=bob["headers"])).status_code == 404
    assert (await async_client.get(url, headers=alice["headers"])).status_code == 200
    assert (await async_client.get(url, headers=admin["headers"])).status_code == 200


async def test_blog_detail_shape(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice, "Detail")
    await async_client.post(f"/api/blogs/follow/{alice['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/like/{blog['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/save/{blog['id']}", headers=bob["headers"])
    await async_client.post(
        f"/api/comments/{blog['id']}", json={"content": "Nice"}, headers=bob["headers"]
    )

    resp = await async_client.get(f"/api/blogs/{blog['id']}")
    assert resp.status_code == 200
    detail = resp.json()["blog"]
    assert detail["content"] == "<p>Body</p>"
    assert detail["author"]["followers"] == [bob["id"]]
    assert detail["likes"] == [bob["id"]]
    assert detail["savedBy"] == [bob["id"]]
    assert detail["likeCount"] == 1
    assert detail["commentCount"] == 1
    assert [c["content"] for c in detail["comments"]] == ["Nice"]


async def test_unknown_blog_is_404(async_client) -> None:
    resp = await async_client.get(f"/api/blogs/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Blog not found"


async def test_like_toggle_round_trip(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    url = f"/api/blogs/like/{blog['id']}"

    first = await async_client.post(url, headers=bob["headers"])
    assert first.json()["liked"] is True
    assert first.json()["likesCount"] == 1

    again = await async_client.post(url, headers=alice["headers"])
    assert again.json()["likesCount"] == 2

    undo = await async_client.post(url, headers=bob["headers"])
    assert undo.json()["liked"] is False
    assert undo.json()["likesCount"] == 1


async def test_cannot_like_someone_elses_draft(async_client, alice, bob, make_blog) -> None:
    draft = await make_blog(alice, status="Draft")
    resp = await async_client.post(f"/api/blogs/like/{draft['id']}", headers=bob["headers"])
    assert resp.status_code == 404


async def test_save_toggle_and_saved_list(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    url = f"/api/blogs/save/{blog['id']}"

    assert (await async_client.post(url, headers=bob["headers"])).json()["saved"] is True
    saved = await async_client.get("/api/blogs/user/saved", headers=bob["headers"])
    assert [b["id"] for b in saved.json()["blogs"]] == [blog["id"]]

    assert (await async_client.post(url, headers=bob["headers"])).json()["saved"] is False
    saved = await async_client.get("/api/blogs/user/saved", headers=bob["headers"])
    assert saved.json()["blogs"] == []


async def test_popular_ranks_by_likes_then_recency(
    async_client, alice, bob, admin, make_blog
) -> None:
    older = await make_blog(alice, "Older")
    liked = await make_blog(alice, "Liked")
    newer = await make_blog(alice, "Newer")
    await make_blog(alice, "Draft", status="Draft")
    await async_client.post(f"/api/blogs/like/{liked['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/like/{liked['id']}", headers=admin["headers"])

    resp = await async_client.get("/api/blogs/popular")
    ids = [b["id"] for b in resp.json()["blogs"]]
    assert ids == [liked["id"], newer["id"], older["id"]]
    assert resp.json()["blogs"][0]["likeCount"] == 2


async def test_category_listing(async_client, alice, make_blog) -> None:
    tech = await make_blog(alice, "Tech post", category="Tech")
    await make_blog(alice, "Travel post", category="Travel")

    resp = await async_client.get("/api/blogs/category", params={"category": "Tech"})
    assert [b["id"] for b in resp.json()["blogs"]] == [tech["id"]]

    everything = await async_client.get("/api/blogs/category", params={"category": "all"})
    assert everything.json()["count"] == 2

    unknown = await async_client.get("/api/blogs/category", params={"category": "Cooking"})
    assert unknown.json()["blogs"] == []


async def test_author_listing_and_own_views(async_client, alice, make_blog) -> None:
    published = await make_blog(alice, "Public")
    draft = await make_blog(alice, "Private", status="Draft")

    public = await async_client.get(f"/api/blogs/author/{alice['id']}")
    assert [b["id"] for b in public.json()["blogs"]] == [published["id"]]

    mine = await async_client.get("/api/blogs/user", headers=alice["headers"])
    assert {b["id"] for b in mine.json()["blogs"]} == {published["id"], draft["id"]}

    counts = await async_client.get("/api/blogs/dashboard/counts", headers=alice["headers"])
    assert counts.json() == {"success": True, "totalBlogs": 2, "totalDrafts": 1, "totalSaved": 0}


async def test_user_popular(async_client, alice, bob, make_blog) -> None:
    first = await make_blog(alice, "One")
    second = await make_blog(alice, "Two")
    await async_client.post(f"/api/blogs/like/{first['id']}", headers=bob["headers"])

    resp = await async_client.get("/api/blogs/user/popular", headers=alice["headers"])
    assert [b["id"] for b in resp.json()["blogs"]] == [first["id"], second["id"]]


async def test_feed(async_client, alice, bob, make_blog) -> None:
    empty = await async_client.get("/api/blogs/user/feed", headers=bob["headers"])
    assert empty.json()["blogs"] == []
    assert empty.json()["message"] == "You are not following any authors."

    blog = await make_blog(alice, "Feed item")
    await make_blog(alice, "Feed draft", status="Draft")
    await async_client.post(f"/api/blogs/follow/{alice['id']}", headers=bob["headers"])

    feed = await async_client.get("/api/blogs/user/feed", headers=bob["headers"])
    assert [b["id"] for b in feed.json()["blogs"]] == [blog["id"]]


async def test_update_blog(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice, "Before")
    url = f"/api/blogs/{blog['id']}"

    denied = await async_client.put(url, json={"title": "Hijack"}, headers=bob["headers"])
    assert denied.status_code == 403
    assert denied.json()["message"] == "You cannot edit this blog"

    resp = await async_client.put(
        url, json={"title": "After", "status": "Draft"}, headers=alice["headers"]
    )
    assert resp.status_code == 200
    updated = resp.json()["blog"]
    assert updated["title"] == "After"
    assert updated["status"] == "Draft"
    assert updated["subtitle"] == "A subtitle"


async def test_update_blog_replaces_cover(async_client, alice, make_blog, fake_upload) -> None:
    blog = await make_blog(alice)
    resp = await async_client.put(
        f"/api/blogs/{blog['id']}",
        json={"coverImageBase64": "aGVsbG8=", "fileName": "new.png"},
        headers=alice["headers"],
    )
    assert resp.json()["blog"]["coverImage"] == "https://cdn.test/blog_covers/new.png"


async def test_delete_blog_cascades(async_client, alice, bob, make_blog) -> None:
    blog = await make_blog(alice)
    await async_client.post(f"/api/blogs/like/{blog['id']}", headers=bob["headers"])
    await async_client.post(f"/api/blogs/save/{blog['id']}", headers=bob["headers"])
    await async_client.post(
        f"/api/comments/{blog['id']}", json={"content": "bye"}, headers=bob["headers"]
    )

    denied = await async_client.delete(f"/api/blogs/{blog['id']}", headers=bob["headers"])
    assert denied.status_code == 403

    resp = await async_client.delete(f"/api/blogs/{blog['id']}", headers=alice["headers"])
    assert resp.status_code == 200
    assert (await async_client.get(f"/api/blogs/{blog['id']}")).status_code == 404
    saved = await async_client.get("/api/blogs/user/saved", headers=bob["headers"])
    assert saved.json()["blogs"] == []


async def test_generate_ai_content(async_client, alice, monkeypatch) -> None:
    async def _generate(title, subtitle, category, settings):
        return f"<h2>{title}</h2><p>{subtitle}</p>"

    monkeypatch.setattr(genai, "generate_blog_content", _generate)

    missing = await async_client.post(
        "/api/blogs/generate-ai-content", json={"title": "Only title"}, headers=alice["headers"]
    )
    assert missing.status_code == 400
    assert missing.json()["message"] == "Title and subtitle are required for AI generation."

    resp = await async_client.post(
        "/api/blogs/generate-ai-content",
        json={"title": "Async", "subtitle": "In Python", "category": "Tech"},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["content"] == "<h2>Async</h2><p>In Python</p>"


async def test_generate_ai_content_failure(async_client, alice, monkeypatch) -> None:
    async def _generate(title, subtitle, category, settings):
        raise AIGenerationFailed()

    monkeypatch.setattr(genai, "generate_blog_content", _generate)

    resp = await async_client.post(
        "/api/blogs/generate-ai-content",
        json={"title": "A", "subtitle": "B"},
        headers=alice["headers"],
    )
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to generate content from AI."
