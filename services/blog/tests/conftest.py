from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
import sqlalchemy as sa
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app import media
from app.auth.constants import UserRole
from app.auth.models import User
from app.database import get_db
from app.main import app
from app.rate_limit import limiter
from shared.database.postgres import Base, get_async_engine, get_session

# 1x1 transparent PNG
PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        async for session in get_session(session_factory):
            yield session

    app.dependency_overrides[get_db] = _get_db
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def fake_upload(monkeypatch) -> list[tuple[str, str]]:
    """Replace S3 uploads; records (file_name, folder) per call."""
    calls: list[tuple[str, str]] = []

    async def _upload(base64_data, file_name, folder, settings):
        calls.append((file_name, folder))
        return f"https://cdn.test/{folder}/{file_name}"

    monkeypatch.setattr(media, "upload_image", _upload)
    return calls


# ── Account helpers ───────────────────────────────────────────────────────────

@pytest.fixture
def make_user(async_client) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _make(name: str, email: str, password: str = "pw123456") -> dict[str, Any]:
        resp = await async_client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return {
            "id": data["user"]["id"],
            "token": data["token"],
            "email": email,
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _make


@pytest_asyncio.fixture
async def alice(make_user) -> dict[str, Any]:
    return await make_user("Alice", "alice@example.com")


@pytest_asyncio.fixture
async def bob(make_user) -> dict[str, Any]:
    return await make_user("Bob", "bob@example.com")


@pytest_asyncio.fixture
async def admin(make_user, session_factory) -> dict[str, Any]:
    user = await make_user("Admin", "admin@example.com")
    async with session_factory() as session:
        await session.execute(
            sa.update(User).where(User.email == "admin@example.com").values(role=UserRole.ADMIN)
        )
        await session.commit()
    return user


@pytest.fixture
def make_blog(async_client, fake_upload) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _make(author: dict[str, Any], title: str = "Hello", **fields: Any) -> dict[str, Any]:
        body = {
            "title": title,
            "subtitle": "A subtitle",
            "content": "<p>Body</p>",
            "coverImageBase64": PNG_DATA_URI,
            **fields,
        }
        resp = await async_client.post("/api/blogs/", json=body, headers=author["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()["blog"]

    return _make
