from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.database.postgres import get_async_session_factory, get_session

# Import all model modules so SQLAlchemy's Base.metadata is populated.
# Required for Alembic autogenerate and create_all().
import app.auth.models  # noqa: F401
import app.blogs.models  # noqa: F401
import app.comments.models  # noqa: F401
import app.social_graph.models  # noqa: F401

_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_db(database_url: str) -> None:
    global _session_factory
    _session_factory = get_async_session_factory(database_url, expire_on_commit=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("Database not initialized")
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session(get_session_factory()):
        yield session
