"""
Async engine and session plumbing for the blog database.

PostgreSQL (asyncpg) in every deployed environment; SQLite (aiosqlite) for
local runs and the test suite.  The SQLite engine turns on foreign-key
enforcement so ON DELETE CASCADE behaves the same on both backends.
"""
import os
import ssl
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

AsyncSessionFactory = async_sessionmaker[AsyncSession]


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _ssl_connect_args() -> dict[str, Any]:
    """asyncpg ``connect_args`` for DATABASE_SSL=require|verify (with DATABASE_SSL_CERT)."""
    mode = os.environ.get("DATABASE_SSL", "").lower()
    if mode in ("", "disable"):
        return {}

    cert_path = os.environ.get("DATABASE_SSL_CERT", "")
    if mode == "verify" and cert_path and Path(cert_path).exists():
        return {"connect_args": {"ssl": ssl.create_default_context(cafile=cert_path)}}

    # Encrypted, no cert verification
    return {"connect_args": {"ssl": "require"}}


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    if is_sqlite_url(database_url):
        engine = create_async_engine(database_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=int(os.environ.get("DATABASE_POOL_SIZE", "5")),
        max_overflow=10,
        pool_recycle=3600,
        **{**_ssl_connect_args(), **kwargs},
    )


def get_async_session_factory(
    database_url: str,
    *,
    expire_on_commit: bool = False,
    **engine_kwargs: Any,
) -> AsyncSessionFactory:
    return async_sessionmaker(
        get_async_engine(database_url, **engine_kwargs),
        class_=AsyncSession,
        expire_on_commit=expire_on_commit,
        autoflush=False,
    )


async def get_session(
    session_factory: AsyncSessionFactory,
) -> AsyncGenerator[AsyncSession, None]:
    """One session and one transaction per request; rollback on any error."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
