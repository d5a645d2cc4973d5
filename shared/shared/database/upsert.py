"""
Atomic set-membership primitives built on INSERT ... ON CONFLICT DO NOTHING.

Replaces the check-then-insert pattern for edge tables (follows, likes,
saves) so that concurrent requests can never create a duplicate edge or
fail on a unique-constraint violation.

Usage:
    added = await insert_if_absent(session, Follow, follower_id=a, following_id=b)
    removed = await delete_if_present(session, Follow, follower_id=a, following_id=b)
"""
from typing import Any

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def _insert_for(session: AsyncSession, model: Any):
    dialect = session.bind.dialect.name if session.bind is not None else "postgresql"
    if dialect == "sqlite":
        return sqlite_insert(model)
    if dialect == "postgresql":
        return pg_insert(model)
    raise ValueError(f"Unsupported SQL dialect for insert_if_absent: {dialect!r}")


async def insert_if_absent(session: AsyncSession, model: Any, **values: Any) -> bool:
    """
    Insert one row unless it collides with an existing unique key.

    Returns True when this call created the row, False when it already existed.
    """
    stmt = _insert_for(session, model).values(**values).on_conflict_do_nothing()
    result = await session.execute(stmt)
    return result.rowcount == 1


async def delete_if_present(session: AsyncSession, model: Any, **match: Any) -> bool:
    """
    Delete the row matching every column in ``match``.

    Returns True when a row was removed, False when nothing matched.
    """
    conditions = [getattr(model, column) == value for column, value in match.items()]
    result = await session.execute(sa.delete(model).where(*conditions))
    return result.rowcount > 0
