"""
Comments domain: pure business logic (zero FastAPI imports).

blogs.comment_count tracks the number of comment rows per blog.  Creating a
comment bumps it with an in-SQL increment in the same transaction as the
insert; bulk removals recompute it from the comments table.
"""
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.blogs.models import Blog
from app.blogs.service import get_visible_blog
from app.comments.models import Comment


async def list_comments(
    session: AsyncSession,
    blog_id: uuid.UUID,
    *,
    newest_first: bool = False,
) -> list[Comment]:
    """Approved comments on a blog with their authors loaded."""
    order = Comment.created_at.desc() if newest_first else Comment.created_at.asc()
    result = await session.execute(
        sa.select(Comment)
        .where(Comment.blog_id == blog_id, Comment.is_approved.is_(True))
        .options(selectinload(Comment.author))
        .order_by(order)
    )
    return list(result.scalars().all())


async def create_comment(
    session: AsyncSession,
    author_id: uuid.UUID,
    blog_id: uuid.UUID,
    content: str,
    *,
    author_is_admin: bool = False,
) -> Comment:
    await get_visible_blog(session, blog_id, author_id, author_is_admin)
    comment = Comment(blog_id=blog_id, author_id=author_id, content=content)
    session.add(comment)
    await session.flush()
    await session.execute(
        sa.update(Blog)
        .where(Blog.id == blog_id)
        .values(comment_count=Blog.comment_count + 1)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(
        sa.select(Comment)
        .where(Comment.id == comment.id)
        .options(selectinload(Comment.author))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def count_comments(session: AsyncSession, blog_id: uuid.UUID) -> int:
    count = await session.scalar(
        sa.select(sa.func.count()).select_from(Comment).where(Comment.blog_id == blog_id)
    )
    return count or 0


async def recount_comments(session: AsyncSession, blog_ids: list[uuid.UUID]) -> None:
    """Set comment_count of each blog to the number of comment rows it has."""
    if not blog_ids:
        return
    live = (
        sa.select(sa.func.count(Comment.id))
        .where(Comment.blog_id == Blog.id)
        .correlate(Blog)
        .scalar_subquery()
    )
    await session.execute(
        sa.update(Blog)
        .where(Blog.id.in_(blog_ids))
        .values(comment_count=live)
        .execution_options(synchronize_session=False)
    )


async def delete_comments_by_author(session: AsyncSession, author_id: uuid.UUID) -> list[uuid.UUID]:
    """Remove every comment written by ``author_id``; return the affected blog ids."""
    result = await session.execute(
        sa.select(Comment.blog_id).where(Comment.author_id == author_id).distinct()
    )
    blog_ids = list(result.scalars().all())
    await session.execute(
        sa.delete(Comment)
        .where(Comment.author_id == author_id)
        .execution_options(synchronize_session=False)
    )
    await recount_comments(session, blog_ids)
    return blog_ids
