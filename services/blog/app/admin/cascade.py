"""
Cascading user deletion.

Deleting an account walks an explicit, ordered list of steps instead of
relying on foreign-key cascades, so every dependent set is cleaned the same
way on PostgreSQL and SQLite:

  1. blogs the user wrote, with their comments, likes and saves
  2. comments the user wrote elsewhere, then comment_count of those blogs is
     recomputed from the comments table
  3. follow edges in both directions
  4. likes and saves the user left on other blogs
  5. the user row

Each step is idempotent.  All of them run inside the request transaction, so
a failure part-way rolls the whole cascade back and a retry starts clean.
"""
from __future__ import annotations

import logging
import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.blogs.models import Blog, BlogLike, BlogSave
from app.blogs.service import purge_blog
from app.comments.service import delete_comments_by_author
from app.exceptions import CannotDeleteSelf, UserNotFound
from app.social_graph.service import remove_all_edges

logger = logging.getLogger(__name__)


async def delete_user(session: AsyncSession, admin_id: uuid.UUID, user_id: uuid.UUID) -> None:
    if user_id == admin_id:
        raise CannotDeleteSelf()
    if await session.get(User, user_id) is None:
        raise UserNotFound()

    blog_ids = list(
        (await session.execute(sa.select(Blog.id).where(Blog.author_id == user_id))).scalars().all()
    )
    for blog_id in blog_ids:
        await purge_blog(session, blog_id)

    touched = await delete_comments_by_author(session, user_id)
    edges = await remove_all_edges(session, user_id)

    await session.execute(sa.delete(BlogLike).where(BlogLike.user_id == user_id))
    await session.execute(sa.delete(BlogSave).where(BlogSave.user_id == user_id))
    await session.execute(
        sa.delete(User).where(User.id == user_id).execution_options(synchronize_session="fetch")
    )

    logger.info(
        "Admin %s deleted user %s: %d blogs, comments on %d blogs, %d follow edges",
        admin_id,
        user_id,
        len(blog_ids),
        len(touched),
        edges,
    )
