"""
Blogs domain: pure business logic (zero FastAPI imports).

Visibility rules:
  - Draft posts are returned only to their author or an admin; anyone else
    gets the same 404 as for a missing post.
  - Public listings always filter status = Published; admin listings do not.

Engagement rules:
  - Like / save are toggles built on conditional delete + insert-on-conflict,
    never read-then-write.
  - like_count is computed from blog_likes on every read.
  - Popular rankings order by like_count desc, then created_at desc.

Moderation rules:
  - Any user except the author may report a post; every report sets
    is_reported and bumps report_count (no per-user de-duplication).
  - Dismissing clears both.
"""
from __future__ import annotations

import uuid
from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer, selectinload

from shared.database.upsert import delete_if_present, insert_if_absent

from app.blogs.constants import ALL_CATEGORIES, BlogCategory, BlogStatus
from app.blogs.models import Blog, BlogLike, BlogSave
from app.comments.models import Comment
from app.exceptions import BlogNotFound, CannotDeleteBlog, CannotEditBlog, CannotReportOwnBlog

# Fields an author may change through PUT /blogs/{id}.
EDITABLE_FIELDS = frozenset({"title", "subtitle", "content", "category", "status", "cover_image"})


# ── Query building blocks ──────────────────────────────────────────────────────

def _like_count_column():
    return (
        sa.select(sa.func.count(BlogLike.like_id))
        .where(BlogLike.blog_id == Blog.id)
        .correlate(Blog)
        .scalar_subquery()
        .label("like_count")
    )


def _listing(*, with_content: bool = False) -> tuple[sa.Select, Any]:
    """SELECT (Blog, like_count) with the author eager-loaded."""
    like_count = _like_count_column()
    stmt = (
        sa.select(Blog, like_count)
        .options(selectinload(Blog.author))
        .execution_options(populate_existing=True)
    )
    if not with_content:
        stmt = stmt.options(defer(Blog.content))
    return stmt, like_count


def _category_filter(stmt: sa.Select, category: str | None) -> sa.Select:
    if not category or category == ALL_CATEGORIES:
        return stmt
    try:
        return stmt.where(Blog.category == BlogCategory(category))
    except ValueError:
        # Unknown category: nothing can match.
        return stmt.where(sa.false())


async def _rows(session: AsyncSession, stmt: sa.Select) -> list[tuple[Blog, int]]:
    result = await session.execute(stmt)
    return [(blog, like_count) for blog, like_count in result.all()]


def can_view(blog: Blog, viewer_id: uuid.UUID | None, viewer_is_admin: bool = False) -> bool:
    if blog.status == BlogStatus.PUBLISHED:
        return True
    return viewer_id is not None and (viewer_id == blog.author_id or viewer_is_admin)


# ── Single blog ────────────────────────────────────────────────────────────────

async def get_blog(session: AsyncSession, blog_id: uuid.UUID) -> Blog:
    blog = await session.get(Blog, blog_id)
    if blog is None:
        raise BlogNotFound()
    return blog


async def get_visible_blog(
    session: AsyncSession,
    blog_id: uuid.UUID,
    viewer_id: uuid.UUID | None,
    viewer_is_admin: bool = False,
) -> Blog:
    """Load a blog the viewer is allowed to see; drafts of others look missing."""
    blog = await get_blog(session, blog_id)
    if not can_view(blog, viewer_id, viewer_is_admin):
        raise BlogNotFound()
    return blog


async def get_blog_with_stats(
    session: AsyncSession, blog_id: uuid.UUID
) -> tuple[Blog, int]:
    stmt, _ = _listing(with_content=True)
    rows = await _rows(session, stmt.where(Blog.id == blog_id))
    if not rows:
        raise BlogNotFound()
    return rows[0]


async def get_engagement_ids(
    session: AsyncSession, blog_id: uuid.UUID
) -> tuple[list[uuid.UUID], list[uuid.UUID]]:
    """Return (user ids who liked, user ids who saved) for one blog."""
    likes = await session.execute(
        sa.select(BlogLike.user_id).where(BlogLike.blog_id == blog_id).order_by(BlogLike.created_at)
    )
    saves = await session.execute(
        sa.select(BlogSave.user_id).where(BlogSave.blog_id == blog_id).order_by(BlogSave.created_at)
    )
    return list(likes.scalars().all()), list(saves.scalars().all())


# ── Create / update / delete ───────────────────────────────────────────────────

async def create_blog(
    session: AsyncSession,
    author_id: uuid.UUID,
    *,
    title: str,
    content: str,
    cover_image: str,
    subtitle: str | None = None,
    category: BlogCategory = BlogCategory.DEVELOPMENT,
    status: BlogStatus = BlogStatus.PUBLISHED,
) -> Blog:
    blog = Blog(
        author_id=author_id,
        title=title,
        subtitle=subtitle,
        content=content,
        cover_image=cover_image,
        category=category,
        status=status,
    )
    session.add(blog)
    await session.flush()
    return blog


async def assert_can_edit(session: AsyncSession, actor_id: uuid.UUID, blog_id: uuid.UUID) -> Blog:
    blog = await get_blog(session, blog_id)
    if blog.author_id != actor_id:
        raise CannotEditBlog()
    return blog


async def update_blog(
    session: AsyncSession,
    actor_id: uuid.UUID,
    blog_id: uuid.UUID,
    changes: dict[str, Any],
) -> Blog:
    """Apply ``changes`` (restricted to EDITABLE_FIELDS) to a blog the actor wrote."""
    blog = await assert_can_edit(session, actor_id, blog_id)
    for field, value in changes.items():
        if field in EDITABLE_FIELDS:
            setattr(blog, field, value)
    await session.flush()
    return blog


async def purge_blog(session: AsyncSession, blog_id: uuid.UUID) -> bool:
    """
    Delete a blog and everything hanging off it: comments, likes, saves.

    Each statement is idempotent; returns True when the blog row itself was
    removed by this call.
    """
    await session.execute(sa.delete(Comment).where(Comment.blog_id == blog_id))
    await session.execute(sa.delete(BlogLike).where(BlogLike.blog_id == blog_id))
    await session.execute(sa.delete(BlogSave).where(BlogSave.blog_id == blog_id))
    result = await session.execute(sa.delete(Blog).where(Blog.id == blog_id))
    return result.rowcount > 0


async def delete_blog(session: AsyncSession, actor_id: uuid.UUID, blog_id: uuid.UUID) -> None:
    blog = await get_blog(session, blog_id)
    if blog.author_id != actor_id:
        raise CannotDeleteBlog()
    await purge_blog(session, blog_id)


async def admin_delete_blog(session: AsyncSession, blog_id: uuid.UUID) -> None:
    if not await purge_blog(session, blog_id):
        raise BlogNotFound()


# ── Public listings ────────────────────────────────────────────────────────────

async def list_published(
    session: AsyncSession, *, category: str | None = None
) -> list[tuple[Blog, int]]:
    """Published blogs, newest first, optionally filtered by category."""
    stmt, _ = _listing()
    stmt = stmt.where(Blog.status == BlogStatus.PUBLISHED)
    stmt = _category_filter(stmt, category).order_by(Blog.created_at.desc())
    return await _rows(session, stmt)


async def list_popular(
    session: AsyncSession,
    *,
    limit: int,
    category: str | None = None,
    author_id: uuid.UUID | None = None,
    include_drafts: bool = False,
) -> list[tuple[Blog, int]]:
    """Blogs ranked by like count desc, then newest first (published only by default)."""
    stmt, like_count = _listing()
    if not include_drafts:
        stmt = stmt.where(Blog.status == BlogStatus.PUBLISHED)
    stmt = _category_filter(stmt, category)
    if author_id is not None:
        stmt = stmt.where(Blog.author_id == author_id)
    stmt = stmt.order_by(like_count.desc(), Blog.created_at.desc()).limit(limit)
    return await _rows(session, stmt)


async def list_by_author(
    session: AsyncSession,
    author_id: uuid.UUID,
    *,
    published_only: bool = True,
) -> list[tuple[Blog, int]]:
    stmt, _ = _listing()
    stmt = stmt.where(Blog.author_id == author_id)
    if published_only:
        stmt = stmt.where(Blog.status == BlogStatus.PUBLISHED)
    return await _rows(session, stmt.order_by(Blog.created_at.desc()))


async def list_saved(session: AsyncSession, user_id: uuid.UUID) -> list[tuple[Blog, int]]:
    """Blogs the user saved that they may still see (others' drafts drop out)."""
    stmt, _ = _listing()
    stmt = (
        stmt.join(BlogSave, BlogSave.blog_id == Blog.id)
        .where(BlogSave.user_id == user_id)
        .where(sa.or_(Blog.status == BlogStatus.PUBLISHED, Blog.author_id == user_id))
        .order_by(Blog.created_at.desc())
    )
    return await _rows(session, stmt)


async def list_feed(
    session: AsyncSession,
    author_ids: list[uuid.UUID],
    *,
    limit: int,
) -> list[tuple[Blog, int]]:
    if not author_ids:
        return []
    stmt, _ = _listing()
    stmt = (
        stmt.where(Blog.author_id.in_(author_ids), Blog.status == BlogStatus.PUBLISHED)
        .order_by(Blog.created_at.desc())
        .limit(limit)
    )
    return await _rows(session, stmt)


async def dashboard_counts(session: AsyncSession, user_id: uuid.UUID) -> dict[str, int]:
    total_blogs = await session.scalar(
        sa.select(sa.func.count()).select_from(Blog).where(Blog.author_id == user_id)
    )
    total_drafts = await session.scalar(
        sa.select(sa.func.count()).select_from(Blog).where(
            Blog.author_id == user_id, Blog.status == BlogStatus.DRAFT
        )
    )
    total_saved = await session.scalar(
        sa.select(sa.func.count()).select_from(BlogSave).where(BlogSave.user_id == user_id)
    )
    return {
        "total_blogs": total_blogs or 0,
        "total_drafts": total_drafts or 0,
        "total_saved": total_saved or 0,
    }


# ── Engagement toggles ─────────────────────────────────────────────────────────

async def count_likes(session: AsyncSession, blog_id: uuid.UUID) -> int:
    count = await session.scalar(
        sa.select(sa.func.count()).select_from(BlogLike).where(BlogLike.blog_id == blog_id)
    )
    return count or 0


async def toggle_like(
    session: AsyncSession,
    user_id: uuid.UUID,
    blog_id: uuid.UUID,
    *,
    user_is_admin: bool = False,
) -> tuple[bool, int]:
    """Flip the user's like.  Returns (liked, likes_count)."""
    await get_visible_blog(session, blog_id, user_id, user_is_admin)
    if await delete_if_present(session, BlogLike, blog_id=blog_id, user_id=user_id):
        liked = False
    else:
        await insert_if_absent(session, BlogLike, blog_id=blog_id, user_id=user_id)
        liked = True
    return liked, await count_likes(session, blog_id)


async def toggle_save(
    session: AsyncSession,
    user_id: uuid.UUID,
    blog_id: uuid.UUID,
    *,
    user_is_admin: bool = False,
) -> bool:
    """Flip the user's bookmark.  Returns True when the blog is now saved."""
    await get_visible_blog(session, blog_id, user_id, user_is_admin)
    if await delete_if_present(session, BlogSave, blog_id=blog_id, user_id=user_id):
        return False
    await insert_if_absent(session, BlogSave, blog_id=blog_id, user_id=user_id)
    return True


# ── Moderation ─────────────────────────────────────────────────────────────────

async def report_blog(
    session: AsyncSession,
    user_id: uuid.UUID,
    blog_id: uuid.UUID,
    *,
    user_is_admin: bool = False,
) -> None:
    blog = await get_visible_blog(session, blog_id, user_id, user_is_admin)
    if blog.author_id == user_id:
        raise CannotReportOwnBlog()
    await session.execute(
        sa.update(Blog)
        .where(Blog.id == blog_id)
        .values(is_reported=True, report_count=Blog.report_count + 1)
        .execution_options(synchronize_session=False)
    )
    await session.refresh(blog)


async def dismiss_report(session: AsyncSession, blog_id: uuid.UUID) -> Blog:
    blog = await get_blog(session, blog_id)
    blog.is_reported = False
    blog.report_count = 0
    await session.flush()
    return blog


# ── Admin listings ─────────────────────────────────────────────────────────────

async def list_all(session: AsyncSession) -> list[tuple[Blog, int]]:
    """Every blog regardless of status, newest first."""
    stmt, _ = _listing()
    return await _rows(session, stmt.order_by(Blog.created_at.desc()))


async def list_reported(session: AsyncSession) -> list[tuple[Blog, int]]:
    """Reported blogs, most-reported first, then newest first."""
    stmt, _ = _listing()
    stmt = stmt.where(Blog.is_reported.is_(True)).order_by(
        Blog.report_count.desc(), Blog.created_at.desc()
    )
    return await _rows(session, stmt)


async def count_published(session: AsyncSession) -> int:
    count = await session.scalar(
        sa.select(sa.func.count()).select_from(Blog).where(Blog.status == BlogStatus.PUBLISHED)
    )
    return count or 0


async def count_reported(session: AsyncSession) -> int:
    count = await session.scalar(
        sa.select(sa.func.count()).select_from(Blog).where(Blog.is_reported.is_(True))
    )
    return count or 0


async def count_published_by_author(
    session: AsyncSession, author_ids: list[uuid.UUID]
) -> dict[uuid.UUID, int]:
    """Published post counts for a batch of authors (absent keys mean zero)."""
    if not author_ids:
        return {}
    result = await session.execute(
        sa.select(Blog.author_id, sa.func.count())
        .where(Blog.author_id.in_(author_ids), Blog.status == BlogStatus.PUBLISHED)
        .group_by(Blog.author_id)
    )
    return {row[0]: row[1] for row in result.all()}
