"""
Blogs domain: SQLAlchemy ORM models.

Tables:
  blogs      : posts with visibility status and moderation flags
  blog_likes : one row per (blog, user) like
  blog_saves : one row per (blog, user) bookmark

Like counts are derived from blog_likes on read.  comment_count is
denormalized and only ever changed by in-SQL increments issued in the same
transaction as the comment insert/delete.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base

from app.blogs.constants import (
    SUBTITLE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    BlogCategory,
    BlogStatus,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Blog(Base):
    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ── Content ───────────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(sa.String(TITLE_MAX_LENGTH), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(
        sa.String(SUBTITLE_MAX_LENGTH), nullable=True
    )
    # HTML produced by the rich-text editor (or the AI draft endpoint)
    content: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    cover_image: Mapped[str] = mapped_column(sa.String(1000), nullable=False)
    category: Mapped[BlogCategory] = mapped_column(
        sa.Enum(
            BlogCategory,
            name="blogcategory",
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
        default=BlogCategory.DEVELOPMENT,
    )
    status: Mapped[BlogStatus] = mapped_column(
        sa.Enum(
            BlogStatus,
            name="blogstatus",
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
        default=BlogStatus.PUBLISHED,
    )

    # ── Moderation ────────────────────────────────────────────────────────────
    is_reported: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False, server_default=sa.false()
    )
    report_count: Mapped[int] = mapped_column(
        sa.Integer(), nullable=False, default=0, server_default=sa.text("0")
    )

    # ── Engagement ────────────────────────────────────────────────────────────
    comment_count: Mapped[int] = mapped_column(
        sa.Integer(), nullable=False, default=0, server_default=sa.text("0")
    )

    # ── Timestamps ────────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    author = relationship("User", foreign_keys=[author_id], lazy="raise")

    __table_args__ = (
        sa.CheckConstraint("report_count >= 0", name="ck_blogs_report_count_non_negative"),
        sa.CheckConstraint("comment_count >= 0", name="ck_blogs_comment_count_non_negative"),
        sa.Index("ix_blogs_author_created", "author_id", "created_at"),
        sa.Index("ix_blogs_status_created", "status", "created_at"),
        sa.Index("ix_blogs_reported", "is_reported", "report_count"),
    )


class BlogLike(Base):
    __tablename__ = "blog_likes"

    like_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    blog_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    __table_args__ = (
        sa.UniqueConstraint("blog_id", "user_id", name="uq_blog_likes_blog_user"),
        sa.Index("ix_blog_likes_user_id", "user_id"),
    )


class BlogSave(Base):
    __tablename__ = "blog_saves"

    save_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    blog_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    __table_args__ = (
        sa.UniqueConstraint("blog_id", "user_id", name="uq_blog_saves_blog_user"),
        sa.Index("ix_blog_saves_user_id", "user_id"),
    )
