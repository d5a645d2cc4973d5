"""
Comments domain: SQLAlchemy ORM models.

Tables:
  comments : flat (unthreaded) comments on a blog
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base

from app.comments.constants import COMMENT_MAX_LENGTH


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    blog_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(sa.String(COMMENT_MAX_LENGTH), nullable=False)
    # No review queue yet: every comment is created approved.
    is_approved: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=True, server_default=sa.true()
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    author = relationship("User", foreign_keys=[author_id], lazy="raise")

    __table_args__ = (
        sa.Index("ix_comments_blog_created", "blog_id", "created_at"),
        sa.Index("ix_comments_author_id", "author_id"),
    )
