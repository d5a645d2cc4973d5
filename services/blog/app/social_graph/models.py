"""
Social graph domain: SQLAlchemy ORM models.

Tables:
  follows : directed follow edges (follower → following)

A single row is both "A follows B" and "B is followed by A", so the
followers and following lists of two users can never disagree.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Follow(Base):
    __tablename__ = "follows"

    follow_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    follower_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    following_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    # Relationships for eager loading user info
    follower = relationship("User", foreign_keys=[follower_id], lazy="raise")
    following = relationship("User", foreign_keys=[following_id], lazy="raise")

    __table_args__ = (
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id != following_id", name="ck_follows_no_self"),
        sa.Index("idx_follows_follower_id", "follower_id"),
        sa.Index("idx_follows_following_id", "following_id"),
    )
