"""
Blog service: SQLAlchemy ORM models for the auth domain.

Tables owned by this module:
  - users   Accounts, credentials, public profile and password-reset state

Follow edges live in app.social_graph.models; the followers / following
projections of a user are both read from that single table.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

from app.auth.constants import DEFAULT_ABOUT, DEFAULT_PROFILE_PICTURE, UserRole


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    # ── Primary key ──────────────────────────────────────────────────────────
    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )

    # ── Authentication identifiers ────────────────────────────────────────────
    # Stored lower-cased; lookups are case-insensitive.
    email: Mapped[str] = mapped_column(
        sa.String(255), unique=True, nullable=False, index=True
    )
    # nullable: Google-only accounts have no password
    password_hash: Mapped[str | None] = mapped_column(
        sa.String(255), nullable=True
    )
    google_id: Mapped[str | None] = mapped_column(
        sa.String(255), unique=True, nullable=True
    )
    role: Mapped[UserRole] = mapped_column(
        sa.Enum(
            UserRole,
            name="userrole",
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
        default=UserRole.USER,
        index=True,
    )

    # ── Profile fields ────────────────────────────────────────────────────────
    name: Mapped[str] = mapped_column(sa.String(150), nullable=False)
    # Unique where present; NULLs never collide.
    handle: Mapped[str | None] = mapped_column(
        sa.String(50), unique=True, nullable=True, index=True
    )
    about: Mapped[str] = mapped_column(
        sa.String(500), nullable=False, default=DEFAULT_ABOUT
    )
    profile_picture: Mapped[str] = mapped_column(
        sa.String(1000), nullable=False, default=DEFAULT_PROFILE_PICTURE
    )

    # ── Password reset (single outstanding link per account) ──────────────────
    reset_token_hash: Mapped[str | None] = mapped_column(
        sa.String(64), nullable=True
    )
    reset_token_expires_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )

    # ── Timestamps ────────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    @property
    def roles(self) -> list[str]:
        """Token roles claim; admins also hold the plain user role."""
        if self.role == UserRole.ADMIN:
            return [UserRole.USER.value, UserRole.ADMIN.value]
        return [UserRole.USER.value]

    def __repr__(self) -> str:
        return f"<User {self.email} role={self.role.value}>"
