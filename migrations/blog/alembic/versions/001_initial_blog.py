"""Full blog schema: users, follows, blogs, blog_likes, blog_saves, comments

Revision ID: 001
Revises:
Create Date: 2026-10-19

Tables created:
  - users        Accounts, credentials, profile, password-reset token
  - follows      Directed follow edges (one row backs both follow lists)
  - blogs        Posts with visibility status, moderation flags, comment_count
  - blog_likes   One row per (blog, user) like
  - blog_saves   One row per (blog, user) bookmark
  - comments     Flat comments on a blog

PostgreSQL-native ENUM types created:
  - userrole      user / admin
  - blogstatus    Draft / Published
  - blogcategory  Development / AI / Writing / Tech / Others / Finance /
                  Travel / Health / social / news

Downgrade: drops all tables and ENUM types in reverse dependency order.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


_ENUMS = {
    "userrole": ("user", "admin"),
    "blogstatus": ("Draft", "Published"),
    "blogcategory": (
        "Development",
        "AI",
        "Writing",
        "Tech",
        "Others",
        "Finance",
        "Travel",
        "Health",
        "social",
        "news",
    ),
}


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


# ─────────────────────────────────────────────────────────────────────────────
#  UPGRADE
# ─────────────────────────────────────────────────────────────────────────────

def upgrade() -> None:
    # ── 1. PostgreSQL ENUM types ──────────────────────────────────────────────
    # Created before tables so columns can reference them with create_type=False.
    # PostgreSQL has no CREATE TYPE IF NOT EXISTS, so we use a DO/EXCEPTION block.
    for name, values in _ENUMS.items():
        labels = ", ".join(f"'{v}'" for v in values)
        op.execute(
            f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION WHEN duplicate_object THEN NULL;
            END $$;
            """
        )

    # ── 2. users ──────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        # Auth identifiers
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM(name="userrole", create_type=False),
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        # Profile
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("handle", sa.String(50), nullable=True),
        sa.Column("about", sa.String(500), nullable=False),
        sa.Column("profile_picture", sa.String(1000), nullable=False),
        # Password reset
        sa.Column("reset_token_hash", sa.String(64), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("google_id", name="uq_users_google_id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_handle", "users", ["handle"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    # ── 3. follows ────────────────────────────────────────────────────────────
    op.create_table(
        "follows",
        sa.Column(
            "follow_id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("follower_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("following_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("follow_id", name="pk_follows"),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["following_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id != following_id", name="ck_follows_no_self"),
    )
    op.create_index("idx_follows_follower_id", "follows", ["follower_id"])
    op.create_index("idx_follows_following_id", "follows", ["following_id"])

    # ── 4. blogs ──────────────────────────────────────────────────────────────
    op.create_table(
        "blogs",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(150), nullable=False),
        sa.Column("subtitle", sa.String(300), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("cover_image", sa.String(1000), nullable=False),
        sa.Column(
            "category",
            postgresql.ENUM(name="blogcategory", create_type=False),
            nullable=False,
            server_default=sa.text("'Development'"),
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="blogstatus", create_type=False),
            nullable=False,
            server_default=sa.text("'Published'"),
        ),
        # Moderation
        sa.Column("is_reported", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("report_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        # Denormalized; maintained with in-SQL increments and recounts
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_blogs"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("report_count >= 0", name="ck_blogs_report_count_non_negative"),
        sa.CheckConstraint("comment_count >= 0", name="ck_blogs_comment_count_non_negative"),
    )
    op.create_index("ix_blogs_author_created", "blogs", ["author_id", "created_at"])
    op.create_index("ix_blogs_status_created", "blogs", ["status", "created_at"])
    op.create_index("ix_blogs_reported", "blogs", ["is_reported", "report_count"])

    # ── 5. blog_likes / blog_saves ────────────────────────────────────────────
    for table, pk, prefix in (
        ("blog_likes", "like_id", "blog_likes"),
        ("blog_saves", "save_id", "blog_saves"),
    ):
        op.create_table(
            table,
            sa.Column(
                pk,
                postgresql.UUID(as_uuid=True),
                nullable=False,
                server_default=sa.text("gen_random_uuid()"),
            ),
            sa.Column("blog_id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("NOW()"),
            ),
            sa.PrimaryKeyConstraint(pk, name=f"pk_{table}"),
            sa.ForeignKeyConstraint(["blog_id"], ["blogs.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.UniqueConstraint("blog_id", "user_id", name=f"uq_{prefix}_blog_user"),
        )
        op.create_index(f"ix_{prefix}_user_id", table, ["user_id"])

    # ── 6. comments ───────────────────────────────────────────────────────────
    op.create_table(
        "comments",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("blog_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.String(500), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
        sa.ForeignKeyConstraint(["blog_id"], ["blogs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_comments_blog_created", "comments", ["blog_id", "created_at"])
    op.create_index("ix_comments_author_id", "comments", ["author_id"])


# ─────────────────────────────────────────────────────────────────────────────
#  DOWNGRADE
# ─────────────────────────────────────────────────────────────────────────────

def downgrade() -> None:
    # Drop tables in reverse FK dependency order
    op.drop_table("comments")
    op.drop_table("blog_saves")
    op.drop_table("blog_likes")
    op.drop_table("blogs")
    op.drop_table("follows")
    op.drop_table("users")

    # Drop ENUM types (must happen after tables are gone)
    for name in reversed(list(_ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
