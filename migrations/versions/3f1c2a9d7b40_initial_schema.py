"""initial_schema

Create the engagement schema for VidNest:
- Users, videos and tweets (read-side copies of the entities likes and
  comments point at)
- Comments (attached to exactly one video or tweet, threaded to any depth)
- Likes (polymorphic: exactly one of video / comment / tweet per row, one
  like per user per target enforced by a partial unique index per kind)

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-12 09:14:52.301877

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; older servers need pgcrypto
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    # ========================================================================
    # VIDEOS table
    # ========================================================================
    op.create_table(
        "videos",
        _id_column(),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column(
            "is_published", sa.Boolean(), nullable=False, server_default="true"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_videos_owner_id", "videos", ["owner_id"])

    # ========================================================================
    # TWEETS table
    # ========================================================================
    op.create_table(
        "tweets",
        _id_column(),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tweets_owner_id", "tweets", ["owner_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("seq", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("video_id", sa.UUID(), nullable=True),
        sa.Column("tweet_id", sa.UUID(), nullable=True),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("parent_comment_id", sa.UUID(), nullable=True),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tweet_id"], ["tweets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_comment_id"], ["comments.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("seq", name="uq_comments_seq"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 500",
            name="ck_comments_content_length",
        ),
        sa.CheckConstraint(
            "like_count >= 0", name="ck_comments_like_count_non_negative"
        ),
        sa.CheckConstraint(
            "num_nonnulls(video_id, tweet_id) = 1",
            name="ck_comments_exactly_one_parent",
        ),
    )
    # Top-level listings: newest first per parent, seq breaks timestamp ties
    op.execute(
        "CREATE INDEX idx_comments_video_top_level "
        "ON comments (video_id, created_at DESC, seq DESC) "
        "WHERE parent_comment_id IS NULL"
    )
    op.execute(
        "CREATE INDEX idx_comments_tweet_top_level "
        "ON comments (tweet_id, created_at DESC, seq DESC) "
        "WHERE parent_comment_id IS NULL"
    )
    op.execute(
        "CREATE INDEX idx_comments_parent_comment_id "
        "ON comments (parent_comment_id, created_at DESC)"
    )
    op.create_index("idx_comments_owner_id", "comments", ["owner_id"])

    # ========================================================================
    # LIKES table
    # ========================================================================
    op.create_table(
        "likes",
        _id_column(),
        sa.Column("video_id", sa.UUID(), nullable=True),
        sa.Column("comment_id", sa.UUID(), nullable=True),
        sa.Column("tweet_id", sa.UUID(), nullable=True),
        sa.Column("liked_by", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tweet_id"], ["tweets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["liked_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "num_nonnulls(video_id, comment_id, tweet_id) = 1",
            name="ck_likes_exactly_one_target",
        ),
    )

    # One like per (target, user). Each index only covers rows of its own
    # kind, so a NULL in another kind's column never collides.
    for kind, column in (
        ("video", "video_id"),
        ("comment", "comment_id"),
        ("tweet", "tweet_id"),
    ):
        op.create_index(
            f"uq_likes_{kind}_liked_by",
            "likes",
            [column, "liked_by"],
            unique=True,
            postgresql_where=sa.text(f"{column} IS NOT NULL"),
        )

    op.execute(
        "CREATE INDEX idx_likes_liked_by_created_at "
        "ON likes (liked_by, created_at DESC)"
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("tweets")
    op.drop_table("videos")
    op.drop_table("users")
