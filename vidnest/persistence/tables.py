"""SQLAlchemy table definitions for VidNest.

These table definitions are used by the Core repositories and by the index
reconciler. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from vidnest.domain.value import TargetKind

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account service, read here for owner summaries)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("gen_random_uuid()")
    ),
    Column("username", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

# ============================================================================
# VIDEOS TABLE
# ============================================================================
videos_table = Table(
    "videos",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("gen_random_uuid()")
    ),
    Column("owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(300), nullable=False),
    Column("is_published", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

Index("idx_videos_owner_id", videos_table.c.owner_id)

# ============================================================================
# TWEETS TABLE
# ============================================================================
tweets_table = Table(
    "tweets",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("gen_random_uuid()")
    ),
    Column("owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

Index("idx_tweets_owner_id", tweets_table.c.owner_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("gen_random_uuid()")
    ),
    # Insertion sequence, tie-break for comments created in the same instant
    Column("seq", BigInteger, Identity(always=True), nullable=False, unique=True),
    Column("content", Text, nullable=False),
    Column(
        "video_id", UUID, ForeignKey("videos.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "tweet_id", UUID, ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True
    ),
    Column("owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 500", name="ck_comments_content_length"
    ),
    CheckConstraint("like_count >= 0", name="ck_comments_like_count_non_negative"),
    CheckConstraint(
        "num_nonnulls(video_id, tweet_id) = 1", name="ck_comments_exactly_one_parent"
    ),
)

# Listing indexes: top-level comments per parent, newest first
Index(
    "idx_comments_video_top_level",
    comments_table.c.video_id,
    comments_table.c.created_at.desc(),
    comments_table.c.seq.desc(),
    postgresql_where=comments_table.c.parent_comment_id.is_(None),
)
Index(
    "idx_comments_tweet_top_level",
    comments_table.c.tweet_id,
    comments_table.c.created_at.desc(),
    comments_table.c.seq.desc(),
    postgresql_where=comments_table.c.parent_comment_id.is_(None),
)
Index(
    "idx_comments_parent_comment_id",
    comments_table.c.parent_comment_id,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_owner_id", comments_table.c.owner_id)

# ============================================================================
# LIKES TABLE (polymorphic: exactly one of video_id / comment_id / tweet_id)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("gen_random_uuid()")
    ),
    Column(
        "video_id", UUID, ForeignKey("videos.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "comment_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "tweet_id", UUID, ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True
    ),
    Column("liked_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

# Target column per like kind. The only place kinds meet column names.
LIKE_TARGET_COLUMNS: dict[TargetKind, str] = {
    TargetKind.VIDEO: "video_id",
    TargetKind.COMMENT: "comment_id",
    TargetKind.TWEET: "tweet_id",
}

LIKE_TARGET_CHECK_NAME = "ck_likes_exactly_one_target"
LIKE_TARGET_CHECK_SQL = "num_nonnulls(video_id, comment_id, tweet_id) = 1"

likes_table.append_constraint(
    CheckConstraint(LIKE_TARGET_CHECK_SQL, name=LIKE_TARGET_CHECK_NAME)
)


def like_unique_index_name(kind: TargetKind) -> str:
    """Name of the partial unique index guarding one like kind."""
    return f"uq_likes_{kind.value}_liked_by"


# One like per (target, user), one partial index per kind. A single index
# over all three columns would treat NULLs as distinct and guard nothing.
for _kind, _column in LIKE_TARGET_COLUMNS.items():
    Index(
        like_unique_index_name(_kind),
        likes_table.c[_column],
        likes_table.c.liked_by,
        unique=True,
        postgresql_where=likes_table.c[_column].isnot(None),
    )

Index(
    "idx_likes_liked_by_created_at",
    likes_table.c.liked_by,
    likes_table.c.created_at.desc(),
)
