"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.

Likes and comments reference their target/parent through a tagged union in
the domain and through per-kind nullable columns in the database. The
conversion happens here and nowhere else.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from vidnest.domain.error import ValidationError
from vidnest.domain.model import (
    Comment,
    CommentWithOwner,
    Like,
    LikedComment,
    LikedVideo,
    Tweet,
    User,
    Video,
)
from vidnest.domain.value import (
    CommentId,
    CommentParent,
    LikeId,
    LikeTarget,
    OwnerSummary,
    TweetId,
    TweetRef,
    UserId,
    Username,
    VideoId,
    VideoRef,
    make_target,
    parent_from_fields,
)
from vidnest.persistence.tables import LIKE_TARGET_COLUMNS


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def target_to_columns(target: LikeTarget) -> Dict[str, Optional[UUID]]:
    """Spread a like target over the per-kind columns.

    Exactly one column is populated, the others are explicitly None.
    """
    columns: Dict[str, Optional[UUID]] = {
        column: None for column in LIKE_TARGET_COLUMNS.values()
    }
    columns[LIKE_TARGET_COLUMNS[target.kind]] = target.id
    return columns


def target_from_columns(row: Dict[str, Any]) -> LikeTarget:
    """Rebuild a like target from the per-kind columns.

    Raises:
        ValidationError: If zero or more than one target column is populated
    """
    populated = [
        (kind, row.get(column))
        for kind, column in LIKE_TARGET_COLUMNS.items()
        if row.get(column) is not None
    ]
    if len(populated) != 1:
        raise ValidationError(
            f"Like must reference exactly one target, found {len(populated)}"
        )
    kind, target_id = populated[0]
    return make_target(kind, _uuid(target_id))


def parent_to_columns(parent: CommentParent) -> Dict[str, Optional[UUID]]:
    """Spread a comment parent over the video_id / tweet_id columns."""
    return {
        "video_id": parent.id if isinstance(parent, VideoRef) else None,
        "tweet_id": parent.id if isinstance(parent, TweetRef) else None,
    }


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model.

    Args:
        row: Database row as dict

    Returns:
        Like domain model
    """
    return Like(
        id=LikeId(_uuid(row["id"])),
        target=target_from_columns(row),
        liked_by=UserId(_uuid(row["liked_by"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict.

    Args:
        like: Like domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": like.id,
        "liked_by": like.liked_by,
        "created_at": like.created_at,
        "updated_at": like.updated_at,
        **target_to_columns(like.target),
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        content=row["content"],
        parent=parent_from_fields(row.get("video_id"), row.get("tweet_id")),
        owner_id=UserId(_uuid(row["owner_id"])),
        parent_comment_id=CommentId(_uuid(row["parent_comment_id"]))
        if row.get("parent_comment_id")
        else None,
        like_count=row["like_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    The insertion sequence column is generated by the database and never
    written.
    """
    return {
        "id": comment.id,
        "content": comment.content,
        "owner_id": comment.owner_id,
        "parent_comment_id": comment.parent_comment_id,
        "like_count": comment.like_count,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        **parent_to_columns(comment.parent),
    }


def row_to_comment_with_owner(row: Dict[str, Any]) -> CommentWithOwner:
    """Convert a comment row joined with owner columns.

    Expects the owner columns labelled owner_username, owner_full_name and
    owner_avatar_url.
    """
    return CommentWithOwner(
        comment=row_to_comment(row),
        owner=_owner_summary(row),
    )


def _owner_summary(row: Dict[str, Any]) -> OwnerSummary:
    return OwnerSummary(
        id=UserId(_uuid(row["owner_id"])),
        username=row["owner_username"],
        full_name=row.get("owner_full_name"),
        avatar_url=row.get("owner_avatar_url"),
    )


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_video(row: Dict[str, Any]) -> Video:
    """Convert database row to Video domain model."""
    return Video(
        id=VideoId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        title=row["title"],
        is_published=row["is_published"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def video_to_dict(video: Video) -> Dict[str, Any]:
    """Convert Video domain model to database dict."""
    return video.model_dump()


def row_to_liked_video(row: Dict[str, Any]) -> LikedVideo:
    """Convert a video row joined with its like and owner columns.

    Expects the like columns labelled like_id and liked_at, and the owner
    columns labelled as for row_to_comment_with_owner.
    """
    return LikedVideo(
        like_id=LikeId(_uuid(row["like_id"])),
        liked_at=row["liked_at"],
        video=row_to_video(row),
        owner=_owner_summary(row),
    )


def row_to_liked_comment(row: Dict[str, Any]) -> LikedComment:
    """Convert a comment row joined with its like and author columns."""
    return LikedComment(
        like_id=LikeId(_uuid(row["like_id"])),
        liked_at=row["liked_at"],
        comment=row_to_comment(row),
        owner=_owner_summary(row),
    )


def row_to_tweet(row: Dict[str, Any]) -> Tweet:
    """Convert database row to Tweet domain model."""
    return Tweet(
        id=TweetId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tweet_to_dict(tweet: Tweet) -> Dict[str, Any]:
    """Convert Tweet domain model to database dict."""
    return tweet.model_dump()
