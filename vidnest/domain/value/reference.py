"""Polymorphic references to likeable and commentable entities.

A like points at exactly one of a video, a comment or a tweet; a comment
hangs off exactly one video or tweet. Both are modelled as tagged unions
so that "exactly one" holds by construction. Only the persistence layer
decomposes them into per-kind nullable columns.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field

from vidnest.domain.error import ValidationError
from vidnest.domain.value.common import ValueObject
from vidnest.domain.value.identifiers import CommentId, TweetId, VideoId


class TargetKind(str, Enum):
    """Kind of entity a like can point at."""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class ParentKind(str, Enum):
    """Kind of entity a comment can be attached to."""

    VIDEO = "video"
    TWEET = "tweet"


class VideoRef(ValueObject):
    """Reference to a video."""

    kind: Literal[TargetKind.VIDEO] = TargetKind.VIDEO
    id: VideoId

    def __str__(self) -> str:
        return f"video:{self.id}"


class CommentRef(ValueObject):
    """Reference to a comment."""

    kind: Literal[TargetKind.COMMENT] = TargetKind.COMMENT
    id: CommentId

    def __str__(self) -> str:
        return f"comment:{self.id}"


class TweetRef(ValueObject):
    """Reference to a tweet."""

    kind: Literal[TargetKind.TWEET] = TargetKind.TWEET
    id: TweetId

    def __str__(self) -> str:
        return f"tweet:{self.id}"


LikeTarget = Annotated[
    Union[VideoRef, CommentRef, TweetRef], Field(discriminator="kind")
]
CommentParent = Annotated[Union[VideoRef, TweetRef], Field(discriminator="kind")]


def parse_uuid(value: UUID | str, label: str) -> UUID:
    """Parse an identifier, raising a domain validation error if malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} id: {value!r}")


def make_target(
    kind: TargetKind | str, target_id: UUID | str
) -> VideoRef | CommentRef | TweetRef:
    """Build a like target from a kind discriminator and a raw identifier.

    Raises:
        ValidationError: If the kind is unknown or the id is malformed
    """
    try:
        kind = TargetKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown target kind: {kind!r}")

    raw = parse_uuid(target_id, kind.value)
    if kind is TargetKind.VIDEO:
        return VideoRef(id=VideoId(raw))
    if kind is TargetKind.COMMENT:
        return CommentRef(id=CommentId(raw))
    return TweetRef(id=TweetId(raw))


def make_parent(kind: ParentKind | str, parent_id: UUID | str) -> VideoRef | TweetRef:
    """Build a comment parent from a kind discriminator and a raw identifier."""
    try:
        kind = ParentKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown parent kind: {kind!r}")

    raw = parse_uuid(parent_id, kind.value)
    if kind is ParentKind.VIDEO:
        return VideoRef(id=VideoId(raw))
    return TweetRef(id=TweetId(raw))


def parent_from_fields(
    video_id: Optional[UUID | str], tweet_id: Optional[UUID | str]
) -> VideoRef | TweetRef:
    """Build a comment parent from the two optional payload fields.

    Exactly one of the two must be supplied.

    Raises:
        ValidationError: If zero or both fields are set, or the id is malformed
    """
    supplied = [value for value in (video_id, tweet_id) if value not in (None, "")]
    if len(supplied) != 1:
        raise ValidationError("Exactly one of videoId or tweetId is required")
    if video_id not in (None, ""):
        return make_parent(ParentKind.VIDEO, video_id)  # type: ignore[arg-type]
    return make_parent(ParentKind.TWEET, tweet_id)  # type: ignore[arg-type]
