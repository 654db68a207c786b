"""Domain value objects for VidNest."""

from vidnest.domain.value.identifiers import (
    CommentId,
    LikeId,
    TweetId,
    UserId,
    VideoId,
)
from vidnest.domain.value.pagination import Page, PageRequest
from vidnest.domain.value.reference import (
    CommentParent,
    CommentRef,
    LikeTarget,
    ParentKind,
    TargetKind,
    TweetRef,
    VideoRef,
    make_parent,
    make_target,
    parent_from_fields,
)
from vidnest.domain.value.types import OwnerSummary, Username, normalize_comment_content

__all__ = [
    # Identifiers
    "UserId",
    "VideoId",
    "TweetId",
    "CommentId",
    "LikeId",
    # References
    "TargetKind",
    "ParentKind",
    "VideoRef",
    "CommentRef",
    "TweetRef",
    "LikeTarget",
    "CommentParent",
    "make_target",
    "make_parent",
    "parent_from_fields",
    # Types
    "Username",
    "OwnerSummary",
    "normalize_comment_content",
    # Pagination
    "Page",
    "PageRequest",
]
