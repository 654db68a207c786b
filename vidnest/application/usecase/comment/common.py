"""Comment response items shared by comment use cases."""

from datetime import datetime
from typing import Optional

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.model import Comment, CommentWithOwner
from vidnest.domain.value import OwnerSummary, VideoRef


class OwnerItem(ResponseModel):
    """Comment owner summary."""

    id: str
    username: str
    full_name: Optional[str]
    avatar_url: Optional[str]


class CommentItem(ResponseModel):
    """A comment as returned to callers."""

    comment_id: str
    content: str
    video_id: Optional[str]
    tweet_id: Optional[str]
    owner_id: str
    parent_comment_id: Optional[str]
    like_count: int
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerItem] = None
    is_liked: Optional[bool] = None  # Set only when a viewer is known


def to_owner_item(owner: OwnerSummary) -> OwnerItem:
    return OwnerItem(
        id=str(owner.id),
        username=owner.username,
        full_name=owner.full_name,
        avatar_url=owner.avatar_url,
    )


def to_comment_item(
    comment: Comment,
    owner: Optional[OwnerSummary] = None,
    is_liked: Optional[bool] = None,
) -> CommentItem:
    """Flatten a comment (and optionally its owner) for responses."""
    is_video = isinstance(comment.parent, VideoRef)
    return CommentItem(
        comment_id=str(comment.id),
        content=comment.content,
        video_id=str(comment.parent.id) if is_video else None,
        tweet_id=None if is_video else str(comment.parent.id),
        owner_id=str(comment.owner_id),
        parent_comment_id=str(comment.parent_comment_id)
        if comment.parent_comment_id
        else None,
        like_count=comment.like_count,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        owner=to_owner_item(owner) if owner else None,
        is_liked=is_liked,
    )


def to_listing_items(
    entries: list[CommentWithOwner], liked: Optional[dict]
) -> list[CommentItem]:
    """Flatten a listing page, annotating liked state when known."""
    return [
        to_comment_item(
            entry.comment,
            owner=entry.owner,
            is_liked=liked.get(entry.comment.id, False) if liked is not None else None,
        )
        for entry in entries
    ]
