"""Like response items shared by like use cases."""

from datetime import datetime

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.model import Like
from vidnest.domain.value import TargetKind


class LikeItem(ResponseModel):
    """A like as returned to callers."""

    like_id: str
    target_kind: TargetKind
    target_id: str
    liked_by: str
    created_at: datetime


def to_like_item(like: Like) -> LikeItem:
    """Flatten a like for responses."""
    return LikeItem(
        like_id=str(like.id),
        target_kind=like.target.kind,
        target_id=str(like.target.id),
        liked_by=str(like.liked_by),
        created_at=like.created_at,
    )
