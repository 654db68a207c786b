"""Like entity.

A like records that a user engaged with exactly one target: a video, a
comment or a tweet. Each user can like each target at most once.
"""

from datetime import datetime

from pydantic import Field

from vidnest.domain.model.comment import Comment
from vidnest.domain.model.common import DomainModel
from vidnest.domain.model.video import Video
from vidnest.domain.value import LikeId, LikeTarget, OwnerSummary, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by per-kind partial unique indexes)
    - Exactly one target (the tagged union makes zero or two unrepresentable)
    - Never updated: created, then hard-deleted by its own actor
    """

    id: LikeId
    target: LikeTarget
    liked_by: UserId
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class LikedVideo(DomainModel):
    """A video like joined with the video and the video owner's summary."""

    like_id: LikeId
    liked_at: datetime
    video: Video
    owner: OwnerSummary


class LikedComment(DomainModel):
    """A comment like joined with the comment and the comment author's summary."""

    like_id: LikeId
    liked_at: datetime
    comment: Comment
    owner: OwnerSummary
