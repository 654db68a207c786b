"""Comment entity.

Comments are attached to a video or a tweet and can be threaded through
`parent_comment_id` to any depth.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from vidnest.domain.model.common import DomainModel
from vidnest.domain.value import CommentId, CommentParent, OwnerSummary, UserId
from vidnest.domain.value.types import COMMENT_MAX_LENGTH, COMMENT_MIN_LENGTH


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent: The video or tweet the whole thread belongs to
    - parent_comment_id: Direct parent comment (None for top-level)
    """

    id: CommentId
    content: str = Field(min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH)
    parent: CommentParent
    owner_id: UserId
    parent_comment_id: Optional[CommentId] = None
    like_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_comment_id is None


class CommentWithOwner(DomainModel):
    """A comment joined with its owner's summary, as returned by listings."""

    comment: Comment
    owner: OwnerSummary
