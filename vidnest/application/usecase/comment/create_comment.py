"""Create comment use case."""

from typing import Optional

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import CommentService
from vidnest.domain.value import (
    CommentId,
    UserId,
    normalize_comment_content,
    parent_from_fields,
)
from vidnest.domain.value.reference import parse_uuid

from .common import CommentItem, to_comment_item


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    owner_id: str  # User ID from authenticated user
    content: Optional[str] = None
    video_id: Optional[str] = None  # Exactly one of video_id / tweet_id
    tweet_id: Optional[str] = None
    parent_comment_id: Optional[str] = None  # Comment being replied to


class CreateCommentResponse(ResponseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for commenting on a video or tweet, or replying to a comment."""

    def __init__(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            unit_of_work: Commits the new comment
        """
        self.comment_service = comment_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Checks run in a fixed order and the first failure wins:
        1. content is 1-500 characters after trimming
        2. exactly one well-formed parent reference
        3. the parent exists
        4. a video parent is published

        Raises:
            ValidationError: Steps 1-2, or a malformed ID
            ParentNotFoundError: Step 3
            ParentUnpublishedError: Step 4
        """
        content = normalize_comment_content(request.content)
        parent = parent_from_fields(request.video_id, request.tweet_id)
        owner_id = UserId(parse_uuid(request.owner_id, "user"))
        parent_comment_id = (
            CommentId(parse_uuid(request.parent_comment_id, "comment"))
            if request.parent_comment_id
            else None
        )

        comment = await self.comment_service.create_comment(
            owner_id=owner_id,
            parent=parent,
            content=content,
            parent_comment_id=parent_comment_id,
        )
        await self.unit_of_work.commit()

        return CreateCommentResponse(comment=to_comment_item(comment))
