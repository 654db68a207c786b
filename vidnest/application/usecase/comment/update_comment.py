"""Update comment use case."""

from typing import Optional

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import CommentService
from vidnest.domain.value import CommentId, UserId
from vidnest.domain.value.reference import parse_uuid

from .common import CommentItem, to_comment_item


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content: Optional[str] = None
    actor_id: str  # User ID from authenticated user


class UpdateCommentResponse(ResponseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> None:
        self.comment_service = comment_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Ownership is checked before content, so a non-owner gets
        ForbiddenError even when the new content is invalid.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller does not own the comment
            ValidationError: If the content is empty or too long
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment"))
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        comment = await self.comment_service.update_comment(
            actor_id=actor_id,
            comment_id=comment_id,
            content=request.content or "",
        )
        await self.unit_of_work.commit()

        return UpdateCommentResponse(comment=to_comment_item(comment))
