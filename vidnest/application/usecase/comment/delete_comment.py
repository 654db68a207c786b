"""Delete comment use case."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import CommentService
from vidnest.domain.value import CommentId, UserId
from vidnest.domain.value.reference import parse_uuid


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class DeleteCommentResponse(ResponseModel):
    """Delete comment response."""

    comment_id: str
    deleted_count: int  # The comment plus all of its replies


class DeleteCommentUseCase:
    """Use case for deleting a comment with its replies and their likes."""

    def __init__(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> None:
        self.comment_service = comment_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller does not own the comment
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment"))
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        deleted = await self.comment_service.delete_comment(actor_id, comment_id)
        await self.unit_of_work.commit()

        return DeleteCommentResponse(comment_id=str(comment_id), deleted_count=deleted)
