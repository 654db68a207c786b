"""Get comment use case."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.service import CommentService
from vidnest.domain.value import CommentId
from vidnest.domain.value.reference import parse_uuid

from .common import CommentItem, to_comment_item


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string


class GetCommentResponse(ResponseModel):
    """Get comment response."""

    comment: CommentItem


class GetCommentUseCase:
    """Use case for fetching a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        comment_id = CommentId(parse_uuid(request.comment_id, "comment"))
        comment = await self.comment_service.get_comment(comment_id)
        return GetCommentResponse(comment=to_comment_item(comment))
