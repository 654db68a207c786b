"""List comments and replies use cases."""

from typing import Optional

from pydantic import BaseModel

from vidnest.application.usecase.pagination import (
    PaginatedResponse,
    page_fields,
    page_request,
)
from vidnest.config import Settings
from vidnest.domain.model import CommentWithOwner
from vidnest.domain.service import CommentService, LikeService
from vidnest.domain.value import CommentId, Page, TargetKind, UserId, make_parent
from vidnest.domain.value.reference import parse_uuid

from .common import CommentItem, to_listing_items


class ListCommentsRequest(BaseModel):
    """List top-level comments request."""

    parent_kind: str  # "video" or "tweet"
    parent_id: str  # UUID string
    page: Optional[int] = None
    limit: Optional[int] = None
    viewer_id: Optional[str] = None  # Annotates is_liked when present


class ListRepliesRequest(BaseModel):
    """List replies request."""

    comment_id: str  # UUID string
    page: Optional[int] = None
    limit: Optional[int] = None
    viewer_id: Optional[str] = None


class CommentPageResponse(PaginatedResponse):
    """One page of comments."""

    items: list[CommentItem]


class _CommentListing:
    def __init__(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        settings: Settings,
    ) -> None:
        """Initialize listing use case.

        Args:
            comment_service: Comment domain service
            like_service: Like domain service (viewer's liked state)
            settings: Application settings (pagination limits)
        """
        self.comment_service = comment_service
        self.like_service = like_service
        self.settings = settings

    async def _respond(
        self, result: Page[CommentWithOwner], viewer_id: Optional[str]
    ) -> CommentPageResponse:
        liked = None
        if viewer_id:
            viewer = UserId(parse_uuid(viewer_id, "user"))
            # Batch query for the whole page (avoid N+1)
            liked = await self.like_service.liked_states(
                viewer,
                TargetKind.COMMENT,
                [entry.comment.id for entry in result.items],
            )

        return CommentPageResponse(
            items=to_listing_items(result.items, liked),
            **page_fields(result),
        )


class ListCommentsUseCase(_CommentListing):
    """Use case for listing top-level comments on a video or tweet."""

    async def execute(self, request: ListCommentsRequest) -> CommentPageResponse:
        """Execute list comments flow.

        Newest first; each comment carries its owner's username, full name
        and avatar.

        Raises:
            ValidationError: If the parent, page or limit is invalid
        """
        parent = make_parent(request.parent_kind, request.parent_id)
        page = page_request(self.settings, request.page, request.limit)

        result = await self.comment_service.list_top_level(parent, page)
        return await self._respond(result, request.viewer_id)


class ListRepliesUseCase(_CommentListing):
    """Use case for listing direct replies to a comment."""

    async def execute(self, request: ListRepliesRequest) -> CommentPageResponse:
        comment_id = CommentId(parse_uuid(request.comment_id, "comment"))
        page = page_request(self.settings, request.page, request.limit)

        result = await self.comment_service.list_replies(comment_id, page)
        return await self._respond(result, request.viewer_id)
