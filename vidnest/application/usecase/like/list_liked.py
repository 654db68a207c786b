"""List liked videos and liked comments use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from vidnest.application.usecase.comment.common import (
    CommentItem,
    OwnerItem,
    to_comment_item,
    to_owner_item,
)
from vidnest.application.usecase.pagination import (
    PaginatedResponse,
    page_fields,
    page_request,
)
from vidnest.application.usecase.response import ResponseModel
from vidnest.config import Settings
from vidnest.domain.model import LikedComment, LikedVideo
from vidnest.domain.service import LikeService
from vidnest.domain.value import UserId
from vidnest.domain.value.reference import parse_uuid


class VideoItem(ResponseModel):
    """The liked video."""

    video_id: str
    title: str
    owner_id: str
    is_published: bool
    created_at: datetime


class LikedVideoItem(ResponseModel):
    """A liked video with its owner, stamped with when it was liked."""

    like_id: str
    liked_at: datetime
    video: VideoItem
    owner: OwnerItem


class LikedCommentItem(ResponseModel):
    """A liked comment with its author, stamped with when it was liked."""

    like_id: str
    liked_at: datetime
    comment: CommentItem
    owner: OwnerItem


def to_liked_video_item(entry: LikedVideo) -> LikedVideoItem:
    video = entry.video
    return LikedVideoItem(
        like_id=str(entry.like_id),
        liked_at=entry.liked_at,
        video=VideoItem(
            video_id=str(video.id),
            title=video.title,
            owner_id=str(video.owner_id),
            is_published=video.is_published,
            created_at=video.created_at,
        ),
        owner=to_owner_item(entry.owner),
    )


def to_liked_comment_item(entry: LikedComment) -> LikedCommentItem:
    return LikedCommentItem(
        like_id=str(entry.like_id),
        liked_at=entry.liked_at,
        comment=to_comment_item(entry.comment),
        owner=to_owner_item(entry.owner),
    )


class ListLikedRequest(BaseModel):
    """List liked videos or comments request."""

    actor_id: str  # User whose likes are listed
    page: Optional[int] = None
    limit: Optional[int] = None


class ListLikedVideosResponse(PaginatedResponse):
    """List liked videos response."""

    items: list[LikedVideoItem]


class ListLikedCommentsResponse(PaginatedResponse):
    """List liked comments response."""

    items: list[LikedCommentItem]


class ListLikedVideosUseCase:
    """Use case for listing the videos a user likes, most recently liked first."""

    def __init__(self, like_service: LikeService, settings: Settings) -> None:
        """Initialize list liked videos use case.

        Args:
            like_service: Like domain service
            settings: Application settings (pagination limits)
        """
        self.like_service = like_service
        self.settings = settings

    async def execute(self, request: ListLikedRequest) -> ListLikedVideosResponse:
        """Execute list liked videos flow.

        Raises:
            ValidationError: If the actor ID, page or limit is invalid
        """
        actor_id = UserId(parse_uuid(request.actor_id, "user"))
        page = page_request(self.settings, request.page, request.limit)

        result = await self.like_service.list_liked_videos(actor_id, page)

        return ListLikedVideosResponse(
            items=[to_liked_video_item(entry) for entry in result.items],
            **page_fields(result),
        )


class ListLikedCommentsUseCase:
    """Use case for listing the comments a user likes, most recently liked first."""

    def __init__(self, like_service: LikeService, settings: Settings) -> None:
        self.like_service = like_service
        self.settings = settings

    async def execute(self, request: ListLikedRequest) -> ListLikedCommentsResponse:
        """Execute list liked comments flow.

        Raises:
            ValidationError: If the actor ID, page or limit is invalid
        """
        actor_id = UserId(parse_uuid(request.actor_id, "user"))
        page = page_request(self.settings, request.page, request.limit)

        result = await self.like_service.list_liked_comments(actor_id, page)

        return ListLikedCommentsResponse(
            items=[to_liked_comment_item(entry) for entry in result.items],
            **page_fields(result),
        )
