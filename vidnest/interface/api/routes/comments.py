"""Comment routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vidnest.application.usecase.comment import (
    CommentPageResponse,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from vidnest.interface.api.envelope import Envelope, ok
from vidnest.interface.api.principal import Actor, Viewer

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Length and parent rules are enforced by the use case so that every
    failure is reported in the same order and envelope.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: Optional[str] = None
    video_id: Optional[str] = None
    tweet_id: Optional[str] = None
    parent_comment_id: Optional[str] = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: Optional[str] = None


@router.post(
    "",
    response_model=Envelope[CreateCommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    actor_id: Actor,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> Envelope[CreateCommentResponse]:
    """Comment on a video or tweet, or reply to a comment.

    Requires authentication.

    Args:
        request: Comment content and exactly one of videoId / tweetId
        actor_id: Authenticated user ID
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment
    """
    result = await create_comment_use_case.execute(
        CreateCommentRequest(
            owner_id=actor_id,
            content=request.content,
            video_id=request.video_id,
            tweet_id=request.tweet_id,
            parent_comment_id=request.parent_comment_id,
        )
    )
    return ok(result, "Comment added", status_code=status.HTTP_201_CREATED)


@router.get(
    "/{comment_id}/replies",
    response_model=Envelope[CommentPageResponse],
)
async def list_replies(
    comment_id: str,
    viewer_id: Viewer,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[CommentPageResponse]:
    """List direct replies to a comment, newest first."""
    result = await list_replies_use_case.execute(
        ListRepliesRequest(
            comment_id=comment_id, page=page, limit=limit, viewer_id=viewer_id
        )
    )
    return ok(result, "Replies fetched successfully")


@router.get(
    "/{parent_kind}/{parent_id}",
    response_model=Envelope[CommentPageResponse],
)
async def list_comments(
    parent_kind: str,
    parent_id: str,
    viewer_id: Viewer,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[CommentPageResponse]:
    """List top-level comments on a video or tweet.

    Public endpoint. With an X-User-Id header, each comment also reports
    whether that user likes it.

    Args:
        parent_kind: "video" or "tweet"
        parent_id: Video or tweet UUID
        viewer_id: Optional caller ID
        list_comments_use_case: List comments use case from DI
        page: 1-based page number (default 1)
        limit: Page size (default 10, capped at the configured maximum)
    """
    result = await list_comments_use_case.execute(
        ListCommentsRequest(
            parent_kind=parent_kind,
            parent_id=parent_id,
            page=page,
            limit=limit,
            viewer_id=viewer_id,
        )
    )
    return ok(result, "Comments fetched successfully")


@router.get("/{comment_id}", response_model=Envelope[GetCommentResponse])
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> Envelope[GetCommentResponse]:
    """Fetch a single comment."""
    result = await get_comment_use_case.execute(
        GetCommentRequest(comment_id=comment_id)
    )
    return ok(result, "Comment fetched successfully")


@router.patch("/{comment_id}", response_model=Envelope[UpdateCommentResponse])
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    actor_id: Actor,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
) -> Envelope[UpdateCommentResponse]:
    """Edit a comment's content. Only the owner may do so."""
    result = await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id, content=request.content, actor_id=actor_id
        )
    )
    return ok(result, "Comment updated")


@router.delete("/{comment_id}", response_model=Envelope[DeleteCommentResponse])
async def delete_comment(
    comment_id: str,
    actor_id: Actor,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> Envelope[DeleteCommentResponse]:
    """Delete a comment, its replies, and the likes on all of them."""
    result = await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, actor_id=actor_id)
    )
    return ok(result, "Comment deleted")
