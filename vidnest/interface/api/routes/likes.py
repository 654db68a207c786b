"""Like routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response, status

from vidnest.application.usecase.like import (
    CountLikesRequest,
    CountLikesResponse,
    CountLikesUseCase,
    GetLikeStatusRequest,
    GetLikeStatusResponse,
    GetLikeStatusUseCase,
    LikeTargetRequest,
    LikeTargetResponse,
    LikeTargetUseCase,
    ListLikedCommentsResponse,
    ListLikedCommentsUseCase,
    ListLikedRequest,
    ListLikedVideosResponse,
    ListLikedVideosUseCase,
    ListLikesRequest,
    ListLikesResponse,
    ListLikesUseCase,
    RemoveLikeRequest,
    RemoveLikeResponse,
    RemoveLikeUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UnlikeTargetRequest,
    UnlikeTargetResponse,
    UnlikeTargetUseCase,
)
from vidnest.interface.api.envelope import Envelope, ok
from vidnest.interface.api.principal import Actor

router = APIRouter(prefix="/likes", tags=["likes"], route_class=DishkaRoute)


@router.get("", response_model=Envelope[ListLikesResponse])
async def list_likes(
    actor_id: Actor,
    list_likes_use_case: FromDishka[ListLikesUseCase],
    kind: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[ListLikesResponse]:
    """List the caller's likes, newest first.

    Args:
        actor_id: Authenticated user ID
        list_likes_use_case: List likes use case from DI
        kind: Restrict to "video", "comment" or "tweet"
        page: 1-based page number (default 1)
        limit: Page size (default 10, capped at the configured maximum)
    """
    result = await list_likes_use_case.execute(
        ListLikesRequest(actor_id=actor_id, kind=kind, page=page, limit=limit)
    )
    return ok(result, "Likes fetched successfully")


@router.get("/videos", response_model=Envelope[ListLikedVideosResponse])
async def list_liked_videos(
    actor_id: Actor,
    list_liked_videos_use_case: FromDishka[ListLikedVideosUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[ListLikedVideosResponse]:
    """Videos the caller likes, each with its owner, most recently liked first."""
    result = await list_liked_videos_use_case.execute(
        ListLikedRequest(actor_id=actor_id, page=page, limit=limit)
    )
    return ok(result, "Liked videos fetched successfully")


@router.get("/comments", response_model=Envelope[ListLikedCommentsResponse])
async def list_liked_comments(
    actor_id: Actor,
    list_liked_comments_use_case: FromDishka[ListLikedCommentsUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[ListLikedCommentsResponse]:
    """Comments the caller likes, each with its author, most recently liked first."""
    result = await list_liked_comments_use_case.execute(
        ListLikedRequest(actor_id=actor_id, page=page, limit=limit)
    )
    return ok(result, "Liked comments fetched successfully")


@router.get(
    "/user/{user_id}/videos", response_model=Envelope[ListLikedVideosResponse]
)
async def list_user_liked_videos(
    user_id: str,
    actor_id: Actor,
    list_liked_videos_use_case: FromDishka[ListLikedVideosUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[ListLikedVideosResponse]:
    """Videos another user likes. Any signed-in caller may look."""
    result = await list_liked_videos_use_case.execute(
        ListLikedRequest(actor_id=user_id, page=page, limit=limit)
    )
    return ok(result, "Liked videos fetched successfully")


@router.get(
    "/user/{user_id}/comments", response_model=Envelope[ListLikedCommentsResponse]
)
async def list_user_liked_comments(
    user_id: str,
    actor_id: Actor,
    list_liked_comments_use_case: FromDishka[ListLikedCommentsUseCase],
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
) -> Envelope[ListLikedCommentsResponse]:
    """Comments another user likes. Any signed-in caller may look."""
    result = await list_liked_comments_use_case.execute(
        ListLikedRequest(actor_id=user_id, page=page, limit=limit)
    )
    return ok(result, "Liked comments fetched successfully")


@router.post(
    "/toggle/{target_kind}/{target_id}",
    response_model=Envelope[ToggleLikeResponse],
)
async def toggle_like(
    target_kind: str,
    target_id: str,
    actor_id: Actor,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
) -> Envelope[ToggleLikeResponse]:
    """Like the target, or remove the caller's like if it exists."""
    result = await toggle_like_use_case.execute(
        ToggleLikeRequest(
            target_kind=target_kind, target_id=target_id, actor_id=actor_id
        )
    )
    message = "Like added" if result.is_liked else "Like removed"
    return ok(result, message)


@router.get(
    "/status/{target_kind}/{target_id}",
    response_model=Envelope[GetLikeStatusResponse],
)
async def get_like_status(
    target_kind: str,
    target_id: str,
    actor_id: Actor,
    get_like_status_use_case: FromDishka[GetLikeStatusUseCase],
) -> Envelope[GetLikeStatusResponse]:
    """Whether the caller likes the target."""
    result = await get_like_status_use_case.execute(
        GetLikeStatusRequest(
            target_kind=target_kind, target_id=target_id, actor_id=actor_id
        )
    )
    return ok(result, "Like status fetched successfully")


@router.get(
    "/count/{target_kind}/{target_id}",
    response_model=Envelope[CountLikesResponse],
)
async def count_likes(
    target_kind: str,
    target_id: str,
    count_likes_use_case: FromDishka[CountLikesUseCase],
) -> Envelope[CountLikesResponse]:
    """Number of likes on the target. No authentication needed."""
    result = await count_likes_use_case.execute(
        CountLikesRequest(target_kind=target_kind, target_id=target_id)
    )
    return ok(result, "Like count fetched successfully")


@router.post(
    "/{target_kind}/{target_id}",
    response_model=Envelope[LikeTargetResponse],
    status_code=status.HTTP_201_CREATED,
)
async def like_target(
    target_kind: str,
    target_id: str,
    actor_id: Actor,
    response: Response,
    like_target_use_case: FromDishka[LikeTargetUseCase],
) -> Envelope[LikeTargetResponse]:
    """Like a video, comment or tweet.

    Returns 201 with the new like. Liking twice is a 409, unless the
    service runs with idempotent create, in which case the existing like
    comes back with a 200.

    Args:
        target_kind: "video", "comment" or "tweet"
        target_id: Target UUID
        actor_id: Authenticated user ID
        response: Outgoing response (status override for existing likes)
        like_target_use_case: Like target use case from DI
    """
    result = await like_target_use_case.execute(
        LikeTargetRequest(
            target_kind=target_kind, target_id=target_id, actor_id=actor_id
        )
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
        return ok(result, "Already liked")
    return ok(result, "Like added", status_code=status.HTTP_201_CREATED)


@router.delete(
    "/{target_kind}/{target_id}",
    response_model=Envelope[UnlikeTargetResponse],
)
async def unlike_target(
    target_kind: str,
    target_id: str,
    actor_id: Actor,
    unlike_target_use_case: FromDishka[UnlikeTargetUseCase],
) -> Envelope[UnlikeTargetResponse]:
    """Withdraw the caller's like on a target. 404 if there is none."""
    result = await unlike_target_use_case.execute(
        UnlikeTargetRequest(
            target_kind=target_kind, target_id=target_id, actor_id=actor_id
        )
    )
    return ok(result, "Like removed")


@router.delete("/{like_id}", response_model=Envelope[RemoveLikeResponse])
async def remove_like(
    like_id: str,
    actor_id: Actor,
    remove_like_use_case: FromDishka[RemoveLikeUseCase],
) -> Envelope[RemoveLikeResponse]:
    """Delete a like by ID. Only its creator may do so (403 otherwise)."""
    result = await remove_like_use_case.execute(
        RemoveLikeRequest(like_id=like_id, actor_id=actor_id)
    )
    return ok(result, "Like removed")
