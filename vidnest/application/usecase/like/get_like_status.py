"""Like status and count use cases."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.service import LikeService
from vidnest.domain.value import TargetKind, UserId, make_target
from vidnest.domain.value.reference import parse_uuid


class GetLikeStatusRequest(BaseModel):
    """Like status request."""

    target_kind: str
    target_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class GetLikeStatusResponse(ResponseModel):
    """Like status response."""

    target_kind: TargetKind
    target_id: str
    is_liked: bool


class GetLikeStatusUseCase:
    """Use case for checking whether the caller likes a target."""

    def __init__(self, like_service: LikeService) -> None:
        self.like_service = like_service

    async def execute(self, request: GetLikeStatusRequest) -> GetLikeStatusResponse:
        target = make_target(request.target_kind, request.target_id)
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        is_liked = await self.like_service.is_liked(actor_id, target)

        return GetLikeStatusResponse(
            target_kind=target.kind, target_id=str(target.id), is_liked=is_liked
        )


class CountLikesRequest(BaseModel):
    """Count likes request."""

    target_kind: str
    target_id: str  # UUID string


class CountLikesResponse(ResponseModel):
    """Count likes response."""

    target_kind: TargetKind
    target_id: str
    like_count: int


class CountLikesUseCase:
    """Use case for counting likes on a target."""

    def __init__(self, like_service: LikeService) -> None:
        self.like_service = like_service

    async def execute(self, request: CountLikesRequest) -> CountLikesResponse:
        target = make_target(request.target_kind, request.target_id)

        count = await self.like_service.count_for(target)

        return CountLikesResponse(
            target_kind=target.kind, target_id=str(target.id), like_count=count
        )
