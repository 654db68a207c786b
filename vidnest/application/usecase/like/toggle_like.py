"""Toggle like use case."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import LikeService
from vidnest.domain.value import TargetKind, UserId, make_target
from vidnest.domain.value.reference import parse_uuid


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    target_kind: str
    target_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class ToggleLikeResponse(ResponseModel):
    """Toggle like response."""

    target_kind: TargetKind
    target_id: str
    is_liked: bool


class ToggleLikeUseCase:
    """Use case for flipping the caller's like on a target."""

    def __init__(self, like_service: LikeService, unit_of_work: UnitOfWork) -> None:
        self.like_service = like_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle flow.

        Raises:
            ValidationError: If the kind or an ID is malformed
            TargetNotFoundError: If the target does not exist
        """
        target = make_target(request.target_kind, request.target_id)
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        is_liked = await self.like_service.toggle(actor_id, target)
        await self.unit_of_work.commit()

        return ToggleLikeResponse(
            target_kind=target.kind, target_id=str(target.id), is_liked=is_liked
        )
