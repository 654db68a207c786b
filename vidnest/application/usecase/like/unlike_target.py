"""Unlike target use case."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import LikeService
from vidnest.domain.value import TargetKind, UserId, make_target
from vidnest.domain.value.reference import parse_uuid


class UnlikeTargetRequest(BaseModel):
    """Unlike target request."""

    target_kind: str
    target_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class UnlikeTargetResponse(ResponseModel):
    """Unlike target response."""

    target_kind: TargetKind
    target_id: str


class UnlikeTargetUseCase:
    """Use case for withdrawing the caller's like on a target."""

    def __init__(self, like_service: LikeService, unit_of_work: UnitOfWork) -> None:
        self.like_service = like_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: UnlikeTargetRequest) -> UnlikeTargetResponse:
        """Execute unlike flow.

        Raises:
            ValidationError: If the kind or an ID is malformed
            NotFoundError: If the caller does not like the target
        """
        target = make_target(request.target_kind, request.target_id)
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        await self.like_service.unlike(actor_id, target)
        await self.unit_of_work.commit()

        return UnlikeTargetResponse(target_kind=target.kind, target_id=str(target.id))
