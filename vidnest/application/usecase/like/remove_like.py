"""Remove like use case."""

from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import LikeService
from vidnest.domain.value import LikeId, UserId
from vidnest.domain.value.reference import parse_uuid


class RemoveLikeRequest(BaseModel):
    """Remove like request."""

    like_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class RemoveLikeResponse(ResponseModel):
    """Remove like response."""

    like_id: str


class RemoveLikeUseCase:
    """Use case for deleting a like by its ID."""

    def __init__(self, like_service: LikeService, unit_of_work: UnitOfWork) -> None:
        self.like_service = like_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: RemoveLikeRequest) -> RemoveLikeResponse:
        """Execute remove like flow.

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the like does not exist
            ForbiddenError: If the like belongs to another user
        """
        like_id = LikeId(parse_uuid(request.like_id, "like"))
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        await self.like_service.remove(actor_id, like_id)
        await self.unit_of_work.commit()

        return RemoveLikeResponse(like_id=str(like_id))
