"""Like target use case."""

import logfire
from pydantic import BaseModel

from vidnest.application.usecase.response import ResponseModel
from vidnest.config import Settings
from vidnest.domain.error import ConflictError
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import LikeService
from vidnest.domain.value import UserId, make_target
from vidnest.domain.value.reference import parse_uuid

from .common import LikeItem, to_like_item


class LikeTargetRequest(BaseModel):
    """Like target request."""

    target_kind: str  # "video", "comment" or "tweet"
    target_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class LikeTargetResponse(ResponseModel):
    """Like target response."""

    like: LikeItem
    created: bool  # False only when an existing like is returned


class LikeTargetUseCase:
    """Use case for liking a video, comment or tweet."""

    def __init__(
        self, like_service: LikeService, settings: Settings, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize like target use case.

        Args:
            like_service: Like domain service
            settings: Application settings (idempotent create switch)
            unit_of_work: Commits the new like with its counter update
        """
        self.like_service = like_service
        self.settings = settings
        self.unit_of_work = unit_of_work

    async def execute(self, request: LikeTargetRequest) -> LikeTargetResponse:
        """Execute like flow.

        With likes.idempotent_create enabled, liking an already-liked
        target returns the existing like instead of raising.

        Raises:
            ValidationError: If the kind or an ID is malformed
            TargetNotFoundError: If the target does not exist
            ConflictError: If already liked (and idempotent create is off)
        """
        target = make_target(request.target_kind, request.target_id)
        actor_id = UserId(parse_uuid(request.actor_id, "user"))

        try:
            like = await self.like_service.like(actor_id, target)
        except ConflictError:
            if not self.settings.likes.idempotent_create:
                raise
            existing = await self.like_service.get_like(actor_id, target)
            if existing is None:
                # Unliked between the conflict and the lookup
                raise
            logfire.info(
                "Existing like returned", like_id=str(existing.id), target=str(target)
            )
            return LikeTargetResponse(like=to_like_item(existing), created=False)

        await self.unit_of_work.commit()
        return LikeTargetResponse(like=to_like_item(like), created=True)
