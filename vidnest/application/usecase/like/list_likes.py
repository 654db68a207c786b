"""List likes use case."""

from typing import Optional

from pydantic import BaseModel

from vidnest.application.usecase.pagination import (
    PaginatedResponse,
    page_fields,
    page_request,
)
from vidnest.config import Settings
from vidnest.domain.error import ValidationError
from vidnest.domain.service import LikeService
from vidnest.domain.value import TargetKind, UserId
from vidnest.domain.value.reference import parse_uuid

from .common import LikeItem, to_like_item


class ListLikesRequest(BaseModel):
    """List likes request."""

    actor_id: str  # User whose likes are listed
    kind: Optional[str] = None  # Restrict to one target kind
    page: Optional[int] = None
    limit: Optional[int] = None


class ListLikesResponse(PaginatedResponse):
    """List likes response."""

    items: list[LikeItem]


class ListLikesUseCase:
    """Use case for listing a user's likes, newest first."""

    def __init__(self, like_service: LikeService, settings: Settings) -> None:
        """Initialize list likes use case.

        Args:
            like_service: Like domain service
            settings: Application settings (pagination limits)
        """
        self.like_service = like_service
        self.settings = settings

    async def execute(self, request: ListLikesRequest) -> ListLikesResponse:
        """Execute list likes flow.

        Raises:
            ValidationError: If the kind, actor ID, page or limit is invalid
        """
        actor_id = UserId(parse_uuid(request.actor_id, "user"))
        kind = None
        if request.kind:
            try:
                kind = TargetKind(request.kind)
            except ValueError:
                raise ValidationError(f"Unknown target kind: {request.kind!r}")
        page = page_request(self.settings, request.page, request.limit)

        result = await self.like_service.list_by_user(actor_id, page, kind=kind)

        return ListLikesResponse(
            items=[to_like_item(like) for like in result.items],
            **page_fields(result),
        )
