"""Domain layer DI providers."""

from dishka import Scope, provide

from vidnest.config import Settings
from vidnest.domain.repository import (
    CommentRepository,
    LikeRepository,
    TweetRepository,
    VideoRepository,
)
from vidnest.domain.service import CommentService, LikeService
from vidnest.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
        video_repository: VideoRepository,
        tweet_repository: TweetRepository,
        settings: Settings,
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            like_repository=like_repository,
            comment_repository=comment_repository,
            video_repository=video_repository,
            tweet_repository=tweet_repository,
            default_timeout=settings.store.operation_timeout_seconds,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        video_repository: VideoRepository,
        tweet_repository: TweetRepository,
        settings: Settings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            video_repository=video_repository,
            tweet_repository=tweet_repository,
            default_timeout=settings.store.operation_timeout_seconds,
        )
