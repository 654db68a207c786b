"""Application layer DI providers."""

from dishka import Scope, provide

from vidnest.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
    UpdateCommentUseCase,
)
from vidnest.application.usecase.like import (
    CountLikesUseCase,
    GetLikeStatusUseCase,
    LikeTargetUseCase,
    ListLikedCommentsUseCase,
    ListLikedVideosUseCase,
    ListLikesUseCase,
    RemoveLikeUseCase,
    ToggleLikeUseCase,
    UnlikeTargetUseCase,
)
from vidnest.config import Settings
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import CommentService, LikeService
from vidnest.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_like_target_use_case(
        self, like_service: LikeService, settings: Settings, unit_of_work: UnitOfWork
    ) -> LikeTargetUseCase:
        """Provide like target use case."""
        return LikeTargetUseCase(
            like_service=like_service, settings=settings, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_unlike_target_use_case(
        self, like_service: LikeService, unit_of_work: UnitOfWork
    ) -> UnlikeTargetUseCase:
        """Provide unlike target use case."""
        return UnlikeTargetUseCase(
            like_service=like_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_like_use_case(
        self, like_service: LikeService, unit_of_work: UnitOfWork
    ) -> RemoveLikeUseCase:
        """Provide remove like use case."""
        return RemoveLikeUseCase(
            like_service=like_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, like_service: LikeService, unit_of_work: UnitOfWork
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(
            like_service=like_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_like_status_use_case(
        self, like_service: LikeService
    ) -> GetLikeStatusUseCase:
        """Provide like status use case."""
        return GetLikeStatusUseCase(like_service=like_service)

    @provide(scope=Scope.REQUEST)
    def get_count_likes_use_case(self, like_service: LikeService) -> CountLikesUseCase:
        """Provide count likes use case."""
        return CountLikesUseCase(like_service=like_service)

    @provide(scope=Scope.REQUEST)
    def get_list_likes_use_case(
        self, like_service: LikeService, settings: Settings
    ) -> ListLikesUseCase:
        """Provide list likes use case."""
        return ListLikesUseCase(like_service=like_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_list_liked_videos_use_case(
        self, like_service: LikeService, settings: Settings
    ) -> ListLikedVideosUseCase:
        """Provide list liked videos use case."""
        return ListLikedVideosUseCase(like_service=like_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_list_liked_comments_use_case(
        self, like_service: LikeService, settings: Settings
    ) -> ListLikedCommentsUseCase:
        """Provide list liked comments use case."""
        return ListLikedCommentsUseCase(like_service=like_service, settings=settings)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, unit_of_work: UnitOfWork
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        settings: Settings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service,
            like_service=like_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        settings: Settings,
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(
            comment_service=comment_service,
            like_service=like_service,
            settings=settings,
        )
