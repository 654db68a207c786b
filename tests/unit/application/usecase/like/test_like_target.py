"""Unit tests for LikeTargetUseCase."""

import asyncio
from uuid import uuid4

import pytest

from vidnest.application.usecase.like.like_target import (
    LikeTargetRequest,
    LikeTargetUseCase,
)
from vidnest.config import LikeSettings, Settings
from vidnest.domain.error import (
    ConflictError,
    OperationTimeoutError,
    TargetNotFoundError,
    ValidationError,
)
from vidnest.domain.model import Comment
from vidnest.domain.repository import UnitOfWork
from vidnest.domain.service import LikeService
from vidnest.domain.value import CommentId, TargetKind, UserId, VideoRef
from vidnest.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryLikeRepository,
    InMemoryTweetRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
    InMemoryVideoRepository,
)
from tests.conftest import make_tweet, make_video
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class SlowCounterCommentRepository(InMemoryCommentRepository):
    """Comment repository whose like counter update outlives any deadline."""

    async def increment_like_count(self, comment_id: CommentId) -> None:
        await asyncio.sleep(1)
        await super().increment_like_count(comment_id)


class TestLikeTargetUseCase:
    """Tests for LikeTargetUseCase."""

    @pytest.mark.asyncio
    async def test_like_video(self, unit_env):
        # Arrange
        use_case = await unit_env.get(LikeTargetUseCase)
        video = await make_video(unit_env)
        actor_id = str(uuid4())

        # Act
        response = await use_case.execute(
            LikeTargetRequest(
                target_kind="video", target_id=str(video.id), actor_id=actor_id
            )
        )

        # Assert
        assert response.created is True
        assert (await unit_env.get(UnitOfWork)).commits == 1
        assert response.like.target_kind == TargetKind.VIDEO
        assert response.like.target_id == str(video.id)
        assert response.like.liked_by == actor_id

    @pytest.mark.asyncio
    async def test_duplicate_conflicts_by_default(self, unit_env):
        # Arrange
        use_case = await unit_env.get(LikeTargetUseCase)
        tweet = await make_tweet(unit_env)
        request = LikeTargetRequest(
            target_kind="tweet", target_id=str(tweet.id), actor_id=str(uuid4())
        )
        await use_case.execute(request)

        # Act & Assert
        with pytest.raises(ConflictError):
            await use_case.execute(request)
        assert (await unit_env.get(UnitOfWork)).commits == 1

    @pytest.mark.asyncio
    async def test_idempotent_create_returns_existing(self, unit_env):
        """With idempotent create on, a second like returns the first one."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = LikeTargetUseCase(
            like_service=like_service,
            settings=Settings(likes=LikeSettings(idempotent_create=True)),
            unit_of_work=await unit_env.get(UnitOfWork),
        )
        video = await make_video(unit_env)
        request = LikeTargetRequest(
            target_kind="video", target_id=str(video.id), actor_id=str(uuid4())
        )
        first = await use_case.execute(request)

        # Act
        second = await use_case.execute(request)

        # Assert
        assert second.created is False
        assert second.like.like_id == first.like.like_id

    @pytest.mark.asyncio
    async def test_unknown_kind(self, unit_env):
        use_case = await unit_env.get(LikeTargetUseCase)

        with pytest.raises(ValidationError, match="Unknown target kind"):
            await use_case.execute(
                LikeTargetRequest(
                    target_kind="playlist", target_id=str(uuid4()), actor_id=str(uuid4())
                )
            )

    @pytest.mark.asyncio
    async def test_missing_target(self, unit_env):
        use_case = await unit_env.get(LikeTargetUseCase)

        with pytest.raises(TargetNotFoundError):
            await use_case.execute(
                LikeTargetRequest(
                    target_kind="comment", target_id=str(uuid4()), actor_id=str(uuid4())
                )
            )
        assert (await unit_env.get(UnitOfWork)).commits == 0

    @pytest.mark.asyncio
    async def test_deadline_between_insert_and_counter_is_not_committed(self):
        """A like whose counter update times out is left for rollback."""
        # Arrange
        users = InMemoryUserRepository()
        videos = InMemoryVideoRepository()
        comments = SlowCounterCommentRepository(users)
        comment = await comments.save(
            Comment(
                id=CommentId(uuid4()),
                content="Slow",
                parent=VideoRef(id=uuid4()),
                owner_id=UserId(uuid4()),
            )
        )
        unit_of_work = InMemoryUnitOfWork()
        use_case = LikeTargetUseCase(
            like_service=LikeService(
                like_repository=InMemoryLikeRepository(videos, comments, users),
                comment_repository=comments,
                video_repository=videos,
                tweet_repository=InMemoryTweetRepository(),
                default_timeout=0.01,
            ),
            settings=Settings(),
            unit_of_work=unit_of_work,
        )

        # Act & Assert
        with pytest.raises(OperationTimeoutError):
            await use_case.execute(
                LikeTargetRequest(
                    target_kind="comment",
                    target_id=str(comment.id),
                    actor_id=str(uuid4()),
                )
            )
        assert unit_of_work.commits == 0
